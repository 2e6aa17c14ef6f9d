"""Lexical analysis for Grass source text: markers and marker groups.

The `pure` directory contains everything needed to turn raw text into instructions- it knows nothing about the
running machine.

Grass has exactly three meaningful characters:

```
<argument>  ::= "w"     ; counts arguments (arity of an abstraction, argument index of an application)
<function>  ::= "W"     ; counts function indices of an application
<separator> ::= "v"     ; ends a group
<comment>   ::= <char>* ; everything else, and everything before the first "w"
```

Source: http://www.blue.sky.or.jp/grass/
"""

from enum import Enum

ARGUMENT = "w"
FUNCTION = "W"
SEPARATOR = "v"


class Marker(Enum):
    """One of the three tokens recognized in Grass source."""
    ARGUMENT = ARGUMENT
    FUNCTION = FUNCTION
    SEPARATOR = SEPARATOR

    def __str__(self):
        return self.value


def tokenize(source):
    """Returns the list of Markers in source. Nothing is kept until the first argument marker has been seen, so any
    leading text (including stray "W" and "v") works as a comment header.
    """
    markers = []
    found_argument = False

    for char in source:
        try:
            marker = Marker(char)
        except ValueError:
            continue  # not a marker

        found_argument = found_argument or marker is Marker.ARGUMENT
        if found_argument:
            markers.append(marker)

    return markers


def segment(markers):
    """Splits markers on separators into a list of non-empty groups (lists of Markers). Separators are dropped."""
    groups = []
    current = []

    for marker in markers:
        if marker is Marker.SEPARATOR:
            if current:
                groups.append(current)
            current = []
        else:
            current.append(marker)

    if current:
        groups.append(current)
    return groups


def render(markers):
    """Returns markers as Grass text. Used for error messages."""
    return "".join(str(marker) for marker in markers)
