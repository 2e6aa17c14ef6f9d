"""Grass instructions and the term builder that produces them from marker groups.

A group is either an abstraction or a chain of applications:

```
<group>       ::= <abstraction> | <application>+
<abstraction> ::= "w"+ <application>*   ; arity = number of leading "w"s
<application> ::= "W"+ "w"+             ; function index = number of "W"s, argument index = number of "w"s
```

Indices count from the top of the environment, starting at 1. In a chain such as `WWwwWw`, every application after
the first refers to the result of the previous one with its single leading "W".
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from grass.lang.error import MalformedGroupError
from grass.pure.lexical import ARGUMENT, FUNCTION, Marker, render


class Instruction(ABC):
    """Superclass of the two (immutable) Grass instructions."""

    @abstractmethod
    def display(self, indents=0):
        """This method should return a readable, indented rendering of the instruction."""


@dataclass(frozen=True)
class Application(Instruction):
    """Applies the value function_index positions from the top of the environment to the value argument_index
    positions from the top.
    """
    function_index: int
    argument_index: int

    def display(self, indents=0):
        return f"{'    ' * indents}Application(function_index={self.function_index}, " \
               f"argument_index={self.argument_index})"

    def __str__(self):
        return FUNCTION * self.function_index + ARGUMENT * self.argument_index


@dataclass(frozen=True)
class Abstraction(Instruction):
    """Curried function of arity parameters. body is a tuple of Applications."""
    arity: int
    body: tuple = ()

    def display(self, indents=0):
        """Format:
        Abstraction(arity=<arity>, body=[
            Application(...),
            ...
        ])
        """
        result = f"{'    ' * indents}Abstraction(arity={self.arity}"
        if self.body:
            result += ", body=["
            for instruction in self.body:
                result += "\n" + instruction.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __str__(self):
        return ARGUMENT * self.arity + "".join(str(instruction) for instruction in self.body)


def parse_abstraction(group):
    """Returns a single Abstraction from a group starting with an argument marker."""
    arity = 0
    body = ()

    for idx, marker in enumerate(group):
        if marker is Marker.ARGUMENT:
            arity += 1
        elif marker is Marker.FUNCTION:
            body = tuple(parse_application(group[idx:]))
            break
        else:
            raise MalformedGroupError("'{}' has a stray '{}' in an abstraction", (render(group), marker),
                                      start=idx, end=idx + 1)

    return [Abstraction(arity, body)]


def parse_application(group):
    """Returns the chain of Applications encoded by group. A trailing run of function markers with no argument marker
    after it produces nothing.
    """
    applications = []
    fun = 0
    arg = 0

    for idx, marker in enumerate(group):
        if marker is Marker.ARGUMENT:
            arg += 1
        elif marker is Marker.FUNCTION:
            if arg == 0:
                fun += 1
            else:
                applications.append(Application(fun, arg))
                fun = 1
                arg = 0
        else:
            raise MalformedGroupError("'{}' has a stray '{}' in an application", (render(group), marker),
                                      start=idx, end=idx + 1)

    if fun > 0 and arg > 0:
        applications.append(Application(fun, arg))
    return applications


def build(group):
    """Converts one non-empty marker group into its list of Instructions."""
    if not group:
        raise MalformedGroupError("empty group reached the term builder")

    first = group[0]
    if first is Marker.ARGUMENT:
        return parse_abstraction(group)
    elif first is Marker.FUNCTION:
        return parse_application(group)
    raise MalformedGroupError("'{}' cannot start with '{}'", (render(group), first), end=1)
