"""Runtime values of the Grass machine: closures and the four built-in primitives.

Every value is immutable and can be applied to another value. Applying a value changes the machine: most values push
a result onto the current environment, while a Closure suspends the caller and starts running its own body.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from grass.lang.environment import Environment
from grass.lang.error import TypeMismatchError
from grass.pure.term import Abstraction, Application


class Value(ABC):
    """Superclass of all runtime values."""

    @property
    def byte(self):
        """The byte this value carries, or None if it carries none."""
        return None

    @abstractmethod
    def apply(self, machine, argument):
        """Applies this value to argument on machine."""

    def require_byte(self, primitive):
        """Returns self.byte, raising a TypeMismatchError naming primitive if there is none."""
        if self.byte is None:
            raise TypeMismatchError("'{}' expects a character, got '{}'", (primitive, self), diagnosis=False)
        return self.byte


@dataclass(frozen=True)
class Closure(Value):
    """Code paired with a snapshot of the environment it was created in."""
    code: tuple
    env: Environment

    def apply(self, machine, argument):
        machine.call(self, argument)

    def __str__(self):
        return f"<closure {'v'.join(str(instruction) for instruction in self.code) or '[]'}>"


@dataclass(frozen=True)
class CharacterPrimitive(Value):
    """A single byte. Applied to another value, it tests the two for equality and returns a Church boolean."""
    char: int

    @property
    def byte(self):
        return self.char

    def apply(self, machine, argument):
        machine.push(church_boolean(self.char == argument.byte))

    def __str__(self):
        return repr(chr(self.char))


class Primitive(Value):
    """Stateless built-in. All instances of a primitive class are interchangeable."""
    name = ""

    def __eq__(self, other):
        return type(self) is type(other)

    def __hash__(self):
        return hash(type(self))

    def __repr__(self):
        return f"{type(self).__name__}()"

    def __str__(self):
        return f"<{self.name}>"


class InputPrimitive(Primitive):
    """Reads a byte from the input channel. At end of input, returns its argument unchanged."""
    name = "In"

    def apply(self, machine, argument):
        char = machine.channel.read_byte()
        if char is None:
            machine.warn("end of input reached, '{}' passed through", argument, diagnosis=False)
            machine.push(argument)
        else:
            machine.push(CharacterPrimitive(char))


class OutputPrimitive(Primitive):
    """Writes its argument's byte to the output channel and returns the argument."""
    name = "Out"

    def apply(self, machine, argument):
        machine.channel.write_byte(argument.require_byte(self))
        machine.push(argument)


class SuccessorPrimitive(Primitive):
    """Returns the character following its argument's byte, wrapping 255 around to 0."""
    name = "Succ"

    def apply(self, machine, argument):
        machine.push(CharacterPrimitive((argument.require_byte(self) + 1) % 256))


def church_true():
    """λx.λy.x: the inner closure keeps an identity closure and x, and applies the former to the latter."""
    identity = Closure((), Environment())
    return Closure((Abstraction(1, (Application(3, 2),)),), Environment().push(identity))


def church_false():
    """λx.λy.y: the inner closure does nothing, so it returns its own argument."""
    return Closure((Abstraction(1),), Environment())


def church_boolean(condition):
    """Returns a fresh Church boolean for condition."""
    return church_true() if condition else church_false()
