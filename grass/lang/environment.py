"""Persistent value stack used as the Grass machine's environment.

Pushing returns a new Environment sharing everything below the new top, so a closure can keep the environment it was
created in without copying it, and later pushes never show up in that snapshot.
"""

from grass.lang.error import IndexRangeError


class Environment:
    """Immutable linked stack of values, indexed from the top starting at 1."""
    __slots__ = ("_value", "_below", "_size")

    def __init__(self, values=()):
        """Builds an environment from values, listed bottom to top."""
        self._value = None
        self._below = None
        self._size = 0

        for value in values:
            self._value, self._below, self._size = value, self._copy(), self._size + 1

    def _copy(self):
        env = Environment()
        env._value, env._below, env._size = self._value, self._below, self._size
        return env

    def push(self, value):
        """Returns a new environment with value on top."""
        env = Environment()
        env._value, env._below, env._size = value, self, self._size + 1
        return env

    def get(self, idx, expr=""):
        """Returns the value idx positions from the top (1 is the top). expr is the offending instruction, used for
        error messages.
        """
        if not 1 <= idx <= self._size:
            raise IndexRangeError("'{}' refers to position {} of an environment of size {}",
                                  (expr, idx, self._size))

        env = self
        for __ in range(idx - 1):
            env = env._below
        return env._value

    @property
    def top(self):
        """The most recently pushed value."""
        return self.get(1)

    def __len__(self):
        return self._size

    def __iter__(self):
        """Iterates from bottom to top."""
        values = []
        env = self
        while env._size:
            values.append(env._value)
            env = env._below
        return reversed(values)

    def __eq__(self, other):
        return isinstance(other, Environment) and len(self) == len(other) and list(self) == list(other)

    def __hash__(self):
        return hash(tuple(self))

    def __repr__(self):
        return f"Environment([{', '.join(str(value) for value in self)}])"
