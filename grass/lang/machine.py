"""The Grass execution engine: a SECD-style machine with three registers.

- code: queue of instructions left to evaluate in the current activation
- env:  environment (persistent value stack) of the current activation
- dump: stack of suspended callers

Calling a closure suspends the caller on the dump. There is no return instruction: once the code queue runs dry, the
top of the environment is handed back to the most recently suspended caller. The machine halts when both the queue
and the dump are empty.
"""

from collections import deque
from dataclasses import dataclass

from grass.lang.environment import Environment
from grass.lang.values import Closure
from grass.pure.term import Abstraction, Application


@dataclass(frozen=True)
class Frame:
    """A suspended activation: the code it had left and its environment."""
    code: tuple
    env: Environment


@dataclass(frozen=True)
class Program:
    """A compiled unit: initial code, environment and dump of a machine."""
    code: tuple
    env: Environment
    dump: tuple

    @property
    def source(self):
        """Canonical Grass text of the program's code."""
        return "v".join(str(instruction) for instruction in self.code)

    def display(self):
        """Readable rendering of every top-level instruction."""
        return "\n".join(instruction.display() for instruction in self.code)


class Machine:
    """Runs a Program against a byte channel."""

    def __init__(self, program, channel):
        self.code = deque(program.code)
        self.env = program.env
        self.dump = list(program.dump)
        self.channel = channel

        self.steps = 0
        self.error_handler = None

    @property
    def halted(self):
        """Whether or not there is nothing left to evaluate or return to."""
        return not self.code and not self.dump

    def push(self, value):
        """Pushes value onto the current environment."""
        self.env = self.env.push(value)

    def call(self, closure, argument):
        """Suspends the current activation and starts closure's body with argument on top of its environment."""
        self.dump.append(Frame(tuple(self.code), self.env))
        self.code = deque(closure.code)
        self.env = closure.env.push(argument)

    def restore(self):
        """Returns the top of the current environment to the most recently suspended activation. Returns whether or
        not there was one.
        """
        if not self.dump:
            return False

        result = self.env.get(1, "<return>")
        frame = self.dump.pop()

        self.code = deque(frame.code)
        self.env = frame.env.push(result)
        return True

    def eval(self, instruction):
        """Evaluates a single instruction in the current activation."""
        if isinstance(instruction, Abstraction):
            if instruction.arity == 1:
                self.push(Closure(instruction.body, self.env))
            else:
                curried = Abstraction(instruction.arity - 1, instruction.body)
                self.push(Closure((curried,), self.env))

        elif isinstance(instruction, Application):
            function = self.env.get(instruction.function_index, instruction)
            argument = self.env.get(instruction.argument_index, instruction)
            function.apply(self, argument)

        else:
            raise TypeError(f"not a Grass instruction: {instruction!r}")

    def step(self):
        """Evaluates the next instruction, or returns from the current activation if there is none. Returns whether
        or not the machine is still running.
        """
        if self.code:
            instruction = self.code.popleft()
            self.steps += 1
            if self.error_handler is not None:
                self.error_handler.register_step(self.steps, instruction)
            self.eval(instruction)
            return True

        if self.restore():
            self.steps += 1
            if self.error_handler is not None:
                self.error_handler.register_step(self.steps, f"<{self.env.top}>", kind="return")
            return True
        return False

    def run(self, error_handler=None):
        """Runs until halted and returns the top of the final environment (None if it is empty). error_handler is the
        current session's error handler, used for tracing.
        """
        self.error_handler = error_handler
        try:
            while self.step():
                pass
        finally:
            self.channel.flush()
            self.error_handler = None

        return self.env.top if len(self.env) else None

    def warn(self, *args, **kwargs):
        """Forwards a runtime warning to the error handler in verbose mode."""
        if self.error_handler is not None and self.error_handler.verbose:
            self.error_handler.warn(*args, **kwargs)
