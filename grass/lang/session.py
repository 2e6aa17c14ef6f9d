"""Session control for Grass: loads source text, compiles it into a Program and runs it on a machine."""

from grass.lang.environment import Environment
from grass.lang.machine import Frame, Machine, Program
from grass.lang.values import CharacterPrimitive, InputPrimitive, OutputPrimitive, SuccessorPrimitive
from grass.lang.error import GenericException
from grass.pure.lexical import ARGUMENT, segment, tokenize
from grass.pure.term import Application, build

DEFAULT_PROGRAM = "wWWwwww"  # prints "w"


class Session:
    """Governs a single Grass program: its source, its compiled Program and the runs made from it."""
    DEFAULT_FILE = "<default>"  # name used when no path is given
    SH_FILE = "<in>"            # name used by the interactive shell

    def __init__(self, error_handler, path=None, source=None):
        """Loads source from path, or uses source as given, or falls back to DEFAULT_PROGRAM."""
        self.error_handler = error_handler

        if path is not None:
            try:
                with open(path, "r", encoding="utf-8", errors="replace") as file:  # only ASCII markers matter
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)
        elif source is None:
            source = DEFAULT_PROGRAM
            path = Session.DEFAULT_FILE
        else:
            path = Session.SH_FILE

        self.path = path      # used for error messages
        self.source = source
        self.error_handler.register_file(path)

        self.program = Session.compile(source)

    @staticmethod
    def compile(source):
        """Compiles Grass source text into a Program. Pure: does not touch any channel."""
        code = []
        for group in segment(tokenize(source)):
            code.extend(build(group))

        env = Environment([
            InputPrimitive(),
            CharacterPrimitive(ord(ARGUMENT)),
            SuccessorPrimitive(),
            OutputPrimitive(),
        ])

        sentinel = Frame((Application(1, 1),), Environment())
        return Program(tuple(code), env, (sentinel,))

    def run(self, channel):
        """Runs a fresh machine for this session's Program on channel. Returns the machine once it has halted."""
        machine = Machine(self.program, channel)
        machine.run(self.error_handler)

        self.error_handler.remove_step(self.path)  # error was not raised
        return machine
