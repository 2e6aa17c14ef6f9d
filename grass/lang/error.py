"""Error handling for Grass. Only GenericExceptions (and subclasses) should be encountered during running: if another
type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

All diagnostics are printed to stderr, since stdout is the byte output channel of the running program.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a Grass error/warning."""

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException or warning. exprs[0] should be the offending Grass text."""
        if exprs is None:
            exprs = ""
        if not isinstance(exprs, (list, tuple)):
            exprs = [exprs]

        self.msg = msg.format(*(colored(str(expr), attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = str(exprs[0])
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(msg.format(*exprs))


class MalformedGroupError(GenericException):
    """A marker group contains a marker where the grammar forbids one. Never raised for segmented input."""

    def __init__(self, msg, exprs=None, start=0, end=-1):
        super().__init__(msg, exprs, start, end, internal=True)


class IndexRangeError(GenericException):
    """An application refers past the bottom of the current environment."""


class TypeMismatchError(GenericException):
    """A byte-consuming primitive was applied to a value that carries no byte."""


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom Grass errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"
    TRACE = "cyan"

    def __init__(self, fatal=True, verbose=False, stream=None):
        self.fatal = fatal
        self.verbose = verbose
        self.stream = stream
        self.traceback = {}

    def _print(self, msg):
        print(msg, file=self.stream if self.stream is not None else sys.stderr)

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_step(self, step, expr, kind="eval"):
        """Registers the instruction being evaluated at step for the most recently registered file. Prints a trace
        line in verbose mode.
        """
        if self.traceback:
            path = next(reversed(self.traceback))
            self.traceback[path] = (expr, step)

        if self.verbose:
            self._print(colored(f"step {step}: ", ErrorHandler.TRACE) + f"{kind} {expr}")

    def remove_step(self, path):
        """Removes step from traceback given path. Should be called after a successful run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)

        error_msg = ""
        if self.traceback:
            path, (__, step) = next(reversed(self.traceback.items()))
            error_msg += colored(f"{path}:{step}: " if step is not None else f"{path}: ", attrs=["bold"])
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg

        self._print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            self._print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (instruction, step) representing origination of error.
        """
        error_msg = ""
        for path, (expr, step) in self.traceback.items():  # assumes dict is insertion-ordered
            if expr:
                error_msg += f"  File '{path}', step {step}:\n"
                error_msg += f"    {expr}\n"

        if error_msg:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        self._print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            self._print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}  # reset traceback (no need if fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
