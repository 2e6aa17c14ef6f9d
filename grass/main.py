"""Runs Grass programs from a file, runs the built-in default program, or starts command-line mode. Also uses the
error handling context manager. Installed as the `grass` executable.

Basic program flow:
    1. Lexer/segmenter: keeps only "w", "W" and "v" (after the first "w") and splits on "v" (see grass/pure/lexical.py)
    2. Term builder: turns each group into an abstraction or a chain of applications (see grass/pure/term.py)
    3. Assembler: bundles the instructions with the four primitives and the sentinel frame (see grass/lang/session.py)
    4. Machine: evaluates the program until both its code and dump are empty (see grass/lang/machine.py)
"""

import argparse

from grass.lang.channel import StdioChannel
from grass.lang.error import ErrorHandler
from grass.lang.session import Session
from grass.lang.shell import Shell


def main(argv=None):
    """Runs grass interpreter. Called from grass executable script."""
    parser = argparse.ArgumentParser(prog="grass", description="Grass interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, runs the default program)", nargs="?")
    parser.add_argument("-i", "--interactive", help="go to command-line mode", action="store_true")
    parser.add_argument("-c", "--compile", help="only print the compiled program", action="store_true")
    parser.add_argument("-v", "--verbose", help="trace every machine step on stderr", action="store_true")
    args = parser.parse_args(argv)

    with ErrorHandler(verbose=args.verbose) as error_handler:
        if args.interactive:
            Shell(error_handler).cmdloop()
            return

        sess = Session(error_handler, args.file)

        if args.compile:
            print(sess.program.display())
        else:
            sess.run(StdioChannel())


if __name__ == "__main__":
    main()
