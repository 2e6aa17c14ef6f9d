"""Handles interactive/command-line mode for the Grass interpreter. Uses cmd as backend."""

import cmd

from grass.lang.channel import BufferChannel
from grass.lang.session import Session


class Shell(cmd.Cmd):
    """Grass interpreter shell. Every line is a complete program, run on a fresh machine."""
    intro = "Grass interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "

    def __init__(self, error_handler, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.error_handler = error_handler
        self.error_handler.fatal = False

    def parseline(self, line):
        """Only a line that is exactly a command name is a command. Anything else is a program, so a leading comment
        such as 'exit then wWWwwww' runs instead of exiting.
        """
        if line.strip() in ("help", "?", "exit", "EOF"):
            return super().parseline(line.strip())
        return None, None, line

    def default(self, line):
        """Compiles and runs line, then prints whatever it wrote."""
        with self.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            sess = Session(self.error_handler, source=line)
            channel = BufferChannel()  # the shell owns stdin, so programs always see end of input
            sess.run(channel)

            self.stdout.write(channel.output.decode("latin-1") + "\n")

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        self.stdout.write(
            "Welcome to the Grass interpreter!\n\n"
            "Grass programs are made of 'w', 'W' and 'v'; everything else (and everything \n"
            "before the first 'w') is a comment. 'w's after a 'v' start a function, 'W's \n"
            "followed by 'w's apply one, and 'v' separates definitions.\n\n"
            "Try it out by typing 'wWWwwww'. This applies Out to the character 'w', \n"
            "printing 'w' as the result.\n")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        self.stdout.write("\n")
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
