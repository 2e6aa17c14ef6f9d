import unittest
from io import StringIO

from grass.lang.error import ErrorHandler
from grass.lang.shell import Shell


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.stdout = StringIO()
        self.stderr = StringIO()
        self.shell = Shell(ErrorHandler(stream=self.stderr), stdout=self.stdout)

    def test_runs_line(self):
        self.shell.onecmd("wWWwwww")
        self.assertEqual("w\n", self.stdout.getvalue())

    def test_lines_are_independent(self):
        self.shell.onecmd("wWWwwww")
        self.shell.onecmd("wvWWWwwwwvWWWw")
        self.assertEqual("w\nx\n", self.stdout.getvalue())

    def test_errors_are_not_fatal(self):
        self.shell.onecmd("wvWwwwwwwwwww")
        self.assertIn("error: ", self.stderr.getvalue())
        self.assertEqual("", self.stdout.getvalue())

        self.shell.onecmd("wWWwwww")
        self.assertEqual("w\n", self.stdout.getvalue())

    def test_help(self):
        self.shell.onecmd("help")
        self.assertIn("Welcome to the Grass interpreter!", self.stdout.getvalue())

    def test_exit(self):
        self.assertTrue(self.shell.onecmd("exit"))
        self.assertTrue(self.shell.onecmd("EOF"))

    def test_leading_comment_is_not_a_command(self):
        self.assertFalse(self.shell.onecmd("exit then wWWwwww"))
        self.shell.onecmd("help is not needed: wWWwwww")
        self.assertEqual("w\nw\n", self.stdout.getvalue())

    def test_padded_commands(self):
        self.assertTrue(self.shell.onecmd("  exit  "))
        self.shell.onecmd("?")
        self.assertIn("Welcome to the Grass interpreter!", self.stdout.getvalue())

    def test_emptyline(self):
        self.assertFalse(self.shell.onecmd(""))
        self.assertEqual("", self.stdout.getvalue())


if __name__ == '__main__':
    unittest.main()
