import unittest
from io import StringIO

from grass.lang.error import ErrorHandler, GenericException, IndexRangeError, MalformedGroupError


class GenericExceptionTestCase(unittest.TestCase):

    def test_args(self):
        error = GenericException("'{}' refers to position {}", ("Wwwwwww", 6), start=1)
        self.assertEqual("Wwwwwww", error.expr)
        self.assertEqual(1, error.start)
        self.assertEqual(7, error.end)
        self.assertEqual("'Wwwwwww' refers to position 6", str(error))

    def test_internal(self):
        self.assertTrue(MalformedGroupError("'{}' is malformed", "wv").internal)
        self.assertFalse(IndexRangeError("'{}' is out of range", "Ww").internal)


class ErrorHandlerTestCase(unittest.TestCase):

    def test_fatal(self):
        stream = StringIO()
        with self.assertRaises(SystemExit) as context:
            with ErrorHandler(stream=stream):
                raise IndexRangeError("'{}' is out of range", "WWWw")
        self.assertEqual(1, context.exception.code)
        self.assertIn("error: ", stream.getvalue())
        self.assertIn("out of range", stream.getvalue())

    def test_non_fatal(self):
        stream = StringIO()
        with ErrorHandler(fatal=False, stream=stream):
            raise GenericException("'{}' could not be opened", "missing.grass", diagnosis=False)
        self.assertIn("could not be opened", stream.getvalue())

    def test_traceback(self):
        stream = StringIO()
        error_handler = ErrorHandler(fatal=False, stream=stream)
        error_handler.register_file("prog.grass")
        error_handler.register_step(3, "WWwww")

        with error_handler:
            raise IndexRangeError("'{}' is out of range", "WWwww")

        output = stream.getvalue()
        self.assertIn("File 'prog.grass', step 3:", output)
        self.assertIn("    WWwww", output)
        self.assertEqual({"prog.grass": (None, None)}, error_handler.traceback)

    def test_unknown_error_is_reraised(self):
        stream = StringIO()
        with self.assertRaises(ZeroDivisionError):
            with ErrorHandler(fatal=False, stream=stream):
                1 / 0
        self.assertIn("[internal]", stream.getvalue())
        self.assertIn("ZeroDivisionError", stream.getvalue())

    def test_verbose_steps(self):
        stream = StringIO()
        error_handler = ErrorHandler(verbose=True, stream=stream)
        error_handler.register_step(1, "wWw")
        self.assertIn("eval wWw", stream.getvalue())

        quiet = StringIO()
        ErrorHandler(stream=quiet).register_step(1, "wWw")
        self.assertEqual("", quiet.getvalue())

    def test_diagnose(self):
        error = GenericException("'{}' bad", "wWWw", start=1, end=3)
        diagnosis = ErrorHandler.diagnose(error)
        self.assertIn("^", diagnosis)
        self.assertIn("~", diagnosis)


if __name__ == '__main__':
    unittest.main()
