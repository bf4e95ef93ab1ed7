import io
import os
import tempfile
import unittest

from bfi.core.machine import State
from bfi.lang.error import ErrorHandler, GenericException, MismatchedBracket, PointerUnderflow
from bfi.lang.session import Session


class SessionTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.stream = io.StringIO()
        self.error_handler = ErrorHandler(stream=self.stream)
        self.stdout = io.BytesIO()

    def tearDown(self):
        self.tmp_dir.cleanup()

    def write(self, source, name="prog.bf"):
        path = os.path.join(self.tmp_dir.name, name)
        with open(path, "w", encoding="utf-8") as file:
            file.write(source)
        return path

    def session(self, path, stdin=b"", **kwargs):
        return Session(self.error_handler, path, io.BytesIO(stdin), self.stdout, **kwargs)

    def test_run_file(self):
        sess = self.session(self.write("read a byte ,\nadd two ++\nprint it .\n"), b"A")
        interpreter = sess.run()

        self.assertIs(State.HALTED, interpreter.state)
        self.assertEqual(b"C", self.stdout.getvalue())

    def test_fresh_tape(self):
        sess = self.session(self.write("+."))
        sess.run()
        sess.run()
        self.assertEqual(b"\x01\x01", self.stdout.getvalue())

    def test_missing_file(self):
        with self.assertRaises(GenericException) as context:
            self.session(os.path.join(self.tmp_dir.name, "missing.bf"))
        self.assertIn("could not be opened", context.exception.msg)

    def test_reserved_filename(self):
        self.assertRaises(GenericException, self.session, Session.SH_FILE)

    def test_load_error(self):
        path = self.write("+++\n[.\n")
        with self.assertRaises(MismatchedBracket) as context:
            self.session(path)

        self.assertEqual(4, context.exception.position)
        self.assertEqual(2, context.exception.line_num)

    def test_runtime_error(self):
        sess = self.session(self.write(".<"), tape_size=10)
        self.assertRaises(PointerUnderflow, sess.run)
        self.assertEqual(b"\x00", self.stdout.getvalue())
        self.assertIs(State.FAILED, sess.interpreter.state)

    def test_empty_program(self):
        self.session(self.write("nothing to see here"))
        output = self.stream.getvalue()
        self.assertIn("warning: ", output)
        self.assertIn("contains no instructions", output)

    def test_cmd_line(self):
        sess = self.session(Session.SH_FILE, cmd_line=True)
        self.assertFalse(self.error_handler.fatal)

        for line_num, line in enumerate(["+++>", "+<", "."], 1):
            sess.add(line, line_num)
            sess.run()

        self.assertEqual(b"\x03", self.stdout.getvalue())
        self.assertEqual([3, 1], list(sess.tape.cells[:2]))

    def test_preprocess_line(self):
        cases = {
            ("+.", ""): ("+.", False),
            ("+[", ""): ("+[", True),
            ("-]", "+["): ("+[\n-]", False),
            ("[>", "+["): ("+[\n[>", True),
            ("]]", "[["): ("[[\n]]", False),
        }
        for (line, pending), result in cases.items():
            self.assertEqual(result, Session.preprocess_line(line, pending))


if __name__ == '__main__':
    unittest.main()
