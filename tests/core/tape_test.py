import unittest

from bfi.core.tape import Tape
from bfi.lang.error import PointerUnderflow, TapeOverflow


class TapeTestCase(unittest.TestCase):

    def test_initial_state(self):
        tape = Tape()
        self.assertEqual(0, tape.pointer)
        self.assertEqual(Tape.INITIAL_CELLS, len(tape))
        self.assertFalse(any(tape.cells))

        self.assertEqual(5, len(Tape(5)))
        for size in [0, -3]:
            self.assertRaises(ValueError, Tape, size)

    def test_wrapping(self):
        tape = Tape()
        tape.decrement()
        self.assertEqual(255, tape.read())
        tape.increment()
        self.assertEqual(0, tape.read())

        tape.write(255)
        tape.increment()
        self.assertEqual(0, tape.read())

    def test_left(self):
        tape = Tape()
        tape.right()
        tape.left()
        self.assertEqual(0, tape.pointer)

        self.assertRaises(PointerUnderflow, tape.left)
        self.assertEqual(0, tape.pointer)

    def test_right_unbounded(self):
        tape = Tape()
        for _ in range(Tape.INITIAL_CELLS + 10):
            tape.right()
        tape.increment()

        self.assertEqual(Tape.INITIAL_CELLS + 10, tape.pointer)
        self.assertEqual(Tape.INITIAL_CELLS + 11, len(tape))
        self.assertEqual(1, tape.read())

    def test_right_bounded(self):
        tape = Tape(3)
        tape.right()
        tape.right()
        self.assertEqual(2, tape.pointer)

        with self.assertRaises(TapeOverflow) as context:
            tape.right()
        self.assertEqual(3, context.exception.size)
        self.assertEqual(2, tape.pointer)
        self.assertEqual(3, len(tape))

    def test_window(self):
        tape = Tape()
        tape.write(7)
        self.assertEqual((0, [7, 0, 0, 0, 0]), tape.window())

        for _ in range(10):
            tape.right()
        first, cells = tape.window(2)
        self.assertEqual(8, first)
        self.assertEqual(5, len(cells))


if __name__ == '__main__':
    unittest.main()
