"""Tape (memory) model: a row of unsigned 8-bit cells and a data pointer into it.

The tape is unbounded to the right by default and grows one zero cell at a time. A fixed-size tape can be requested,
in which case moving past its last cell is an error. Moving left of cell 0 is always an error: the tape does not wrap.
"""

from bfi.lang.error import PointerUnderflow, TapeOverflow


class Tape:
    """Byte cells backed by a bytearray, all initialized to zero."""
    INITIAL_CELLS = 30000  # cells allocated up front for an unbounded tape

    def __init__(self, size=None):
        """size is the fixed number of cells, or None for a tape that grows as needed."""
        if size is not None and size < 1:
            raise ValueError(f"tape size must be positive, got {size}")

        self.size = size
        self.cells = bytearray(size if size is not None else Tape.INITIAL_CELLS)
        self.pointer = 0

    @property
    def bounded(self):
        return self.size is not None

    def right(self):
        """Moves the data pointer one cell to the right, growing the tape if it is unbounded."""
        if self.pointer + 1 == len(self.cells):
            if self.bounded:
                raise TapeOverflow(self.size)
            self.cells.append(0)
        self.pointer += 1

    def left(self):
        """Moves the data pointer one cell to the left."""
        if self.pointer == 0:
            raise PointerUnderflow()
        self.pointer -= 1

    def increment(self):
        self.cells[self.pointer] = (self.cells[self.pointer] + 1) % 256

    def decrement(self):
        self.cells[self.pointer] = (self.cells[self.pointer] - 1) % 256

    def read(self):
        """Returns the value of the current cell."""
        return self.cells[self.pointer]

    def write(self, value):
        """Stores value (0-255) in the current cell."""
        self.cells[self.pointer] = value

    def window(self, radius=4):
        """Returns (first index, cell values) of the cells within radius of the data pointer. Used by the shell."""
        first = max(self.pointer - radius, 0)
        return first, list(self.cells[first:self.pointer + radius + 1])

    def __len__(self):
        return len(self.cells)

    def __repr__(self):
        return f"Tape(pointer={self.pointer}, cells={len(self.cells)}, size={self.size})"
