"""Interpreter engine. Basic program flow:
    1. Load: the source is wrapped in a Program, which matches brackets (see program.py). Unbalanced brackets fail here,
       before any instruction runs.
    2. Run: a single dispatch loop walks the source one character at a time, acting on the tape (see tape.py) and on
       the injected byte streams.

Not a compiler: there are no optimization passes, every instruction is dispatched as it appears in the source.

I/O conventions:
- '.' writes the current cell as a single byte.
- ',' reads a single byte into the current cell. At end of input the cell is left unchanged.
"""

import enum
import sys

from bfi.core.program import Program
from bfi.core.tape import Tape
from bfi.lang.error import ExecutionError


class State(enum.Enum):
    RUNNING = "running"
    HALTED = "halted"
    FAILED = "failed"


class Interpreter:
    """Runs a single Program. stdin/stdout are binary streams (anything with read(1) and write(bytes)); they default to
    the process's standard streams.
    """

    def __init__(self, program, tape=None, stdin=None, stdout=None):
        if not isinstance(program, Program):
            program = Program(program)

        self.program = program
        self.tape = tape if tape is not None else Tape()
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer

        self.ip = 0
        self.state = None
        self.error = None

    def run(self):
        """Executes the program from its first instruction until the instruction pointer runs off the end. Raises the
        first error encountered, located at the offending instruction; output written before the error is kept.
        """
        self.ip = 0
        self.error = None
        self.state = State.RUNNING

        try:
            while self.ip < len(self.program):
                self.dispatch(self.program.source[self.ip])
                self.ip += 1
        except ExecutionError as error:
            self.fail(error.locate(self.program, self.ip))
            raise
        except Exception as error:
            self.fail(error)
            raise
        finally:
            self.stdout.flush()

        self.state = State.HALTED
        return self

    def dispatch(self, char):
        """Executes the instruction char at self.ip. Jumps set self.ip to the matching bracket; run advances past it."""
        tape = self.tape

        if char == ">":
            tape.right()
        elif char == "<":
            tape.left()
        elif char == "+":
            tape.increment()
        elif char == "-":
            tape.decrement()
        elif char == ".":
            self.stdout.write(bytes((tape.read(),)))
        elif char == ",":
            self.stdout.flush()  # make any prompt visible before blocking on input
            data = self.stdin.read(1)
            if data:
                tape.write(data[0])
        elif char == "[":
            if tape.read() == 0:
                self.ip = self.program.jumps[self.ip]
        elif char == "]":
            if tape.read() != 0:
                self.ip = self.program.jumps[self.ip]

    def fail(self, error):
        self.state = State.FAILED
        self.error = error

    @property
    def halted(self):
        return self.state is State.HALTED


def run(program, stdin=None, stdout=None, tape_size=None):
    """Loads and runs program on a fresh tape. Returns the halted Interpreter, or raises an ExecutionError
    (MismatchedBracket before anything runs, PointerUnderflow/TapeOverflow during the run).
    """
    interpreter = Interpreter(program, Tape(tape_size), stdin, stdout)
    return interpreter.run()
