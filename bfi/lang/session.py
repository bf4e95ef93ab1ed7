"""Session control for bfi. Loads programs and runs them, either in file interpretation mode or in command-line mode,
where a single tape is kept across entries.
"""

from bfi.core.machine import Interpreter
from bfi.core.program import Program
from bfi.core.tape import Tape
from bfi.lang.error import GenericException


class Session:
    """Governs a bfi session: the loaded program(s), the streams they talk to and, in command-line mode, the tape."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, stdin=None, stdout=None, tape_size=None, cmd_line=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path            # used for error messages
        self.stdin = stdin
        self.stdout = stdout
        self.tape_size = tape_size
        self.cmd_line = cmd_line    # whether or not in command-line mode

        self.program = None      # last loaded Program
        self.interpreter = None  # last Interpreter run
        self.tape = Tape(tape_size) if cmd_line else None  # persistent tape in command-line mode

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r", encoding="utf-8") as file:
                    source = file.read()
            except (OSError, UnicodeDecodeError):
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            self.add(source)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename", diagnosis=False)

    @staticmethod
    def preprocess_line(line, pending=""):
        """Joins line onto pending (a previously entered, unfinished line). Returns the joined line and whether or not
        more input is needed before it can be run, i.e. whether it still has open loops.
        """
        if pending:
            line = pending + "\n" + line
        return line, line.count("[") > line.count("]")

    def add(self, source, line_num=None):
        """Loads source as this session's program. Brackets are matched here, so a MismatchedBracket is raised before
        anything runs.
        """
        if line_num is not None:
            self.error_handler.register_line(self.path, source, line_num)  # in case error is raised

        self.program = Program(source)
        if not self.program.instructions and not self.cmd_line:
            self.error_handler.warn("'{}' contains no instructions", self.path, diagnosis=False)

        if line_num is not None:
            self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Runs the loaded program. In file mode every run starts from a fresh tape; in command-line mode the session's
        tape carries over. Will raise any errors that are encountered.
        """
        if self.program is None:
            raise GenericException("no program loaded", internal=True)

        tape = self.tape if self.cmd_line else Tape(self.tape_size)
        self.interpreter = Interpreter(self.program, tape, self.stdin, self.stdout)
        return self.interpreter.run()
