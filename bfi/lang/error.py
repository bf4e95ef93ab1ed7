"""Error handling for bfi. Only GenericExceptions should be encountered during running: if another type of error is
raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Interpreter errors (ExecutionError and its subclasses) carry the source position of the offending instruction, so that
ErrorHandler can point at it.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a bfi error/warning."""

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException or warning."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class ExecutionError(GenericException):
    """Base class for errors raised while loading or running a program. position is the source offset of the offending
    instruction; call locate to attach the offending line for diagnosis.
    """

    def __init__(self, msg, exprs=None, position=None):
        super().__init__(msg, exprs, diagnosis=False)
        self.position = position
        self.line_num = None
        self.col = None

    def locate(self, program, position=None):
        """Attaches the line of program containing position (defaults to self.position) to this error. Returns self."""
        if position is not None:
            self.position = position

        self.expr, self.line_num, self.col = program.locate(self.position)
        self.start = self.col
        self.end = self.col + 1
        self.diagnosis = True
        return self


class MismatchedBracket(ExecutionError):
    """Raised at load time when a '[' or ']' has no partner."""

    def __init__(self, bracket, position):
        super().__init__("unmatched '{}'", bracket, position)
        self.bracket = bracket


class PointerUnderflow(ExecutionError):
    """Raised when the data pointer would move below cell 0."""

    def __init__(self, position=None):
        super().__init__("data pointer moved below cell {}", "0", position)


class TapeOverflow(ExecutionError):
    """Raised when the data pointer would move past the end of a fixed-size tape."""

    def __init__(self, size, position=None):
        super().__init__("data pointer moved past the end of the tape ({} cells)", str(size), position)
        self.size = size


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom bfi errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream  # defaults to sys.stderr at print time, so that it can be patched
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path."""
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

    def _print(self, msg):
        print(msg, file=self.stream if self.stream is not None else sys.stderr)

    def _header(self, error):
        """Returns 'file:line:col: ' for error, or as much of it as is known."""
        file = next(iter(self.traceback), None)
        if file is None:
            return ""

        line_num = getattr(error, "line_num", None)
        if line_num is None:
            __, line_num = self.traceback[file]
        if line_num is None:
            return colored(f"{file}: ", attrs=["bold"])

        col = getattr(error, "col", None)
        if col is None:
            return colored(f"{file}:{line_num}: ", attrs=["bold"])
        return colored(f"{file}:{line_num}:{col + 1}: ", attrs=["bold"])

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)

        error_msg = self._header(error)
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg
        self._print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            self._print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException. Exits with status 1 if this
        handler is fatal.
        """
        error_msg = self._header(error)

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        self._print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            self._print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.remove_line(path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is None:
            return False
        elif issubclass(exc_type, KeyboardInterrupt):
            self.throw(GenericException("keyboard interrupt"))
        elif issubclass(exc_type, SystemExit):
            do_exit = True
        elif issubclass(exc_type, BrokenPipeError):
            self.throw(GenericException("output stream closed", diagnosis=False))
        elif issubclass(exc_type, GenericException):
            self.throw(exc_val)
        else:
            detail = str(exc_val).replace("{", "{{").replace("}", "}}")
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {detail}'", internal=True))
            do_exit = True

        return not do_exit
