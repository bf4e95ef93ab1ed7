"""Command-line entry point: runs a program file, or starts the interactive shell when no file is given. Also uses the
error handling context manager. Called from the bfi console script and from `python -m bfi`.
"""

import argparse
import sys

from bfi.lang.error import ErrorHandler
from bfi.lang.session import Session
from bfi.lang.shell import Shell


def tape_size(value):
    """argparse type for --tape-size: a positive number of cells."""
    try:
        size = int(value)
        assert size > 0
    except (AssertionError, ValueError):
        raise argparse.ArgumentTypeError(f"expected a positive number of cells, got '{value}'")
    return size


def main(argv=None):
    """Runs bfi. Exits with status 0 once the program halts and 1 on any error."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="bfi", description="Runs programs written in the eight-instruction "
                                                                 "tape language.")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--tape-size", type=tape_size, default=None, metavar="N",
                            help="use a fixed tape of N cells (default: unbounded)")
        args = parser.parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, sys.stdin.buffer, sys.stdout.buffer, tape_size=args.tape_size)
            sess.run()

        else:
            sess = Session(error_handler, Session.SH_FILE, sys.stdin.buffer, sys.stdout.buffer,
                           tape_size=args.tape_size, cmd_line=True)
            Shell(sess).cmdloop()
