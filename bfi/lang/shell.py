"""Handles interactive/command-line mode for bfi. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """bfi interpreter shell."""
    intro = "bfi :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary bfi code against the session's tape."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                self.sess.add(line, self.line_num)
                self.sess.run()
                self.stdout.write("\n")

    def do_tape(self, arg):
        """Shows the cells around the data pointer."""
        tape = self.sess.tape
        first, cells = tape.window()

        indices = " ".join(f"{idx:>3}" for idx in range(first, first + len(cells)))
        values = " ".join(f"{value:>3}" for value in cells)
        marker = " " * (4 * (tape.pointer - first)) + "  ^"

        self.stdout.write(f"{indices}\n{values}\n{marker}\n")

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        self.stdout.write("Welcome to bfi!\n\n"
                          "Every line you type is run on the same tape, which starts out as zeros. The\n"
                          "instructions are > < (move), + - (add, subtract), . , (output, input) and\n"
                          "[ ] (loop while the current cell is not zero). Everything else is a comment.\n"
                          "Lines with unclosed loops continue on the next line.\n\n"
                          "Try '++++++++[>++++++++<-]>+.' to print 'A', then 'tape' to look at memory.\n")

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
