"""Program representation: the raw source plus its bracket map.

Formally, a program can be defined as

```
<program>     ::= <item>*
<item>        ::= ">" | "<" | "+" | "-" | "." | ","   ; single instructions
                | "[" <item>* "]"                     ; loop: body is skipped while the current cell is zero
                | <char>                              ; any other character is a comment
```

The bracket map is not a tree: it is a flat list with one entry per source position, holding the position of the
matching bracket (or None). Jumps are plain index assignments into the source.
"""

from bfi.lang.error import MismatchedBracket


class Program:
    """An immutable program. Brackets are matched on construction, so an unbalanced source never gets to run."""
    INSTRUCTIONS = "><+-.,[]"

    def __init__(self, source):
        self.source = source
        try:
            self.jumps = Program.match_brackets(source)
        except MismatchedBracket as error:
            error.locate(self)
            raise

    @staticmethod
    def match_brackets(source):
        """Returns the bracket map of source by a single forward scan with a stack of open '[' positions. Raises
        MismatchedBracket at the stray ']' or, if brackets are left open, at the earliest unclosed '['.
        """
        jumps = [None] * len(source)
        stack = []

        for idx, char in enumerate(source):
            if char == "[":
                stack.append(idx)
            elif char == "]":
                if not stack:
                    raise MismatchedBracket("]", idx)
                start = stack.pop()
                jumps[start] = idx
                jumps[idx] = start

        if stack:
            raise MismatchedBracket("[", stack[0])

        return jumps

    @property
    def instructions(self):
        """Source with comments stripped."""
        return "".join(char for char in self.source if char in Program.INSTRUCTIONS)

    def locate(self, position):
        """Returns (line, line_num, col) of position in source: the text of the containing line, its 1-based number
        and the 0-based column.
        """
        line_start = self.source.rfind("\n", 0, position) + 1
        line_end = self.source.find("\n", position)
        if line_end == -1:
            line_end = len(self.source)

        line_num = self.source.count("\n", 0, position) + 1
        return self.source[line_start:line_end], line_num, position - line_start

    def __len__(self):
        return len(self.source)

    def __repr__(self):
        return f"Program('{self.instructions}')"

    def __eq__(self, other):
        return isinstance(other, Program) and self.source == other.source
