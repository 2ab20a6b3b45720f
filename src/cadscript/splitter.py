"""
Top-level field splitting for command arguments.

Splits the text between a command's outer parentheses into comma-separated
fields. Commas nested inside brackets/parentheses or inside a double-quoted
string do not split, so ``position=[1,2,3], color=RGB(1,2,3)`` yields two
fields. Unbalanced brackets are not an error at this stage; the value parser
rejects whatever malformed literal results.
"""

from typing import List, Tuple

from .errors import error_invalid_parameter


class FieldSplitter:
    """
    Character scanner over an argument string.

    Usage:
        fields = FieldSplitter('width=5, position=[1,2,3]').split()
    """

    OPENERS = "[("
    CLOSERS = "])"

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.bracket_depth = 0  # Count of [ and ( nesting, may go negative
        self.in_quotes = False

    def _is_escaped(self) -> bool:
        """Check if the current character is preceded by a backslash."""
        return self.pos > 0 and self.source[self.pos - 1] == "\\"

    def split(self) -> List[str]:
        """Return the trimmed top-level fields."""
        fields: List[str] = []
        current: List[str] = []

        while self.pos < len(self.source):
            ch = self.source[self.pos]

            if ch == '"' and not self._is_escaped():
                self.in_quotes = not self.in_quotes
            elif not self.in_quotes:
                if ch in self.OPENERS:
                    self.bracket_depth += 1
                elif ch in self.CLOSERS:
                    self.bracket_depth -= 1
                elif ch == "," and self.bracket_depth == 0:
                    fields.append("".join(current).strip())
                    current = []
                    self.pos += 1
                    continue

            current.append(ch)
            self.pos += 1

        # A blank trailing field (e.g. "a=1,") is dropped
        last = "".join(current).strip()
        if last:
            fields.append(last)
        return fields


def split_fields(source: str) -> List[str]:
    """Split an argument string into its top-level fields."""
    return FieldSplitter(source).split()


def split_assignment(field: str) -> Tuple[str, str]:
    """
    Split a ``name=value`` field into its trimmed name and value.

    Exactly one '=' is required and the name must not be empty; anything else
    raises ScriptSyntaxError.
    """
    parts = field.split("=")
    if len(parts) != 2:
        raise error_invalid_parameter(field)
    name, value = parts[0].strip(), parts[1].strip()
    if not name:
        raise error_invalid_parameter(field)
    return name, value
