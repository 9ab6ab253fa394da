"""Errors raised by the stream parser."""


class StreamParseError(ValueError):
    """
    Base class for grammar failures.

    Args:
        message: What went wrong.
        text: The full text being parsed.
        offset: Character index of the failure within `text`.
    """

    kind = "parse_error"

    def __init__(self, message: str, text: str, offset: int):
        self.message = message
        self.text = text
        self.offset = offset
        super().__init__(self._describe())

    @property
    def line(self) -> int:
        """1-based line number of the failure."""
        return self.text.count("\n", 0, self.offset) + 1

    @property
    def column(self) -> int:
        """1-based column of the failure."""
        return self.offset - (self.text.rfind("\n", 0, self.offset) + 1) + 1

    def excerpt(self, width: int = 20) -> str:
        return self.text[self.offset:self.offset + width]

    def _describe(self) -> str:
        return (f"{self.kind} at line {self.line}, column {self.column} "
                f"(offset {self.offset}): {self.message} near {self.excerpt()!r}")


class UnterminatedUnit(StreamParseError):
    """An opening `^`, `{` or `[` was consumed but its closer never followed."""
    kind = "unterminated_unit"


class InvalidEscape(StreamParseError):
    """A backslash was followed by something other than a reserved character."""
    kind = "invalid_escape"


class NoMatch(StreamParseError):
    """No top-level alternative matches at this position."""
    kind = "no_match"
