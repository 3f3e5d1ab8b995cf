import enum


class ErrorKind(enum.Enum):
    """Why a line was rejected. The value is the message shown to users."""

    UNCLOSED_QUOTE = "unclosed quote"
    INVALID_QUOTE_POSITION = "invalid quote position"
    INVALID_SESSION_NAME_FORMAT = "invalid session name format"
    INVALID_ASSIGNMENT = "invalid assignment"
    EXTRA_KEY_OR_VALUE = "extra key or value found"


class SessiniError(Exception):
    pass


class SourceError(SessiniError):
    """The line source failed to produce a line.

    The underlying exception is available as __cause__.
    """


class ParseError(SessiniError, ValueError):
    """A line could not be parsed.

    Attributes:
        lineno: The 1-based line number.
        kind: Why the line was rejected.
        line: The offending line, without its newline.
    """

    lineno: int
    kind: ErrorKind
    line: str

    def __init__(self, lineno: int, kind: ErrorKind, line: str):
        self.lineno = lineno
        self.kind = kind
        self.line = line

        super().__init__(f"parse error, line {lineno}, {kind.value}")
