import dataclasses
import enum
import io
import logging
import pathlib
from collections.abc import Iterable

from .document import Document, Session
from .encoding import detect_encoding
from .exceptions import ErrorKind, ParseError, SourceError

_log = logging.getLogger(__name__)

QUOTES = frozenset("'\"")
COMMENTS = frozenset(";#")
ESCAPE = "\\"
ASSIGN = "="

# Characters that an escape makes literal outside of quotes.
ESCAPABLE = frozenset({ESCAPE, ASSIGN}) | QUOTES | COMMENTS

# Name of the session that holds keys set before the first header.
DEFAULT_SESSION = ""


@dataclasses.dataclass(slots=True)
class NewSession:
    """A session header, i.e. [name]."""

    name: str


@dataclasses.dataclass(slots=True)
class KeyValue:
    """A property, i.e. key=value."""

    key: str
    value: str


@dataclasses.dataclass(slots=True)
class Empty:
    """A blank or comment-only line."""


@dataclasses.dataclass(slots=True)
class Invalid:
    """A line that could not be parsed."""

    kind: ErrorKind


Classification = NewSession | KeyValue | Empty | Invalid


class State(enum.Enum):
    """Where the scanner is within a line."""

    # Skipping spaces before a part.
    SKIP = enum.auto()
    # Inside an unquoted part.
    PART = enum.auto()
    # After a backslash in an unquoted part.
    PART_ESCAPE = enum.auto()
    # Inside a quoted segment.
    QUOTE = enum.auto()
    # After a backslash in a quoted segment.
    QUOTE_ESCAPE = enum.auto()


def _only_starts_with(s: str, prefix: str) -> bool:
    return s.startswith(prefix) and prefix not in s[len(prefix) :]


def _only_ends_with(s: str, suffix: str) -> bool:
    return s.endswith(suffix) and suffix not in s[: -len(suffix)]


def _split(line: str) -> list[str] | ErrorKind:
    # Break a line into stripped parts, with "=" markers between them.
    parts: list[str] = []
    part: list[str] = []

    state = State.SKIP
    quote = ""

    for ch in line:
        if state is State.SKIP:
            if ch == " ":
                continue

            if ch in QUOTES:
                quote = ch
                state = State.QUOTE
                continue

            state = State.PART

        match state:
            case State.PART:
                if ch == ESCAPE:
                    state = State.PART_ESCAPE
                elif ch == ASSIGN:
                    parts.append("".join(part).strip())
                    parts.append(ASSIGN)
                    part.clear()
                    state = State.SKIP
                elif ch in COMMENTS:
                    break
                elif ch in QUOTES:
                    return ErrorKind.INVALID_QUOTE_POSITION
                else:
                    part.append(ch)

            case State.PART_ESCAPE:
                if ch not in ESCAPABLE:
                    part.append(ESCAPE)
                part.append(ch)
                state = State.PART

            case State.QUOTE:
                if ch == quote:
                    # The part stays open, so anything after the quote is joined onto it.
                    state = State.SKIP
                elif ch == ESCAPE:
                    state = State.QUOTE_ESCAPE
                else:
                    part.append(ch)

            case State.QUOTE_ESCAPE:
                if ch != quote:
                    part.append(ESCAPE)
                part.append(ch)
                state = State.QUOTE

    if state in (State.QUOTE, State.QUOTE_ESCAPE):
        return ErrorKind.UNCLOSED_QUOTE

    parts.append("".join(part).strip())

    return [p for p in parts if p]


def parse(line: str) -> Classification:
    """Parse a single line.

    Outside of quotes, ';' and '#' start a comment and '=' separates the key from the value.
    Inside quotes they are ordinary characters.
    A backslash makes the next character literal.

    Args:
        line: The line to parse, without a trailing newline.

    Returns:
        The classification of the line. Malformed lines are returned as Invalid, never raised.
    """

    parts = _split(line)
    if isinstance(parts, ErrorKind):
        return Invalid(parts)

    match parts:
        case []:
            return Empty()

        case [part]:
            if _only_starts_with(part, "[") and _only_ends_with(part, "]"):
                return NewSession(part[1:-1].strip())

            return Invalid(ErrorKind.INVALID_SESSION_NAME_FORMAT)

        case [key, marker, value]:
            if marker != ASSIGN:
                return Invalid(ErrorKind.INVALID_ASSIGNMENT)

            return KeyValue(key, value)

        case _:
            return Invalid(ErrorKind.EXTRA_KEY_OR_VALUE)


def _strip_newline(line: str) -> str:
    return line.removesuffix("\n").removesuffix("\r")


def load(file: Iterable[str]) -> Document:
    """Parse an INI file.

    Args:
        file: The lines to parse. Trailing newlines are ignored.

    Returns:
        A document of session names mapped to their properties.
        The unnamed session "" is always present.

    Raises:
        ParseError: A line could not be parsed.
        SourceError: Reading a line from the file failed.
    """

    doc = Document()

    name = DEFAULT_SESSION
    session = Session()

    lines = iter(file)
    lineno = 0

    while True:
        try:
            raw = next(lines)
        except StopIteration:
            break
        except (OSError, UnicodeError) as e:
            raise SourceError(f"failed to read from source: {e}") from e

        lineno += 1
        line = _strip_newline(raw)

        match parse(line):
            case NewSession(name=new_name):
                doc[name] = session

                _log.debug("line %d: opened session '%s'", lineno, new_name)
                name, session = new_name, Session()

            case KeyValue(key=key, value=value):
                session[key] = value

            case Empty():
                pass

            case Invalid(kind=kind):
                raise ParseError(lineno, kind, line)

    doc[name] = session

    _log.debug("parsed %d lines into %d sessions", lineno, len(doc))
    return doc


def loads(text: str) -> Document:
    """Parse an INI text.

    Args:
        text: The text to parse.

    Returns:
        See load().

    Raises:
        See load().
    """

    # Lines end at "\n" only; a "\r" before it is removed by load().
    with io.StringIO(text) as buf:
        return load(buf)


def load_file(path: str | pathlib.Path, encoding: str | None = None) -> Document:
    """Parse an INI file on disk.

    Args:
        path: The path to the file.
        encoding: The file encoding. If None, encoding detection is attempted.

    Returns:
        See load().

    Raises:
        ParseError: A line could not be parsed.
        SourceError: The file could not be opened or read, or its encoding could not be detected.
    """

    if isinstance(path, str):
        path = pathlib.Path(path)

    if encoding is None:
        try:
            with path.open("rb") as f:
                encoding = detect_encoding(f)

            size = path.stat().st_size
        except OSError as e:
            raise SourceError(f"failed to read {path}: {e}") from e

        if encoding is None:
            if size:
                raise SourceError(f"failed to detect encoding for {path}")

            # Nothing to detect in an empty file.
            encoding = "utf-8"

        _log.debug("detected encoding %s for %s", encoding, path)

    try:
        f = path.open(encoding=encoding, newline="\n")
    except (OSError, LookupError) as e:
        raise SourceError(f"failed to open {path}: {e}") from e

    with f:
        return load(f)
