"""A parser for INI-style configuration files with quoting, escapes and inline comments."""

from .document import Document, Session
from .exceptions import ErrorKind, ParseError, SessiniError, SourceError
from .ini import load, load_file, loads, parse
