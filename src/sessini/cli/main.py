import logging
import pathlib
from typing import Annotated, Optional

import typer
from rich.table import Table
from rich.text import Text

from .. import ini
from ..document import Document
from ..exceptions import SessiniError

from .console import console, err_console

LOG_LEVELS = [
    logging.CRITICAL,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
]

# How the unnamed session is labelled in tables.
UNNAMED = "(unnamed)"

FileArgument = Annotated[
    pathlib.Path, typer.Argument(exists=True, dir_okay=False, resolve_path=True)
]
EncodingOption = Annotated[
    Optional[str],
    typer.Option("--encoding", "-e", help="file encoding, detected if not given"),
]

app = typer.Typer(no_args_is_help=True)


@app.callback()
def common(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, min=0, max=5, help="set logging level"
        ),
    ] = 0
):
    """Read INI-style configuration files made of sessions and key/value pairs."""

    if verbose == 0:
        logging.disable()
    else:
        logging.disable(logging.NOTSET)
        logging.basicConfig(level=LOG_LEVELS[verbose - 1])


def _fail(message: str) -> typer.Exit:
    err_console.print(message, style="red", markup=False, soft_wrap=True)
    return typer.Exit(code=1)


def _load(file: pathlib.Path, encoding: str | None) -> Document:
    try:
        return ini.load_file(file, encoding=encoding)
    except SessiniError as e:
        raise _fail(f"{file}: {e}") from e


@app.command()
def check(file: FileArgument, encoding: EncodingOption = None):
    """Check that a file parses."""

    doc = _load(file, encoding)
    keys = sum(len(s) for s in doc.values())

    console.print(
        f"{file}: ok, {len(doc)} sessions, {keys} keys",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


@app.command()
def show(
    file: FileArgument,
    session: Annotated[Optional[str], typer.Argument()] = None,
    encoding: EncodingOption = None,
):
    """Show the sessions in a file.
    If session is given, only that session is shown.
    """

    doc = _load(file, encoding)

    if session is None:
        names = list(doc)
    elif session in doc:
        names = [session]
    else:
        raise _fail(f"session not found: '{session}'")

    for name in names:
        table = Table(title=Text(name or UNNAMED))
        table.add_column("Key")
        table.add_column("Value")

        for key, value in doc[name].items():
            table.add_row(Text(key), Text(value))

        console.print(table)


@app.command()
def get(
    file: FileArgument,
    session: str,
    key: str,
    encoding: EncodingOption = None,
):
    """Print the value of a key in a session."""

    doc = _load(file, encoding)

    if (s := doc.session(session)) is None:
        raise _fail(f"session not found: '{session}'")

    if (value := s.get(key)) is None:
        raise _fail(f"key not found: '{key}' in session '{session}'")

    console.print(value, markup=False, highlight=False, soft_wrap=True)
