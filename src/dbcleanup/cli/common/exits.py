"""Exit handling utilities for the CLI."""

from typing import NoReturn

import typer

from dbcleanup.cli.common.output import out
from dbcleanup.core.adapters.github import is_github_actions


def _annotate(msg: str) -> None:
    """Emit a GitHub Actions error annotation so the failure shows in the run summary."""
    if is_github_actions():
        # plain echo: the workflow command must not pass through Rich markup
        typer.echo(f"::error::{msg}")


def ok_exit(msg: str | None = None) -> NoReturn:
    """Exit successfully with an optional informational message."""
    if msg:
        out.info(msg)
    raise typer.Exit(0)


def die(msg: str, code: int = 1) -> NoReturn:
    """Exit with an error message and optional exit code."""
    out.error(msg)
    _annotate(msg)
    raise typer.Exit(code)


def exit_from_exc(exc: Exception, *, message: str, code: int = 1) -> NoReturn:
    """
    Print an error message and exit with the given code, chaining `exc`.

    Exists to satisfy pylint W0707 and to standardize error exits.
    """
    out.error(message)
    _annotate(message)
    raise typer.Exit(code) from exc
