"""Output formatting utilities for the CLI.

Messages routinely carry provider response bodies and user-supplied ids, so
every message is escaped before it reaches Rich markup; only the prefixes and
table styles are markup.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

import questionary
from prompt_toolkit.styles import Style
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

# Deleting is irreversible: question in red, the answer echoed in yellow.
DELETE_CONFIRM_STYLE = Style.from_dict(
    {
        "qmark": "bold ansired",
        "question": "bold ansired",
        "answer": "bold ansiyellow",
        "instruction": "ansibrightblack",
        "error": "bold ansired",
    }
)

console = Console(theme=_THEME)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {escape(msg)}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(escape(msg), spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {escape(msg)}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {escape(msg)}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {escape(msg)}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{escape(title)}[/]")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{escape(str(k))}[/]: {escape(str(v))}")

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """
        Ask the user to confirm a deletion.

        Returns:
            True if the user confirms, False otherwise (including Ctrl-C).
        """
        console.print("[meta]Use y/n then Enter[/]")
        prompt = questionary.confirm(
            f"[DB-CLEANUP] {message}",
            default=default,
            style=DELETE_CONFIRM_STYLE,
            qmark="!",
            auto_enter=False,
        )
        return bool(prompt.ask())

    def databases_table(self, databases: Iterable[Any], title: str = "Databases") -> None:
        """
        Expects objects with .id and .name (like dbcleanup.core.models.DatabaseRecord)
        """
        t = Table(title=escape(title), show_lines=False)
        t.add_column("Database ID", style="ok", no_wrap=True)
        t.add_column("Name")

        for db in databases:
            t.add_row(escape(str(db.id)), escape(str(db.name)))

        console.print(t)


out = Out()
