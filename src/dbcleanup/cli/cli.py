"""CLI application for CI database cleanup."""

import typer

from dbcleanup.cli.commands.databases import cleanup, list_databases

app = typer.Typer(
    help="db-cleanup - delete preview/test databases from CI",
    no_args_is_help=True,
)

app.command("cleanup")(cleanup)
app.command("list")(list_databases)


if __name__ == "__main__":
    app()
