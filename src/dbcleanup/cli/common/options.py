"""Common CLI options for the CLI."""

import typer

from dbcleanup.core.adapters.provider import DEFAULT_TIMEOUT_SECONDS

ServiceTokenOpt = typer.Option(
    None,
    "--service-token",
    help="Provider service token (defaults to the INPUT_SERVICE_TOKEN step input)",
    show_default=False,
)

ProjectIdOpt = typer.Option(
    None,
    "--project-id",
    help="Provider project id (defaults to the INPUT_PROJECT_ID step input)",
    show_default=False,
)

DatabaseNameOpt = typer.Option(
    None,
    "--database-name",
    help="Database name; derived from the PR or run number when omitted",
)

DatabaseIdOpt = typer.Option(
    None,
    "--database-id",
    help="Database id; takes precedence over --database-name",
)

TimeoutOpt = typer.Option(
    DEFAULT_TIMEOUT_SECONDS,
    "--timeout",
    "-t",
    min=0.1,
    help="Timeout in seconds for each provider API call",
)

ApiUrlOpt = typer.Option(
    None,
    "--api-url",
    envvar="DBCLEANUP_API_URL",
    help="Provider API base URL",
)

DryRunOpt = typer.Option(
    False,
    "--dry-run",
    help="Show which database would be deleted, but don't delete anything",
)

ConfirmOpt = typer.Option(
    False,
    "--confirm/--no-confirm",
    help="Ask for confirmation before deleting",
)

NameOpt = typer.Option(
    None,
    "--name",
    help="Regex on database name",
)
