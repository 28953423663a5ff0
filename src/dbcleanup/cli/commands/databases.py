"""Commands for cleaning up provider databases."""

from __future__ import annotations

import re

from dbcleanup.cli.common.context import build_cleanup_context
from dbcleanup.cli.common.exits import die, exit_from_exc, ok_exit
from dbcleanup.cli.common.options import (
    ApiUrlOpt,
    ConfirmOpt,
    DatabaseIdOpt,
    DatabaseNameOpt,
    DryRunOpt,
    NameOpt,
    ProjectIdOpt,
    ServiceTokenOpt,
    TimeoutOpt,
)
from dbcleanup.cli.common.output import out
from dbcleanup.core.adapters.github import GitHubOutputs
from dbcleanup.core.cleanup import DatabaseCleanupOperation, validate_inputs
from dbcleanup.core.errors import CleanupError
from dbcleanup.core.models import ResolvedTarget


def _print_output(name: str, value: str) -> None:
    out.kv({name: value})


def cleanup(
    service_token: str | None = ServiceTokenOpt,
    project_id: str | None = ProjectIdOpt,
    database_name: str | None = DatabaseNameOpt,
    database_id: str | None = DatabaseIdOpt,
    timeout: float = TimeoutOpt,
    api_url: str | None = ApiUrlOpt,
    dry_run: bool = DryRunOpt,
    confirm: bool = ConfirmOpt,
):
    """
    Delete the database for this PR / run (or the one given explicitly).
    """
    appctx = build_cleanup_context(
        service_token=service_token,
        project_id=project_id,
        database_name=database_name,
        database_id=database_id,
        api_url=api_url,
        timeout=timeout,
    )

    def _confirm(target: ResolvedTarget) -> bool:
        return out.confirm(f"Delete database {target.name} (id: {target.id})?")

    operation = DatabaseCleanupOperation(
        appctx.inputs,
        appctx.ci,
        appctx.adapter,
        GitHubOutputs(fallback=_print_output),
        out,
        dry_run=dry_run,
        confirm=_confirm if confirm else None,
    )

    try:
        operation.run()
    except CleanupError as exc:
        exit_from_exc(exc, message=str(exc), code=1)
    except Exception as exc:  # noqa: BLE001  every failure must end as a failed step
        exit_from_exc(exc, message=f"Unexpected error: {exc}", code=1)


def list_databases(
    service_token: str | None = ServiceTokenOpt,
    project_id: str | None = ProjectIdOpt,
    name: str | None = NameOpt,
    timeout: float = TimeoutOpt,
    api_url: str | None = ApiUrlOpt,
):
    """
    List databases in the project.
    """
    appctx = build_cleanup_context(
        service_token=service_token,
        project_id=project_id,
        api_url=api_url,
        timeout=timeout,
    )

    try:
        validate_inputs(appctx.inputs)
    except CleanupError as exc:
        exit_from_exc(exc, message=str(exc), code=2)

    name_rx = None
    if name:
        try:
            name_rx = re.compile(name)
        except re.error as exc:
            die(f"Invalid regex for --name: {exc}", code=2)

    try:
        with out.status("Loading databases..."):
            databases = appctx.adapter.list_databases(appctx.inputs.project_id)
    except CleanupError as exc:
        exit_from_exc(exc, message=str(exc), code=1)

    if name_rx:
        databases = [db for db in databases if name_rx.search(db.name)]

    if not databases:
        ok_exit("No databases found.")

    out.header("Databases")
    out.info(f"Project: {appctx.inputs.project_id} | Databases: {len(databases)}")
    out.databases_table(databases, title="Databases")
