"""Core cleanup operation: resolve, verify, delete, report.

The operation is wired with its collaborators explicitly (CI context, provider
adapter, output sink and reporter) so it can run against the real GitHub
Actions environment or against stubs in tests. It has no CLI concerns of its
own; console output goes through the injected reporter.
"""

from __future__ import annotations

from typing import Callable, Protocol

from dbcleanup.core.errors import ConfigurationError
from dbcleanup.core.models import (
    CIContext,
    CleanupResult,
    DatabaseRecord,
    OperationInputs,
    ResolutionStrategy,
    ResolvedTarget,
)
from dbcleanup.core.naming import derive_database_name, sanitize_database_name


class DatabaseProvider(Protocol):
    """Interface for the provider calls used by the cleanup operation."""

    def find_database_by_name(self, project_id: str, name: str) -> DatabaseRecord | None:
        """Return the database with exactly this name, or None."""
        ...

    def delete_database(self, database_id: str) -> None:
        """Delete a database, raising DeletionError on failure."""
        ...


class OutputSink(Protocol):
    """Interface for publishing named step outputs."""

    def set_output(self, name: str, value: str) -> None:
        """Publish one output value."""
        ...


class Reporter(Protocol):
    """Interface for progress messages."""

    def info(self, msg: str) -> None: ...

    def warn(self, msg: str) -> None: ...

    def success(self, msg: str) -> None: ...


def validate_inputs(inputs: OperationInputs) -> None:
    """Raise ConfigurationError unless service_token and project_id are set."""
    if not inputs.service_token or not inputs.project_id:
        raise ConfigurationError("service_token and project_id are required")


def synthesize_id_name(database_id: str) -> str:
    """Return the display name used when resolving by identifier."""
    return f"database-{database_id}"


class DatabaseCleanupOperation:
    """
    Delete a single database identified by id or by (derived) name.

    Resolution:
      - `database_id` set: target is that id, name is `database-<id>`. No
        lookup is made; existence is not verified before deleting.
      - otherwise: the name is derived from inputs/CI context, sanitized and
        looked up in the project's database list. No match means nothing is
        deleted.

    Every run that does not raise publishes exactly two outputs:
    `deleted` ("true"/"false") and `database_name`.
    """

    def __init__(
        self,
        inputs: OperationInputs,
        ci: CIContext,
        provider: DatabaseProvider,
        outputs: OutputSink,
        reporter: Reporter,
        *,
        dry_run: bool = False,
        confirm: Callable[[ResolvedTarget], bool] | None = None,
    ) -> None:
        self.inputs = inputs
        self.ci = ci
        self.provider = provider
        self.outputs = outputs
        self.reporter = reporter
        self.dry_run = dry_run
        self.confirm = confirm

    def target_name(self) -> str:
        """Return the sanitized name a name-based run looks for."""
        raw = derive_database_name(self.inputs.database_name, self.ci)
        return sanitize_database_name(raw)

    def resolve(self) -> tuple[str, ResolvedTarget | None]:
        """
        Resolve the database to delete.

        Returns:
            (name, target) where `name` is the resolved or attempted name and
            `target` is None when resolving by name found no match.
        """
        if self.inputs.strategy == ResolutionStrategy.BY_ID:
            database_id = self.inputs.database_id
            if self.inputs.database_name:
                self.reporter.info(
                    "Both database_id and database_name provided; "
                    f"using database_id: {database_id}"
                )
            name = synthesize_id_name(database_id)
            return name, ResolvedTarget(
                id=database_id, name=name, strategy=ResolutionStrategy.BY_ID
            )

        name = self.target_name()
        self.reporter.info(f"Looking for database to cleanup: {name}")
        record = self.provider.find_database_by_name(self.inputs.project_id, name)
        if record is None:
            return name, None
        return name, ResolvedTarget(
            id=record.id, name=record.name, strategy=ResolutionStrategy.BY_NAME
        )

    def publish(self, deleted: bool, name: str) -> None:
        """Publish the run outputs."""
        self.outputs.set_output("deleted", "true" if deleted else "false")
        self.outputs.set_output("database_name", name)

    def run(self) -> CleanupResult:
        """
        Execute the cleanup.

        Raises:
            ConfigurationError: required inputs are missing (no I/O performed).
            NetworkError: listing databases failed.
            DeletionError: the delete call failed.
        """
        validate_inputs(self.inputs)

        name, target = self.resolve()

        if target is None:
            self.reporter.info(f"No database found with name: {name}")
            return self._finish(False, name, None)

        if target.strategy == ResolutionStrategy.BY_NAME:
            self.reporter.info(f"Database {target.name} exists with ID: {target.id}.")
        else:
            self.reporter.info(f"Using database ID: {target.id}.")

        if self.dry_run:
            self.reporter.warn("Dry-run enabled: database was not deleted")
            return self._finish(False, target.name, target)

        if self.confirm is not None and not self.confirm(target):
            self.reporter.warn("Cancelled: database was not deleted")
            return self._finish(False, target.name, target)

        self.reporter.info(f"Deleting database {target.name}...")
        self.provider.delete_database(target.id)
        self.reporter.success("Database deleted successfully!")
        return self._finish(True, target.name, target)

    def _finish(
        self, deleted: bool, name: str, target: ResolvedTarget | None
    ) -> CleanupResult:
        self.publish(deleted, name)
        return CleanupResult(deleted=deleted, database_name=name, target=target)
