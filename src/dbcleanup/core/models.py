"""Core domain models for database cleanup.

These models describe the inputs, the resolved target and the outcome of a
single cleanup run. They are immutable and free of HTTP, CI and CLI concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping


class ResolutionStrategy(str, Enum):
    """
    How the database to delete is identified.

    Values:
        BY_ID: An explicit provider identifier was supplied.
        BY_NAME: The target is looked up by (explicit or derived) name.
    """

    BY_ID = "id"
    BY_NAME = "name"


@dataclass(frozen=True)
class DatabaseRecord:
    """
    A database as returned by the provider's list endpoint.

    Attributes:
        id: Provider identifier of the database.
        name: Database name within the project.
    """

    id: str
    name: str


@dataclass(frozen=True)
class ResolvedTarget:
    """The database a run will act on."""

    id: str
    name: str
    strategy: ResolutionStrategy


@dataclass(frozen=True)
class CIContext:
    """
    Event metadata of the pipeline run that invoked the cleanup.

    Attributes:
        pr_number: Pull-request number, or None when the event is not a PR.
        branch: Head branch of the pull request, if any.
        run_number: Sequential run number of the workflow.
        inputs: Step input parameters keyed by lowercase input name.
    """

    pr_number: int | None = None
    branch: str | None = None
    run_number: str | None = None
    inputs: Mapping[str, str] = field(default_factory=dict)

    @property
    def is_pull_request(self) -> bool:
        """True when the triggering event is a pull request."""
        return self.pr_number is not None

    def input(self, name: str) -> str | None:
        """Return a trimmed input value, or None when missing or blank."""
        value = (self.inputs.get(name) or "").strip()
        return value or None


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class OperationInputs:
    """
    User-supplied parameters of a cleanup run.

    Blank values are normalized to None so that "absent" and "empty" behave
    the same way.
    """

    service_token: str | None = field(repr=False)
    project_id: str | None
    database_name: str | None = None
    database_id: str | None = None

    def __post_init__(self) -> None:
        for name in ("service_token", "project_id", "database_name", "database_id"):
            object.__setattr__(self, name, _clean(getattr(self, name)))

    @classmethod
    def from_context(cls, ci: CIContext, **overrides: str | None) -> "OperationInputs":
        """
        Build inputs from the CI input store, letting non-empty overrides win.

        Args:
            ci: CI context holding the step inputs.
            **overrides: Explicit values (e.g. from CLI options) keyed by field name.
        """
        values = {}
        for name in ("service_token", "project_id", "database_name", "database_id"):
            values[name] = _clean(overrides.get(name)) or ci.input(name)
        return cls(**values)

    @property
    def strategy(self) -> ResolutionStrategy:
        """Resolution strategy implied by the inputs (identifier wins)."""
        if self.database_id:
            return ResolutionStrategy.BY_ID
        return ResolutionStrategy.BY_NAME


@dataclass(frozen=True)
class CleanupResult:
    """
    Outcome of a cleanup run.

    Attributes:
        deleted: True if a delete call succeeded.
        database_name: Resolved or attempted (sanitized) database name.
        target: The resolved target, or None when nothing matched.
    """

    deleted: bool
    database_name: str
    target: ResolvedTarget | None = None
