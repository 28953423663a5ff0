"""Application context management for the CLI."""

from dataclasses import dataclass

from dbcleanup.core.adapters.github import load_ci_context
from dbcleanup.core.adapters.provider import DatabaseProviderAdapter
from dbcleanup.core.auth import build_session
from dbcleanup.core.models import CIContext, OperationInputs


@dataclass
class CleanupAppContext:
    """Application context holding the CI context, inputs and provider adapter."""

    ci: CIContext
    inputs: OperationInputs
    adapter: DatabaseProviderAdapter


def build_cleanup_context(
    *,
    service_token: str | None,
    project_id: str | None,
    database_name: str | None = None,
    database_id: str | None = None,
    api_url: str | None = None,
    timeout: float,
) -> CleanupAppContext:
    """Build the application context from CLI options and the CI environment.

    Explicit options win over the corresponding `INPUT_*` step inputs.
    Nothing here touches the network.
    """
    ci = load_ci_context()
    inputs = OperationInputs.from_context(
        ci,
        service_token=service_token,
        project_id=project_id,
        database_name=database_name,
        database_id=database_id,
    )
    session = build_session(inputs.service_token or "")
    adapter = DatabaseProviderAdapter(session, api_url=api_url, timeout=timeout)
    return CleanupAppContext(ci=ci, inputs=inputs, adapter=adapter)
