from __future__ import annotations

from typing import Any
from urllib.parse import quote

import requests

from dbcleanup.core.auth import sanitize_api_url
from dbcleanup.core.errors import DeletionError, NetworkError
from dbcleanup.core.models import DatabaseRecord

DEFAULT_TIMEOUT_SECONDS = 30.0


def _is_success(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300


class DatabaseProviderAdapter:
    """Adapter around the provider's database REST endpoints (list/delete)."""

    def __init__(
        self,
        session: requests.Session,
        *,
        api_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be > 0")
        self.session = session
        self.api_url = sanitize_api_url(api_url)
        self.timeout = timeout

    def _url(self, *segments: str) -> str:
        return "/".join([self.api_url, *(quote(s, safe="") for s in segments)])

    def list_databases(self, project_id: str) -> list[DatabaseRecord]:
        """List all databases of a project."""
        url = self._url("v1", "projects", project_id, "databases")
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.Timeout as exc:
            raise NetworkError(
                f"Failed to fetch databases: timed out after {self.timeout:g}s"
            ) from exc
        except requests.RequestException as exc:
            raise NetworkError(f"Failed to fetch databases: {exc}") from exc

        if not _is_success(response):
            raise NetworkError(
                f"Failed to fetch databases: {response.status_code} {response.reason}"
            )

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise NetworkError(f"Failed to parse databases response: {exc}") from exc

        items = payload.get("data") if isinstance(payload, dict) else None
        out: list[DatabaseRecord] = []
        for item in items or []:
            # entries without id/name cannot be matched or deleted
            if not isinstance(item, dict):
                continue
            db_id = item.get("id")
            name = item.get("name")
            if db_id is None or name is None:
                continue
            out.append(DatabaseRecord(id=str(db_id), name=str(name)))
        return out

    def find_database_by_name(self, project_id: str, name: str) -> DatabaseRecord | None:
        """Return the first database whose name equals `name`, if any."""
        for db in self.list_databases(project_id):
            if db.name == name:
                return db
        return None

    def delete_database(self, database_id: str) -> None:
        """Delete a database by provider identifier."""
        url = self._url("v1", "databases", database_id)
        try:
            response = self.session.delete(url, timeout=self.timeout)
        except requests.Timeout as exc:
            raise DeletionError(
                f"Failed to delete database: timed out after {self.timeout:g}s"
            ) from exc
        except requests.RequestException as exc:
            raise DeletionError(f"Failed to delete database: {exc}") from exc

        if not _is_success(response):
            raise DeletionError(
                "Failed to delete database: "
                f"{response.status_code} {response.reason} - {response.text}"
            )

        if not response.content:
            return

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise DeletionError(f"Failed to parse delete response: {exc}") from exc

        if isinstance(payload, dict) and payload.get("error"):
            raise DeletionError(
                f"Delete API error: {payload.get('message') or 'Unknown error'}"
            )
