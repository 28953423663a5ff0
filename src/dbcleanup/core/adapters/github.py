"""GitHub Actions integration: event context in, step outputs out.

The runner exposes everything through environment variables:

- `GITHUB_EVENT_PATH`: JSON payload of the triggering event
- `GITHUB_RUN_NUMBER`: sequential run number of the workflow
- `INPUT_<NAME>`: step inputs (upper-cased, spaces replaced by `_`)
- `GITHUB_OUTPUT`: file that step outputs are appended to
"""

from __future__ import annotations

import json
import os
import uuid
from pathlib import Path
from typing import Any, Callable, Mapping

from dbcleanup.core.models import CIContext

_INPUT_PREFIX = "INPUT_"


def is_github_actions(environ: Mapping[str, str] | None = None) -> bool:
    """Return True when running inside a GitHub Actions job."""
    env = os.environ if environ is None else environ
    return env.get("GITHUB_ACTIONS", "").strip().lower() == "true"


def _load_event(event_path: str | None) -> dict[str, Any]:
    """Read the event payload; a missing or unreadable file yields an empty payload."""
    if not event_path:
        return {}
    path = Path(event_path)
    if not path.exists():
        return {}
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return {}
    return payload if isinstance(payload, dict) else {}


def load_ci_context(environ: Mapping[str, str] | None = None) -> CIContext:
    """
    Build a CIContext from the GitHub Actions environment.

    Args:
        environ: Environment mapping; defaults to `os.environ`.

    Returns:
        CIContext with pull-request data (when the event carries a
        `pull_request` object), the run number and all step inputs.
    """
    env = os.environ if environ is None else environ
    event = _load_event(env.get("GITHUB_EVENT_PATH"))

    pr_number: int | None = None
    branch: str | None = None
    pull_request = event.get("pull_request")
    if isinstance(pull_request, dict) and pull_request.get("number") is not None:
        try:
            pr_number = int(pull_request["number"])
        except (TypeError, ValueError):
            pr_number = None
        head = pull_request.get("head")
        if pr_number is not None and isinstance(head, dict):
            branch = head.get("ref")

    inputs = {
        key[len(_INPUT_PREFIX) :].lower(): value
        for key, value in env.items()
        if key.startswith(_INPUT_PREFIX)
    }

    return CIContext(
        pr_number=pr_number,
        branch=branch,
        run_number=env.get("GITHUB_RUN_NUMBER") or None,
        inputs=inputs,
    )


class GitHubOutputs:
    """Step output sink writing `name=value` records to `$GITHUB_OUTPUT`."""

    def __init__(
        self,
        output_path: str | None = None,
        *,
        fallback: Callable[[str, str], None] | None = None,
    ) -> None:
        """
        Args:
            output_path: Output file; defaults to `$GITHUB_OUTPUT`.
            fallback: Called with (name, value) when no output file is
                configured, e.g. to print outputs on local runs.
        """
        path = output_path if output_path is not None else os.getenv("GITHUB_OUTPUT")
        self.path = Path(path) if path else None
        self.fallback = fallback

    def set_output(self, name: str, value: str) -> None:
        """Publish a single step output."""
        if self.path is None:
            if self.fallback is not None:
                self.fallback(name, value)
            return

        if "\n" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            record = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
        else:
            record = f"{name}={value}\n"

        with open(self.path, "a", encoding="utf-8") as handle:
            handle.write(record)
