"""Database name derivation and sanitization.

Provider database names are restricted to lowercase letters, digits and
underscores. Names derived from CI events (branch names in particular) are
normalized with `sanitize_database_name` before any lookup.
"""

from __future__ import annotations

import re

from dbcleanup.core.models import CIContext

_SEPARATORS_RE = re.compile(r"[/\-]")
_INVALID_CHARS_RE = re.compile(r"[^a-z0-9_]")


def sanitize_database_name(name: str) -> str:
    """
    Normalize a raw name into a provider-compatible database name.

    - Replaces `/` and `-` with `_`
    - Lowercases the result
    - Drops every character outside `[a-z0-9_]`

    The result may be empty (e.g. for punctuation-only input).
    """
    name = _SEPARATORS_RE.sub("_", name)
    name = name.lower()
    return _INVALID_CHARS_RE.sub("", name)


def derive_database_name(explicit_name: str | None, ci: CIContext) -> str:
    """
    Return the raw (unsanitized) database name for a run.

    Precedence:
      1) explicit name
      2) `pr-<number>-<branch>` for pull-request events
      3) `test-<run_number>`
    """
    if explicit_name:
        return explicit_name
    if ci.is_pull_request:
        return f"pr-{ci.pr_number}-{ci.branch or ''}"
    return f"test-{ci.run_number or ''}"
