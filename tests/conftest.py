from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def _isolated_ci_env(monkeypatch):
    """Strip GitHub Actions variables so tests never see the real runner env."""
    for key in list(os.environ):
        if key.startswith(("GITHUB_", "INPUT_")) or key == "DBCLEANUP_API_URL":
            monkeypatch.delenv(key, raising=False)
