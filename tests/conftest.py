from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def isolated_env(tmp_path, monkeypatch) -> Path:
    """Point settings at an empty project root and clear STACKVM_* variables."""
    from stackvm import config

    root = tmp_path / "project"
    root.mkdir()
    monkeypatch.setattr(config, "repo_root", lambda: root)
    monkeypatch.chdir(root)
    monkeypatch.delenv("STACKVM_MAX_OPS", raising=False)
    monkeypatch.delenv("STACKVM_LOG_LEVEL", raising=False)
    return root
