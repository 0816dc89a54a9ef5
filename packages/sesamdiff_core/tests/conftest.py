"""Shared test configuration and fixtures for sesamdiff_core tests.

Provides:
- git repository fixtures: real working trees in ``tmp_path`` with a local
  identity, on branch ``master`` with a small committed Sesam config.
- archive helpers: build ZIP payloads the way a node returns them.
- a node client double that serves a fixed payload without the network.

Notes:
    Tests that need the git executable are skipped when it is not on PATH.
"""
from __future__ import annotations

import io
import shutil
import subprocess
import zipfile
from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from sesamdiff_core.node import NodeClient


# ---- Sample Config ------------------------------------------------------------------------------------------


ORDERS_PIPE = """{
  "_id": "orders",
  "type": "pipe",
  "source": {
    "type": "dataset",
    "dataset": "erp-orders"
  }
}
"""

NODE_METADATA = """{
  "_id": "node",
  "type": "metadata"
}
"""

# ---- Helpers ------------------------------------------------------------------------------------------------


def git(root: Path, *args: str) -> str:
    """Run git in root and return stdout."""
    completed = subprocess.run(
        ["git", *args],
        cwd=root,
        check=True,
        capture_output=True,
        text=True,
    )
    return completed.stdout


def make_zip(files: dict[str, str | bytes | None]) -> bytes:
    """Build a ZIP payload; a None value adds a directory entry."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as bundle:
        for name, content in files.items():
            if content is None:
                bundle.writestr(zipfile.ZipInfo(name.rstrip("/") + "/"), b"")
            else:
                bundle.writestr(name, content)
    return buffer.getvalue()


# ---- Fixtures -----------------------------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_git(tmp_path, monkeypatch):
    """Keep git from discovering repositories or config outside tmp_path."""
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("GIT_DIR", raising=False)
    monkeypatch.delenv("GIT_WORK_TREE", raising=False)


@pytest.fixture
def git_repo(tmp_path) -> Path:
    """Git working tree on master with one committed Sesam config."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")

    root = tmp_path / "sesam-config"
    root.mkdir()
    git(root, "init", "-q")
    git(root, "symbolic-ref", "HEAD", "refs/heads/master")
    git(root, "config", "user.name", "Test User")
    git(root, "config", "user.email", "test@example.com")
    git(root, "config", "commit.gpgsign", "false")

    (root / "pipes").mkdir()
    (root / "pipes" / "orders.conf.json").write_text(ORDERS_PIPE)
    (root / "node-metadata.conf.json").write_text(NODE_METADATA)
    git(root, "add", ".")
    git(root, "commit", "-q", "-m", "Initial config")
    return root


@pytest.fixture
def git_cmd() -> Callable[..., str]:
    """Helper that runs git in a directory and returns stdout."""
    return git


@pytest.fixture
def zip_payload() -> Callable[[dict[str, str | bytes | None]], bytes]:
    """Factory for ZIP payloads."""
    return make_zip


@pytest.fixture
def node_client() -> Callable[[bytes], NodeClient]:
    """Factory for a NodeClient whose session returns the given payload."""

    def _build(payload: bytes, status_code: int = 200, reason: str = "OK") -> NodeClient:
        response = MagicMock()
        response.status_code = status_code
        response.reason = reason
        response.content = payload
        session = MagicMock()
        session.get.return_value = response
        return NodeClient(node="datahub-test.sesam.cloud", jwt="secret-token", session=session)

    return _build
