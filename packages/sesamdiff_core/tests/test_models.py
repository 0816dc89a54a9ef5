"""Tests for data models module.

Tests RunConfig, ArchiveEntry, CommandResult, and DiffResult.

Execution Context:
    Test module - run via pytest

Dependencies:
    - pytest: Test framework
    - sesamdiff_core.models: Module under test
"""
from __future__ import annotations

from pathlib import Path

import pytest

from sesamdiff_core.errors import CommandError
from sesamdiff_core.models import ArchiveEntry
from sesamdiff_core.models import CommandResult
from sesamdiff_core.models import DiffResult
from sesamdiff_core.models import RunConfig


# ---- RunConfig Tests ----------------------------------------------------------------------------------------


class TestRunConfig:
    """Tests for RunConfig dataclass."""

    def test_defaults(self) -> None:
        """Test default branch, output, and timeout."""
        config = RunConfig(path=Path("/repo"), node="node.example", jwt="token")
        assert config.branch == "master"
        assert config.output is None
        assert config.timeout is None

    def test_url(self) -> None:
        """Test config endpoint is built from the node name."""
        config = RunConfig(path=Path("/repo"), node="datahub.sesam.cloud", jwt="token")
        assert config.url == "https://datahub.sesam.cloud/api/config"

    def test_repr_hides_token(self) -> None:
        """Test the token never appears in repr."""
        config = RunConfig(path=Path("/repo"), node="node.example", jwt="very-secret")
        assert "very-secret" not in repr(config)

    def test_immutable(self) -> None:
        """Test fields cannot be reassigned."""
        config = RunConfig(path=Path("/repo"), node="node.example", jwt="token")
        with pytest.raises(AttributeError):
            config.branch = "prod"  # type: ignore[misc]


# ---- ArchiveEntry Tests -------------------------------------------------------------------------------------


class TestArchiveEntry:
    """Tests for ArchiveEntry dataclass."""

    def test_file_entry(self) -> None:
        entry = ArchiveEntry(name="pipes/a.conf.json", data=b"{}")
        assert entry.is_dir is False
        assert entry.data == b"{}"

    def test_directory_entry(self) -> None:
        entry = ArchiveEntry(name="pipes/", is_dir=True)
        assert entry.data == b""


# ---- CommandResult Tests ------------------------------------------------------------------------------------


class TestCommandResult:
    """Tests for CommandResult dataclass."""

    def test_ok(self) -> None:
        assert CommandResult(args=["git", "status"], returncode=0).ok is True
        assert CommandResult(args=["git", "status"], returncode=1).ok is False

    def test_check_returns_self(self) -> None:
        """Test check passes successful results through."""
        result = CommandResult(args=["git", "status"], returncode=0, stdout="clean\n")
        assert result.check() is result

    def test_check_raises_on_failure(self) -> None:
        """Test check raises CommandError carrying the result."""
        result = CommandResult(args=["git", "checkout", "nope"], returncode=1, stderr="error: pathspec 'nope'\n")
        with pytest.raises(CommandError) as exc_info:
            result.check()
        assert exc_info.value.result is result
        assert "git checkout nope" in str(exc_info.value)
        assert "pathspec 'nope'" in str(exc_info.value)

    def test_output_combines_streams(self) -> None:
        result = CommandResult(args=["git"], returncode=1, stdout="out\n", stderr="err\n")
        assert result.output == "out\nerr"

    def test_output_skips_empty_streams(self) -> None:
        result = CommandResult(args=["git"], returncode=1, stdout="", stderr="err\n")
        assert result.output == "err"


# ---- DiffResult Tests ---------------------------------------------------------------------------------------


class TestDiffResult:
    """Tests for DiffResult dataclass."""

    def test_empty_diff(self) -> None:
        result = DiffResult(reference="master", branch="tmp", text="")
        assert result.has_changes is False
        assert result.files == []

    def test_files_from_headers(self) -> None:
        """Test paths are read from diff --git headers in order."""
        text = (
            "diff --git a/pipes/orders.conf.json b/pipes/orders.conf.json\n"
            "index 1111111..2222222 100644\n"
            "diff --git a/systems/erp.conf.json b/systems/erp.conf.json\n"
            "new file mode 100644\n"
        )
        result = DiffResult(reference="master", branch="tmp", text=text)
        assert result.has_changes is True
        assert result.files == ["pipes/orders.conf.json", "systems/erp.conf.json"]
