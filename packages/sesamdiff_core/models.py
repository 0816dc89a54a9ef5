"""Data models for a SesamDiff run.

Defines the transient structures created and consumed within a single
invocation: the run configuration, archive entries fetched from the node,
results of git invocations, and the final diff.

Execution Context:
    Library module - imported by other sesamdiff_core modules

Dependencies:
    - dataclasses: Data class decorators
    - sesamdiff_core.errors: CommandError raised by CommandResult.check

Metadata:
    Version: 0.1.0
    Author: SesamDiff Team
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path

from sesamdiff_core.errors import CommandError


# ---- Constants ----------------------------------------------------------------------------------------------


CONFIG_ENDPOINT = "https://{node}/api/config"

_DIFF_HEADER = re.compile(r"^diff --git a/.+ b/(.+)$", re.MULTILINE)


# ---- Data Model Classes -------------------------------------------------------------------------------------


@dataclass(frozen=True)
class RunConfig:
    """Validated options for one run.

    Attributes:
        path: Resolved root of the git working tree holding the config.
        node: Sesam node hostname.
        jwt: Bearer token used to access the node.
        branch: Reference branch the node config is compared against.
        output: File to write the diff to (None writes to stdout).
        timeout: HTTP timeout in seconds (None blocks indefinitely).
    """

    path: Path
    node: str
    jwt: str = field(repr=False)
    branch: str = "master"
    output: Path | None = None
    timeout: float | None = None

    @property
    def url(
            self,
    ) -> str:
        """Config endpoint of the node."""
        return CONFIG_ENDPOINT.format(node=self.node)


@dataclass
class ArchiveEntry:
    """Single member of the config archive.

    Attributes:
        name: Relative path stored in the archive.
        data: Decompressed content.
        is_dir: Whether the member is a directory entry.
    """

    name: str
    data: bytes = b""
    is_dir: bool = False


@dataclass
class CommandResult:
    """Outcome of one git invocation.

    Attributes:
        args: Full argument vector that was executed.
        returncode: Process exit status.
        stdout: Captured standard output.
        stderr: Captured standard error.
    """

    args: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(
            self,
    ) -> bool:
        """Whether the command exited with status 0."""
        return self.returncode == 0

    @property
    def output(
            self,
    ) -> str:
        """Combined stdout and stderr, for diagnostics."""
        return "\n".join(part.strip() for part in (self.stdout, self.stderr) if part.strip())

    def check(
            self,
    ) -> CommandResult:
        """Return self, or raise if the command failed.

        Raises:
            CommandError: If the exit status is non-zero.
        """
        if not self.ok:
            raise CommandError(self)
        return self


@dataclass
class DiffResult:
    """Diff between the reference branch and the fetched node config.

    Attributes:
        reference: Branch the config was compared against.
        branch: Name of the disposable branch that held the node config.
        text: Diff text as produced by git.
        entries: Number of archive entries written to the working tree.
        committed: False when there was nothing to commit.
    """

    reference: str
    branch: str
    text: str
    entries: int = 0
    committed: bool = True

    @property
    def has_changes(
            self,
    ) -> bool:
        """Check if the node config differs from the reference branch."""
        return bool(self.text)

    @property
    def files(
            self,
    ) -> list[str]:
        """Paths named in the diff headers, in diff order."""
        return _DIFF_HEADER.findall(self.text)
