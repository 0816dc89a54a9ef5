"""Exception types for SesamDiff.

One exception class per failure category. None of them is retried or
recovered from; the CLI logs the message and exits non-zero.

Execution Context:
    Library module - imported by other sesamdiff_core modules

Metadata:
    Version: 0.1.0
    Author: SesamDiff Team
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sesamdiff_core.models import CommandResult


# ---- Exception Classes --------------------------------------------------------------------------------------


class SesamDiffError(Exception):
    """Base class for every SesamDiff failure."""


class ConfigError(SesamDiffError):
    """A required option is missing or empty."""


class WorkTreeError(SesamDiffError):
    """Target path is missing, inaccessible, or not a git working tree."""


class CommandError(SesamDiffError):
    """A git command exited with a non-zero status.

    Attributes:
        result: The failed command and its captured output.
    """

    def __init__(
            self,
            result: CommandResult,
    ) -> None:
        self.result = result
        msg = f"'{' '.join(result.args)}' exited with status {result.returncode}"
        if result.output:
            msg = f"{msg}: {result.output}"
        super().__init__(msg)


class FetchError(SesamDiffError):
    """The node could not be reached or answered with an error status.

    Attributes:
        status_code: HTTP status code, or None for connection failures.
    """

    def __init__(
            self,
            message: str,
            status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class ArchiveError(SesamDiffError):
    """The fetched archive is malformed or holds an unsafe entry path."""


class OutputError(SesamDiffError):
    """Writing an unpacked file or the diff output failed."""
