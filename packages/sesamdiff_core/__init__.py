"""SesamDiff Core Library.

Previews what a Sesam node's live configuration would change in a git
repository: downloads the node config, stages it on a disposable branch
and diffs it against a reference branch.

Execution Context:
    Library package - imported by the CLI and other applications

Dependencies:
    - requests: Node config download
    - python-dotenv: .env loading

Metadata:
    Version: 0.1.0
    Author: SesamDiff Team
"""
from __future__ import annotations

from sesamdiff_core.errors import ArchiveError
from sesamdiff_core.errors import CommandError
from sesamdiff_core.errors import ConfigError
from sesamdiff_core.errors import FetchError
from sesamdiff_core.errors import OutputError
from sesamdiff_core.errors import SesamDiffError
from sesamdiff_core.errors import WorkTreeError
from sesamdiff_core.models import ArchiveEntry
from sesamdiff_core.models import CommandResult
from sesamdiff_core.models import DiffResult
from sesamdiff_core.models import RunConfig

__version__ = "0.1.0"

__all__ = [
    "ArchiveEntry",
    "ArchiveError",
    "CommandError",
    "CommandResult",
    "ConfigError",
    "DiffResult",
    "FetchError",
    "OutputError",
    "RunConfig",
    "SesamDiffError",
    "WorkTreeError",
    "__version__",
]
