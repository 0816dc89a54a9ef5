"""SesamDiff CLI Application.

Command-line interface that previews Sesam node config changes as a git diff.

Execution Context:
    CLI application - invoked from terminal

Dependencies:
    - click: CLI framework
    - rich: Log formatting
    - sesamdiff_core: Core library

Metadata:
    Version: 0.1.0
    Author: SesamDiff Team
"""
from __future__ import annotations

__version__ = "0.1.0"
