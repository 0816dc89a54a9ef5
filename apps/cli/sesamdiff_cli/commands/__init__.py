"""SesamDiff CLI command modules.

Contains the Click command implementation for the SesamDiff CLI.

Execution Context:
    Imported by main.py

Dependencies:
    - click: CLI framework

Metadata:
    Version: 0.1.0
    Author: SesamDiff Team
"""
from __future__ import annotations
