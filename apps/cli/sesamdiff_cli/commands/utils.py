"""Utility functions for SesamDiff CLI commands.

Execution Context:
    CLI command utilities - imported by command modules

Dependencies:
    - rich: Log rendering on stderr
    - sesamdiff_core.config: .env loading

Metadata:
    Version: 0.1.0
    Author: SesamDiff Team
"""
from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from sesamdiff_core.config import load_env_file


LOG_FORMAT = "%(message)s"


def configure_logging(
        verbose: bool = False,
) -> None:
    """Send log records to stderr through rich.

    Stdout is reserved for the diff, so every diagnostic goes to stderr.

    Args:
        verbose: Log at DEBUG instead of INFO.
    """
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    # urllib3 connection chatter is noise even in verbose mode
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def load_env_callback(
        ctx: click.Context,
        param: click.Parameter,
        value: str | None,
) -> str | None:
    """Load a .env file before the other options read the environment."""
    load_env_file(Path(value) if value else None)
    return value
