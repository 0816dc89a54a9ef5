"""SesamDiff CLI entry point.

Runs the preview command as the `sesamdiff` console script.

Execution Context:
    CLI application - run via `python main.py` or `sesamdiff` command

Dependencies:
    - click: CLI framework
    - sesamdiff_core: Core library

Metadata:
    Version: 0.1.0
    Author: SesamDiff Team
"""
from __future__ import annotations

import sys

import click

from sesamdiff_cli.commands.preview import preview


# ---- Main Function ------------------------------------------------------------------------------------------


def main() -> int:
    """Main entry point for SesamDiff CLI.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        preview()
        return 0
    except Exception as cli_error:
        click.echo(f"Error: {cli_error}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
