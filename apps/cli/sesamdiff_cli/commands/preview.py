"""SesamDiff preview command.

Shows what the live configuration of a Sesam node would change in a
local git repository, as a diff against a reference branch.

Execution Context:
    CLI command - invoked via `sesamdiff -path <repo> -node <host> -jwt <token>`

Dependencies:
    - click: CLI framework
    - sesamdiff_core: Config validation, git and node operations

Metadata:
    Version: 0.1.0
    Author: SesamDiff Team
"""
from __future__ import annotations

import logging

import click

from sesamdiff_core import __version__
from sesamdiff_core.config import DEFAULT_BRANCH
from sesamdiff_core.config import ENV_BRANCH
from sesamdiff_core.config import ENV_JWT
from sesamdiff_core.config import ENV_NODE
from sesamdiff_core.config import ENV_OUTPUT
from sesamdiff_core.config import ENV_PATH
from sesamdiff_core.config import build_run_config
from sesamdiff_core.differ import preview_changes
from sesamdiff_core.differ import write_diff
from sesamdiff_core.errors import CommandError
from sesamdiff_core.errors import SesamDiffError

from .utils import configure_logging
from .utils import load_env_callback

logger = logging.getLogger("sesamdiff")


# ---- Preview Command ----------------------------------------------------------------------------------------


@click.command(name="sesamdiff")
@click.version_option(version=__version__, prog_name="sesamdiff")
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False),
    default=None,
    is_eager=True,
    expose_value=False,
    callback=load_env_callback,
    help="Load environment variables from this .env file.",
)
@click.option(
    "-path",
    "--path",
    "path",
    default="",
    envvar=ENV_PATH,
    help="Path to Sesam config, must be a GIT repo.",
)
@click.option(
    "-node",
    "--node",
    "node",
    default="",
    envvar=ENV_NODE,
    help="Sesam node name.",
)
@click.option(
    "-jwt",
    "--jwt",
    "jwt",
    default="",
    envvar=ENV_JWT,
    help="JWT token to access Sesam node.",
)
@click.option(
    "-branch",
    "--branch",
    "branch",
    default=DEFAULT_BRANCH,
    envvar=ENV_BRANCH,
    show_default=True,
    help="GIT branch to check against node.",
)
@click.option(
    "-o",
    "--output",
    "output",
    default="",
    envvar=ENV_OUTPUT,
    help="Output file name (defaults to standard output).",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="HTTP timeout in seconds (no timeout by default).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Log every git command.",
)
def preview(
        path: str,
        node: str,
        jwt: str,
        branch: str,
        output: str,
        timeout: float | None,
        verbose: bool,
) -> None:
    """Diff a Sesam node's config against a git branch.

    Downloads the node config, commits it on a temporary branch created
    from BRANCH, and prints the diff between BRANCH and that commit. The
    originally checked out branch is restored afterwards.

    Examples:
        sesamdiff -path ./config -node my.sesam.cloud -jwt $TOKEN
        sesamdiff -path ./config -node my.sesam.cloud -jwt $TOKEN -branch prod
        sesamdiff -path ./config -node my.sesam.cloud -jwt $TOKEN -o out.diff
    """
    configure_logging(verbose)

    try:
        config = build_run_config(
            path=path,
            node=node,
            jwt=jwt,
            branch=branch,
            output=output,
            timeout=timeout,
        )
        result = preview_changes(config)
        write_diff(result.text, config.output)

    except CommandError as command_error:
        if command_error.result.output:
            logger.error(command_error.result.output)
        msg = f"Preview failed: git {' '.join(command_error.result.args[1:])} exited with status {command_error.result.returncode}"
        raise click.ClickException(msg) from command_error

    except SesamDiffError as preview_error:
        msg = f"Preview failed: {preview_error}"
        raise click.ClickException(msg) from preview_error
