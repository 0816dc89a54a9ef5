"""Run configuration and precondition checks.

Validates the options of a run before any network or git command is
issued, and loads defaults from a .env file when one is present.

Execution Context:
    Library module - imported by the CLI and sesamdiff_core.differ

Dependencies:
    - python-dotenv: Load environment variables from .env file
    - sesamdiff_core.models: RunConfig

Metadata:
    Version: 0.1.0
    Author: SesamDiff Team
"""
from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv

from sesamdiff_core.errors import ConfigError
from sesamdiff_core.errors import WorkTreeError
from sesamdiff_core.models import RunConfig

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------


DEFAULT_BRANCH = "master"

ENV_PATH = "SESAM_CONFIG_PATH"
ENV_NODE = "SESAM_NODE"
ENV_JWT = "SESAM_JWT"
ENV_BRANCH = "SESAM_BRANCH"
ENV_OUTPUT = "SESAM_DIFF_OUTPUT"


# ---- Environment Loading ------------------------------------------------------------------------------------


def load_env_file(
        env_path: Path | None = None,
) -> Path | None:
    """Load environment variables from .env file.

    Searches for .env file in:
    1. Specified path (if provided)
    2. Current working directory
    3. Parent directories (up to 3 levels)

    Args:
        env_path: Explicit path to .env file (optional).

    Returns:
        Path of the loaded file, or None if nothing was loaded.
    """
    if env_path:
        if env_path.exists():
            load_dotenv(env_path, override=True)
            return env_path
        return None

    current = Path.cwd()
    for candidate_dir in [current, *list(current.parents)[:3]]:
        candidate = candidate_dir / ".env"
        if candidate.exists():
            load_dotenv(candidate, override=True)
            return candidate
    return None


# ---- Configuration Functions --------------------------------------------------------------------------------


def build_run_config(
        path: str | Path | None,
        node: str | None,
        jwt: str | None,
        branch: str | None = DEFAULT_BRANCH,
        output: str | Path | None = None,
        timeout: float | None = None,
) -> RunConfig:
    """Validate options and build an immutable run configuration.

    Args:
        path: Path to the Sesam config, must be a git working tree.
        node: Sesam node hostname.
        jwt: JWT token to access the node.
        branch: Git branch to check against the node. Empty means default.
        output: Output file name. Empty means standard output.
        timeout: HTTP timeout in seconds (optional).

    Returns:
        RunConfig instance.

    Raises:
        ConfigError: If a required option is missing or empty.
        WorkTreeError: If the path does not exist or is not a directory.
    """
    if not path:
        raise ConfigError("Path to Sesam config must be provided")
    if not node:
        raise ConfigError("Sesam node must be provided")
    if not jwt:
        raise ConfigError("JWT token to access Sesam node must be provided")

    root = Path(path).expanduser()
    try:
        is_dir = root.is_dir()
    except OSError as access_error:
        msg = f"Couldn't access {str(root)!r}: {access_error}"
        raise WorkTreeError(msg) from access_error
    if not is_dir:
        msg = f"Couldn't change working directory to {str(root)!r}: no such directory"
        raise WorkTreeError(msg)

    branch = branch or DEFAULT_BRANCH
    if branch == DEFAULT_BRANCH:
        logger.info('Default branch ("%s") will be used', DEFAULT_BRANCH)

    return RunConfig(
        path=root.resolve(),
        node=node,
        jwt=jwt,
        branch=branch,
        output=Path(output).resolve() if output else None,
        timeout=timeout,
    )
