"""Preview of node config changes against a git branch.

Drives one run: prepare a disposable branch off the reference branch,
unpack the node config onto it, commit, diff, and restore the original
branch.

Execution Context:
    Library module - imported by the CLI

Dependencies:
    - sesamdiff_core.worktree: Git operations
    - sesamdiff_core.node: Config download
    - sesamdiff_core.archive: Unpacking

Metadata:
    Version: 0.1.0
    Author: SesamDiff Team
"""
from __future__ import annotations

import logging
import os
import sys
import time
from collections.abc import Callable
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sesamdiff_core.archive import FILE_MODE
from sesamdiff_core.archive import extract_entries
from sesamdiff_core.archive import read_archive
from sesamdiff_core.errors import OutputError
from sesamdiff_core.errors import SesamDiffError
from sesamdiff_core.models import DiffResult
from sesamdiff_core.models import RunConfig
from sesamdiff_core.node import NodeClient
from sesamdiff_core.worktree import GitWorkTree

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------


TEMP_BRANCH_TEMPLATE = "temporary-differ-branch-{timestamp}"
COMMIT_MESSAGE = "test commit"


# ---- Branch Handling ----------------------------------------------------------------------------------------


def temp_branch_name(
        clock: Callable[[], float] = time.time,
) -> str:
    """Disposable branch name for the current second."""
    return TEMP_BRANCH_TEMPLATE.format(timestamp=int(clock()))


def _release_quietly(
        worktree: GitWorkTree,
        original: str,
        name: str | None,
) -> None:
    """Best-effort return to the original branch after a failed run.

    Files the run wrote or staged on the disposable branch are discarded
    first so they are not carried over to the original branch. If that
    fails the working tree stays on the disposable branch.
    """
    try:
        current = worktree.current_branch()
        if name and current == name and not worktree.is_clean():
            logger.warning("Discarding unfinished changes on branch %r", name)
            worktree.discard_changes()
    except SesamDiffError as reset_error:
        logger.warning("Could not clean up after the failed run: %s", reset_error)
        if name:
            logger.warning("Working tree left on branch %r; restore it manually", name)
        return

    try:
        if current != original:
            worktree.checkout(original)
    except SesamDiffError as checkout_error:
        logger.warning("Could not switch back to branch %r: %s", original, checkout_error)
        if name:
            logger.warning("Working tree left on branch %r; restore it manually", name)
        return

    if name:
        try:
            if worktree.branch_exists(name):
                worktree.delete_branch(name)
        except SesamDiffError as delete_error:
            logger.warning("Could not delete branch %r: %s", name, delete_error)


@contextmanager
def disposable_branch(
        worktree: GitWorkTree,
        reference: str,
        clock: Callable[[], float] = time.time,
) -> Iterator[tuple[str, str]]:
    """Check out a fresh branch off the reference branch for the block.

    On normal exit the original branch is checked out again and the
    disposable branch is force-deleted; failures there are raised. If the
    block raises, changes left on the disposable branch are discarded and
    the same release is attempted without masking the error.

    Args:
        worktree: Working tree to operate on.
        reference: Branch the disposable branch is created from.
        clock: Source of the Unix timestamp used in the branch name.

    Yields:
        Tuple of (original branch, disposable branch).
    """
    original = worktree.current_branch()
    name = None
    try:
        if original != reference:
            logger.info("Current branch (%r) differs from branch to check (%r)", original, reference)
            logger.info("Switch to branch %r", reference)
            worktree.checkout(reference)

        name = temp_branch_name(clock)
        logger.debug("Creating disposable branch %r", name)
        worktree.create_branch(name)
        yield original, name
    except BaseException:
        _release_quietly(worktree, original, name)
        raise

    worktree.checkout(original)
    worktree.delete_branch(name)


# ---- Preview ------------------------------------------------------------------------------------------------


def preview_changes(
        config: RunConfig,
        client: NodeClient | None = None,
        worktree: GitWorkTree | None = None,
        clock: Callable[[], float] = time.time,
) -> DiffResult:
    """Diff the node config against the reference branch.

    Args:
        config: Validated run configuration.
        client: Node client (created from config if omitted).
        worktree: Working tree (created from config.path if omitted).
        clock: Source of the Unix timestamp for the disposable branch name.

    Returns:
        DiffResult holding the diff text.

    Raises:
        SesamDiffError: On any failure. Nothing is retried.
    """
    client = client or NodeClient.from_config(config)
    worktree = worktree or GitWorkTree(config.path)

    worktree.ensure_work_tree()
    worktree.ensure_clean()

    with disposable_branch(worktree, config.branch, clock=clock) as (_, name):
        entries = read_archive(client.fetch_config())
        written = extract_entries(entries, worktree.root)

        worktree.add_all()
        committed = worktree.commit(COMMIT_MESSAGE)
        text = worktree.diff(config.branch, name)

    logger.debug("Wrote %d file(s), diff is %d bytes", len(written), len(text))
    return DiffResult(
        reference=config.branch,
        branch=name,
        text=text,
        entries=len(written),
        committed=committed,
    )


# ---- Output -------------------------------------------------------------------------------------------------


def write_diff(
        text: str,
        output: Path | None = None,
) -> None:
    """Write the diff to a file, or to stdout when no file is given.

    Raises:
        OutputError: If the output file cannot be written.
    """
    if output is None:
        sys.stdout.write(text)
        sys.stdout.flush()
        return

    try:
        output.write_text(text, encoding="utf-8")
        os.chmod(output, FILE_MODE)
    except OSError as write_error:
        msg = f"Failed to write diff to {str(output)!r}: {write_error}"
        raise OutputError(msg) from write_error
    logger.info("Diff written to %s", output)
