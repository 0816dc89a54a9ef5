"""Git working tree operations for SesamDiff.

Wraps the git executable for the handful of state transitions a run
needs. Every command runs with the working tree as its cwd, so the
process working directory is never changed.

Execution Context:
    Library module - imported by sesamdiff_core.differ

Dependencies:
    - subprocess: Runs the git executable
    - sesamdiff_core.models: CommandResult

Metadata:
    Version: 0.1.0
    Author: SesamDiff Team
"""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from sesamdiff_core.errors import CommandError
from sesamdiff_core.errors import WorkTreeError
from sesamdiff_core.models import CommandResult

logger = logging.getLogger(__name__)


# ---- Constants ----------------------------------------------------------------------------------------------


GIT = "git"
WORK_TREE_TOKEN = "true\n"
CLEAN_TREE_MARKERS = ("working tree clean", "nothing to commit")


# ---- Work Tree Class ----------------------------------------------------------------------------------------


class GitWorkTree:
    """Git working tree addressed by an explicit root directory.

    Attributes:
        root: Directory every git command runs in.
    """

    def __init__(
            self,
            root: Path | str,
    ) -> None:
        """Initialize work tree wrapper.

        Args:
            root: Directory of the working tree.
        """
        self.root = Path(root)

    def run(
            self,
            *args: str,
    ) -> CommandResult:
        """Run a git command in the working tree.

        Args:
            *args: Arguments passed to git.

        Returns:
            CommandResult with captured output. Failures are not raised here.

        Raises:
            CommandError: If the git executable cannot be started.
        """
        argv = [GIT, *args]
        logger.debug("Running %s in %s", " ".join(argv), self.root)
        try:
            completed = subprocess.run(
                argv,
                cwd=self.root,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as exec_error:
            raise CommandError(CommandResult(args=argv, returncode=127, stderr=str(exec_error))) from exec_error
        return CommandResult(
            args=argv,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

    # ---- Repository State -----------------------------------------------------------------------------------

    def is_work_tree(
            self,
    ) -> bool:
        """Check whether root is inside a git working tree."""
        result = self.run("rev-parse", "--is-inside-work-tree")
        return result.ok and result.stdout == WORK_TREE_TOKEN

    def ensure_work_tree(
            self,
    ) -> None:
        """Raise WorkTreeError unless root is a git working tree."""
        if not self.is_work_tree():
            msg = f"Directory {str(self.root)!r} is not a GIT repo"
            raise WorkTreeError(msg)

    def is_clean(
            self,
    ) -> bool:
        """Check for the absence of staged, unstaged and untracked changes."""
        return self.run("status", "--porcelain").check().stdout == ""

    def ensure_clean(
            self,
    ) -> None:
        """Raise WorkTreeError if the working tree has uncommitted changes."""
        if not self.is_clean():
            msg = f"Directory {str(self.root)!r} has uncommitted changes; commit or stash them first"
            raise WorkTreeError(msg)

    def current_branch(
            self,
    ) -> str:
        """Name of the checked out branch."""
        result = self.run("rev-parse", "--abbrev-ref", "HEAD").check()
        return result.stdout.rstrip("\n")

    def branch_exists(
            self,
            name: str,
    ) -> bool:
        """Check whether a local branch exists."""
        return self.run("rev-parse", "--verify", "--quiet", f"refs/heads/{name}").ok

    # ---- Branch Operations ----------------------------------------------------------------------------------

    def checkout(
            self,
            name: str,
    ) -> None:
        """Switch to an existing branch."""
        self.run("checkout", name).check()

    def create_branch(
            self,
            name: str,
    ) -> None:
        """Create a branch from HEAD and switch to it."""
        self.run("checkout", "-b", name).check()

    def delete_branch(
            self,
            name: str,
    ) -> None:
        """Force-delete a local branch."""
        self.run("branch", "-D", name).check()

    # ---- Staging and Commits --------------------------------------------------------------------------------

    def add_all(
            self,
    ) -> None:
        """Stage every change in the working tree."""
        self.run("add", ".").check()

    def discard_changes(
            self,
    ) -> None:
        """Reset tracked files to HEAD and remove untracked files."""
        self.run("reset", "--quiet", "--hard", "HEAD").check()
        self.run("clean", "--quiet", "--force", "-d").check()

    def has_staged_changes(
            self,
    ) -> bool:
        """Check whether the index differs from HEAD.

        Raises:
            CommandError: If git fails for a reason other than a difference.
        """
        result = self.run("diff", "--cached", "--quiet")
        if result.returncode in (0, 1):
            return result.returncode == 1
        raise CommandError(result)

    def commit(
            self,
            message: str,
    ) -> bool:
        """Commit staged changes.

        Having nothing to commit is not an error.

        Args:
            message: Commit message.

        Returns:
            True if a commit was created, False if there was nothing to commit.

        Raises:
            CommandError: If the commit fails for any other reason.
        """
        if not self.has_staged_changes():
            logger.debug("Nothing to commit, working tree clean")
            return False

        result = self.run("commit", "-m", message)
        if result.ok:
            return True
        if any(marker in result.stdout for marker in CLEAN_TREE_MARKERS):
            return False
        raise CommandError(result)

    def diff(
            self,
            base: str,
            head: str,
    ) -> str:
        """Diff between two revisions.

        Args:
            base: Revision on the left side.
            head: Revision on the right side.

        Returns:
            Diff text (empty if the revisions have the same tree).
        """
        return self.run("diff", "--no-color", base, head, "--").check().stdout
