"""Git repository operations."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from twig.exceptions import CommandError
from twig.process import CommandOutcome, ProcessExecutor

logger = logging.getLogger(__name__)

GIT = "git"
CURRENT_BRANCH_MARKER = "*"
DEFAULT_BRANCH = "main"


@dataclass(frozen=True)
class Branch:
    """A local branch."""

    name: str
    is_current: bool = False


class GitRepo:
    """Git commands run against one working directory."""

    def __init__(self, path: Optional[Path] = None, executor: Optional[ProcessExecutor] = None) -> None:
        """Initialize repository.

        Args:
            path: Directory git runs in; the current directory when omitted
            executor: Runs the git processes; one bound to ``path`` is created when omitted
        """
        self.path = path
        self.executor = executor or ProcessExecutor(cwd=path)

    def _git(self, *args: str, capture: bool = True) -> CommandOutcome:
        return self.executor.run([GIT, *args], capture=capture)

    def _git_checked(self, error_msg: str, *args: str, capture: bool = False) -> CommandOutcome:
        """Run git and raise CommandError unless it succeeded."""
        outcome = self._git(*args, capture=capture)
        if not outcome.succeeded:
            raise CommandError(error_msg, outcome=outcome)
        return outcome

    def is_repository(self) -> bool:
        """Check whether the working directory is inside a git repository."""
        return self._git("rev-parse", "--git-dir").succeeded

    def get_upstream(self) -> Optional[str]:
        """Get the upstream of the current branch, or None if it has none."""
        outcome = self._git("rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}")
        if not outcome.succeeded:
            return None
        return outcome.text

    def list_branches(self) -> Tuple[Branch, list[Branch]]:
        """Get the current branch and all other local branches.

        The current branch falls back to "main" when the listing marks none,
        without checking that such a branch exists.
        """
        outcome = self._git_checked("failed to get branch list", "--no-pager", "branch", "--no-color", capture=True)

        current: Optional[Branch] = None
        others: list[Branch] = []
        for line in outcome.stdout.decode(errors="replace").splitlines():
            line = line.strip()
            if not line:
                continue
            if line.startswith(CURRENT_BRANCH_MARKER):
                name = line[len(CURRENT_BRANCH_MARKER) :].strip()
                if current is None:
                    current = Branch(name, is_current=True)
                continue
            others.append(Branch(line))

        if current is None:
            logger.debug("No branch marked as current, assuming %r", DEFAULT_BRANCH)
            current = Branch(DEFAULT_BRANCH, is_current=True)
        return current, others

    def has_local_changes(self) -> bool:
        """Check for staged, unstaged or untracked changes."""
        outcome = self._git_checked("failed to get git status", "status", "--porcelain", capture=True)
        return bool(outcome.stdout.strip())

    def stage_all(self) -> None:
        self._git_checked("failed to stage local changes", "add", ".")

    def stash(self) -> None:
        self._git_checked("failed to stash local changes", "stash")

    def stash_count(self) -> int:
        """Number of entries in the stash list."""
        outcome = self._git_checked("failed to list stashes", "stash", "list", capture=True)
        return len(outcome.text.splitlines())

    def stash_pop(self) -> CommandOutcome:
        """Reapply the latest stash; the caller decides how to handle failure."""
        return self._git("stash", "pop", capture=False)

    def stash_clear(self) -> None:
        self._git_checked("failed to clear stash", "stash", "clear")

    def unstage(self) -> None:
        self._git_checked("failed to unstage local changes", "reset")

    def fetch(self) -> None:
        """Fetch from the remote, pruning deleted remote branches."""
        self._git_checked("failed to fetch remote changes", "fetch", "-p")

    def pull_rebase(self) -> None:
        self._git_checked("failed to pull remote changes", "pull", "--rebase")

    def get_latest_commit(self) -> str:
        """Get the latest commit as a one line summary."""
        return self._git_checked("failed to get latest commit", "log", "-1", "--oneline", capture=True).text

    def checkout(self, branch_name: str) -> None:
        self._git_checked("failed to switch branch", "checkout", branch_name)

    def delete_branch(self, branch_name: str) -> None:
        """Delete a local branch, even if it is not merged."""
        self._git_checked("failed to delete branch", "branch", "-D", branch_name)
