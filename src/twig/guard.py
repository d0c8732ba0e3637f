"""Protection of uncommitted local changes around mutating git steps.

Git offers no transaction spanning several commands, so this is a guarded
scope rather than a rollback: local changes are stashed on entry and restored
on every exit, including when the guarded step fails. If restoring fails (for
example ``git stash pop`` hits a conflict) the stash is left in place and a
RestoreError tells the user to finish the job by hand.

A successful restore ends with ``git stash clear``, which also drops any
stash entries that existed before twig ran.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console

from twig.exceptions import CommandError, RestoreError
from twig.git import GitRepo

logger = logging.getLogger(__name__)


class ChangeGuard:
    """Stashes local changes and puts them back afterwards."""

    def __init__(self, repo: GitRepo, console: Optional[Console] = None) -> None:
        self.repo = repo
        self.console = console or Console()
        self.stashed = False

    def acquire(self) -> None:
        """Stage and stash any local changes."""
        self.console.print("[bold]checking local branch status[/bold]")
        if not self.repo.has_local_changes():
            logger.debug("Working tree clean, nothing to stash")
            return

        self.console.print("- local changes found. stashing local changes")
        stash_entries = self.repo.stash_count()
        self.repo.stage_all()
        try:
            self.repo.stash()
        except CommandError:
            self.repo.unstage()
            raise

        # git stash exits 0 with "No local changes to save" when add . could
        # not reach the changes, e.g. files outside the working directory.
        if self.repo.stash_count() > stash_entries:
            self.stashed = True
        else:
            logger.warning("git stash saved nothing, leaving the stash list alone")
            self.repo.unstage()

    def release(self) -> None:
        """Pop the stash, clear the stash list and unstage everything."""
        if not self.stashed:
            return

        self.console.print("[bold]restoring stashed changes[/bold]")
        outcome = self.repo.stash_pop()
        if not outcome.succeeded:
            # Clearing now would throw the changes away.
            raise RestoreError("failed to restore local changes", outcome=outcome)
        self.repo.stash_clear()
        self.stashed = False

        self.console.print("[bold]unstaging local changes.[/bold]")
        self.repo.unstage()


@contextmanager
def protect_changes(repo: GitRepo, console: Optional[Console] = None) -> Iterator[ChangeGuard]:
    """Run the enclosed block with local changes stashed away.

    Restoration is attempted even if the block raises; the block's error is
    then re-raised. A failed restoration raises RestoreError, chained to the
    block's error when there was one.
    """
    guard = ChangeGuard(repo, console)
    guard.acquire()
    try:
        yield guard
    except BaseException:
        if guard.stashed:
            logger.info("Step failed, restoring stashed changes before reporting the error")
        guard.release()
        raise
    guard.release()
