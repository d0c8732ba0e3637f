"""Branch workflows: sync, switch and delete.

Each workflow returns a WorkflowResult for the clean outcomes (done, nothing
to do, cancelled by the user) and raises a TwigError subclass on failure.
"""

import enum
import logging
from typing import Optional, Protocol, Sequence, Union

from rich.console import Console
from rich.markup import escape

from twig.git import GitRepo
from twig.guard import protect_changes
from twig.prompt import CANCELLED, Cancelled

logger = logging.getLogger(__name__)


class WorkflowResult(enum.Enum):
    """How a workflow finished, short of failing."""

    COMPLETED = "completed"
    NOTHING_TO_DO = "nothing to do"
    CANCELLED = "cancelled"


class Prompter(Protocol):
    def select(self, message: str, choices: Sequence[str]) -> Union[str, Cancelled]: ...

    def confirm(self, message: str, default: bool = False) -> Union[bool, Cancelled]: ...


def sync(repo: GitRepo, console: Optional[Console] = None) -> WorkflowResult:
    """Fetch and rebase the current branch onto its upstream."""
    console = console or Console()

    if not repo.is_repository():
        console.print("current directory is not a git repository. nothing to sync.")
        return WorkflowResult.NOTHING_TO_DO

    upstream = repo.get_upstream()
    if upstream is None:
        console.print("no upstream branch found. nothing to sync")
        return WorkflowResult.NOTHING_TO_DO
    logger.info("Syncing with upstream %s", upstream)

    with protect_changes(repo, console):
        console.print(f"[bold]syncing changes with upstream branch[/bold] {escape(upstream)}")
        repo.fetch()
        repo.pull_rebase()

    latest_commit = repo.get_latest_commit()
    console.print(f"- latest commit: [dim]{escape(latest_commit)}[/dim]")
    console.print("[bold]git sync complete ^.^[/bold]")
    return WorkflowResult.COMPLETED


def _select_branch(repo: GitRepo, prompt: Prompter, console: Console, message: str) -> Union[str, WorkflowResult]:
    """List the other local branches and let the user pick one."""
    current, others = repo.list_branches()
    console.print(f"[bold]current branch[/bold]: {escape(current.name)}")

    if not others:
        console.print("no other local branches found. nothing to do.")
        return WorkflowResult.NOTHING_TO_DO

    selected = prompt.select(message, [branch.name for branch in others])
    if selected is CANCELLED:
        console.print("[yellow]operation cancelled[/yellow]")
        return WorkflowResult.CANCELLED
    return selected


def switch_branch(repo: GitRepo, prompt: Prompter, console: Optional[Console] = None) -> WorkflowResult:
    """Check out another local branch, carrying local changes across."""
    console = console or Console()

    selected = _select_branch(repo, prompt, console, "select new branch")
    if isinstance(selected, WorkflowResult):
        return selected

    with protect_changes(repo, console):
        repo.checkout(selected)

    console.print("[bold]branch switch complete ^.^[/bold]")
    return WorkflowResult.COMPLETED


def delete_branch(repo: GitRepo, prompt: Prompter, console: Optional[Console] = None) -> WorkflowResult:
    """Force delete another local branch after explicit confirmation."""
    console = console or Console()

    selected = _select_branch(repo, prompt, console, "select branch to delete")
    if isinstance(selected, WorkflowResult):
        return selected

    console.print(f"[yellow]warning:[/yellow] deleting '{escape(selected)}' cannot be undone, even if it is not merged.")
    confirmed = prompt.confirm(f"delete branch '{escape(selected)}'?", default=False)
    if confirmed is not True:
        console.print("[yellow]operation cancelled[/yellow]")
        return WorkflowResult.CANCELLED

    repo.delete_branch(selected)
    console.print(f"[bold]deleted branch {escape(selected)} ^.^[/bold]")
    return WorkflowResult.COMPLETED
