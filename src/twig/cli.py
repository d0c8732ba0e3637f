"""Command line interface for twig."""

import shutil
from pathlib import Path
from typing import Annotated, Callable, Optional

import typer
from rich import print
from rich.console import Console
from rich.markup import escape

from twig import __version__, workflows
from twig.exceptions import ExecutionError, TwigError
from twig.git import GIT, GitRepo
from twig.logging_config import setup_logging
from twig.prompt import InteractivePrompt

app = typer.Typer(help="Git branch workflow tool", no_args_is_help=True)
console = Console()

PathOption = Annotated[
    Path, typer.Option(help="Path to git repository", exists=True, file_okay=False, dir_okay=True)
]


def version_callback(value: bool) -> None:
    if value:
        print(f"twig {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show informational log messages"),
    debug: bool = typer.Option(False, "--debug", help="Show debug log messages, including every git command"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Sync, switch and delete git branches without losing local changes."""
    setup_logging(verbose=verbose, debug=debug)


def require_git() -> None:
    """Fail fast when the git executable is not installed."""
    if shutil.which(GIT) is None:
        raise ExecutionError(GIT, "not found. install git and try again.")


def run_workflow(workflow: Callable[[], workflows.WorkflowResult]) -> None:
    """Run a workflow, turning twig errors into a non-zero exit."""
    try:
        require_git()
        workflow()
    except TwigError as err:
        print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=1) from err


@app.command()
def sync(path: PathOption = Path(".")) -> None:
    """Sync latest changes from the upstream branch."""
    repo = GitRepo(path)
    run_workflow(lambda: workflows.sync(repo, console))


@app.command()
def switch(path: PathOption = Path(".")) -> None:
    """Switch to another local branch."""
    repo = GitRepo(path)
    run_workflow(lambda: workflows.switch_branch(repo, InteractivePrompt(console), console))


@app.command()
def delete(path: PathOption = Path(".")) -> None:
    """Delete a local branch."""
    repo = GitRepo(path)
    run_workflow(lambda: workflows.delete_branch(repo, InteractivePrompt(console), console))


if __name__ == "__main__":
    app()
