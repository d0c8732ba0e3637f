"""Test configuration and fixtures."""

from pathlib import Path
from typing import Callable, Generator, Optional, Sequence, Union

import pytest
from git import Actor, Repo

from twig.process import CommandOutcome, ProcessExecutor
from twig.prompt import CANCELLED, Cancelled

AUTHOR = Actor("Test User", "test@example.com")


def configure_identity(repo: Repo) -> None:
    """Give a repository a committer identity; git stash needs one."""
    with repo.config_writer() as config:
        config.set_value("user", "name", AUTHOR.name)
        config.set_value("user", "email", AUTHOR.email)


@pytest.fixture
def test_env(tmp_path: Path) -> Generator[tuple[Path, Path], None, None]:
    """Create a test environment with local and remote repositories.

    The local repository has a single branch, main, tracking origin/main.

    Returns:
        Tuple of (local_repo_path, remote_repo_path)
    """
    remote_path = tmp_path / "remote"
    local_path = tmp_path / "local"
    remote_path.mkdir()
    local_path.mkdir()

    # Initialize remote repo with main as its default branch
    remote_repo = Repo.init(remote_path, bare=True)
    remote_repo.git.symbolic_ref("HEAD", "refs/heads/main")

    local_repo = Repo.init(local_path)
    configure_identity(local_repo)

    readme = local_path / "README.md"
    readme.write_text("# Test Repository\n")
    local_repo.index.add(["README.md"])
    local_repo.index.commit("Initial commit", author=AUTHOR, committer=AUTHOR)

    # Whatever the default branch name was, call it main
    local_repo.git.branch("-M", "main")

    origin = local_repo.create_remote("origin", url=str(remote_path))
    origin.push("main")
    local_repo.heads.main.set_tracking_branch(origin.refs.main)

    yield local_path, remote_path


@pytest.fixture
def local_repo(test_env: tuple[Path, Path]) -> Repo:
    local_path, _ = test_env
    return Repo(local_path)


@pytest.fixture
def feature_branch(local_repo: Repo) -> str:
    """Add a fully merged local branch named feature-x."""
    local_repo.create_head("feature-x")
    return "feature-x"


@pytest.fixture
def push_upstream_commit(test_env: tuple[Path, Path], tmp_path: Path) -> Callable[[str, str], str]:
    """Return a helper that commits a file to origin/main from another clone."""
    _, remote_path = test_env
    clone_path = tmp_path / "other_clone"
    other = Repo.clone_from(str(remote_path), str(clone_path))
    configure_identity(other)

    def push(filename: str, content: str) -> str:
        (clone_path / filename).write_text(content)
        other.index.add([filename])
        commit = other.index.commit(f"Add {filename}", author=AUTHOR, committer=AUTHOR)
        other.remote("origin").push("main")
        return commit.hexsha

    return push


class RecordingExecutor(ProcessExecutor):
    """Executor that records every command and can fake some of them.

    ``responses`` maps a command prefix (without the program name) to the
    outcome returned instead of running git.
    """

    def __init__(
        self,
        cwd: Optional[Path] = None,
        responses: Optional[dict[tuple[str, ...], CommandOutcome]] = None,
    ) -> None:
        super().__init__(cwd)
        self.calls: list[tuple[str, ...]] = []
        self.responses = responses or {}

    def run(self, args: Sequence[str], capture: bool = True) -> CommandOutcome:
        args = tuple(args)
        self.calls.append(args[1:])
        for prefix, outcome in self.responses.items():
            if args[1 : 1 + len(prefix)] == prefix:
                return outcome
        return super().run(args, capture=capture)

    @property
    def mutating_calls(self) -> list[tuple[str, ...]]:
        """Recorded calls other than read-only queries."""
        read_only = {("rev-parse",), ("status",), ("log",), ("--no-pager", "branch"), ("stash", "list")}
        return [call for call in self.calls if not any(call[: len(prefix)] == prefix for prefix in read_only)]


def outcome(returncode: int = 0, stdout: bytes = b"", stderr: bytes = b"") -> CommandOutcome:
    return CommandOutcome(args=("git",), returncode=returncode, stdout=stdout, stderr=stderr)


class ScriptedPrompt:
    """Prompt that replays canned answers and remembers what it was asked."""

    def __init__(
        self,
        selection: Union[str, Cancelled] = CANCELLED,
        confirmation: Union[bool, Cancelled] = CANCELLED,
    ) -> None:
        self.selection = selection
        self.confirmation = confirmation
        self.offered: list[str] = []
        self.confirm_default: Optional[bool] = None

    def select(self, message: str, choices: Sequence[str]) -> Union[str, Cancelled]:
        self.offered = list(choices)
        return self.selection

    def confirm(self, message: str, default: bool = False) -> Union[bool, Cancelled]:
        self.confirm_default = default
        return self.confirmation
