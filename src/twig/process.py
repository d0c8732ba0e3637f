"""External process execution."""

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence

from twig.exceptions import CommandError, ExecutionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandOutcome:
    """Result of running one external command."""

    args: tuple[str, ...]
    returncode: int
    stdout: bytes = field(default=b"", repr=False)
    stderr: bytes = field(default=b"", repr=False)

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    @property
    def text(self) -> str:
        """Captured stdout decoded and stripped."""
        return self.stdout.decode(errors="replace").strip()

    def describe_failure(self) -> str:
        """Best available explanation of why the command failed."""
        detail = self.stderr.decode(errors="replace").strip()
        if detail:
            return detail
        return f"'{' '.join(self.args)}' exited with status {self.returncode}"


class ProcessExecutor:
    """Runs external commands, either capturing or streaming their output."""

    def __init__(self, cwd: Optional[Path] = None) -> None:
        self.cwd = cwd

    def run(self, args: Sequence[str], capture: bool = True) -> CommandOutcome:
        """Run a command and wait for it to finish.

        Args:
            args: Program followed by its arguments
            capture: Buffer stdout/stderr into the outcome. When False the child
                writes straight to this process's terminal and the outcome
                carries empty output.

        Raises:
            ExecutionError: If the program could not be launched
            CommandError: If the working directory is missing or unusable
        """
        args = tuple(args)
        logger.debug("Running %s (capture=%s)", " ".join(args), capture)
        try:
            if capture:
                completed = subprocess.run(args, cwd=self.cwd, capture_output=True, check=False)
            else:
                completed = subprocess.run(args, cwd=self.cwd, check=False)
        except OSError as err:
            if self.cwd is not None and err.filename is not None and str(err.filename) == str(self.cwd):
                raise CommandError(f"cannot run {args[0]} in {self.cwd}", err.strerror or str(err)) from err
            # Missing binary, permission denied, ...
            raise ExecutionError(args[0], err.strerror or str(err)) from err

        outcome = CommandOutcome(
            args=args,
            returncode=completed.returncode,
            stdout=completed.stdout or b"",
            stderr=completed.stderr or b"",
        )
        logger.debug("%s exited with status %d", " ".join(args), outcome.returncode)
        return outcome
