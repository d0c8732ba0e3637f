"""Exceptions raised by twig."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from twig.process import CommandOutcome


class TwigError(Exception):
    """Base exception for all twig errors."""


class ExecutionError(TwigError):
    """An external command could not be launched at all."""

    def __init__(self, program: str, message: str) -> None:
        self.program = program
        super().__init__(f"{program}: {message}")


class CommandError(TwigError):
    """A launched git command reported failure."""

    def __init__(
        self,
        operation: str,
        message: Optional[str] = None,
        outcome: Optional["CommandOutcome"] = None,
    ) -> None:
        """Initialize error.

        Args:
            operation: What twig was trying to do, e.g. "failed to switch branch"
            message: Underlying cause; derived from ``outcome`` when omitted
            outcome: Result of the command that failed, if any
        """
        self.operation = operation
        self.outcome = outcome
        if message is None and outcome is not None:
            message = outcome.describe_failure()
        self.message = message

        error_msg = operation
        if message:
            error_msg += f": {message}"
        super().__init__(error_msg)


class RestoreError(CommandError):
    """Stashed local changes could not be restored automatically."""

    recovery_hint = (
        "Stash protection is best effort. Your local changes are still saved in the git stash: "
        "resolve any conflicts, then run 'git stash pop' to restore them."
    )

    def __str__(self) -> str:
        return f"{super().__str__()}\n{self.recovery_hint}"
