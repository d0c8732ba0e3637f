"""Interactive prompts.

Cancelling a prompt is not an error: prompts return the CANCELLED sentinel
so callers can tell "the user declined" apart from "something failed".
"""

import enum
import logging
from typing import Optional, Sequence, Union

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm, Prompt

logger = logging.getLogger(__name__)


class Cancelled(enum.Enum):
    """The user backed out of a prompt."""

    CANCELLED = "cancelled"

    def __bool__(self) -> bool:
        return False


CANCELLED = Cancelled.CANCELLED


class InteractivePrompt:
    """Prompts read from the terminal through rich."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def select(self, message: str, choices: Sequence[str]) -> Union[str, Cancelled]:
        """Ask the user to pick one of ``choices``.

        The user may answer with the number shown next to a choice or with the
        choice itself. An empty answer, Ctrl-C or end of input cancels.
        """
        for index, choice in enumerate(choices, start=1):
            self.console.print(f"  [cyan]{index}[/cyan]) {escape(choice)}")

        numbers = [str(index) for index in range(1, len(choices) + 1)]
        try:
            answer = Prompt.ask(
                f"{message} [dim](enter to cancel)[/dim]",
                console=self.console,
                choices=numbers + list(choices),
                show_choices=False,
                default="",
                show_default=False,
            )
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return CANCELLED
        except Exception:
            logger.exception("Unexpected error while prompting for a selection")
            return CANCELLED

        if not answer:
            return CANCELLED
        # A branch literally named "2" wins over the second entry.
        if answer in choices:
            return answer
        return choices[int(answer) - 1]

    def confirm(self, message: str, default: bool = False) -> Union[bool, Cancelled]:
        """Ask a yes/no question. Ctrl-C or end of input cancels."""
        try:
            return Confirm.ask(message, console=self.console, default=default)
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return CANCELLED
        except Exception:
            logger.exception("Unexpected error while prompting for confirmation")
            return CANCELLED
