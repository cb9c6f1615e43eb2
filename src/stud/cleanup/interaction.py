"""User confirmation for destructive cleanup steps."""

from abc import ABC, abstractmethod

from rich.console import Console
from rich.prompt import Confirm


class UserInteraction(ABC):
    """Asks the user yes/no questions."""

    @abstractmethod
    def confirm(self, prompt: str, default: bool = False) -> bool:
        """Ask the user to confirm an action.

        Args:
            prompt: Question to show
            default: Answer used when the user just presses enter

        Returns:
            True if the user confirmed
        """


class ConsoleInteraction(UserInteraction):
    """Confirmation prompts on the terminal."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def confirm(self, prompt: str, default: bool = False) -> bool:
        return Confirm.ask(prompt, default=default, console=self.console)
