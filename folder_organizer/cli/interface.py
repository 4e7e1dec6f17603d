"""
Console output for the watcher process.

Status messages go to a rich Console; log records are rendered by a
RichHandler on the same console so both interleave cleanly.
"""

from typing import List

from rich.console import Console
from rich.style import Style
from rich.table import Table

from folder_organizer.config.constants import MESSAGES, VERSION
from folder_organizer.config.settings import WatchedRoot
from folder_organizer.core.supervisor import RootOutcome


class ConsoleInterface:
    """Console-based user interface implementation."""

    def __init__(self, console: Console = None):
        """Initialize console interface."""
        self.console = console or Console()

        # Theme styles (minimalist - no bold/dim modifiers)
        self.success_style = Style(color="green")
        self.error_style = Style(color="red")
        self.warning_style = Style(color="yellow")
        self.info_style = Style(color="white")

    def show_welcome(self) -> None:
        """Show welcome message in minimalist Unix style."""
        header = f"Folder Organizer v{VERSION}\n-----------------------"
        self.console.print(header, style="blue")

    def show_message(self, message: str, message_type: str = "info") -> None:
        """Show a message to the user.

        Args:
            message: Message to display
            message_type: Type of message (info, success, error, warning)
        """
        styles = {
            "success": self.success_style,
            "error": self.error_style,
            "warning": self.warning_style,
            "info": self.info_style,
        }
        style = styles.get(message_type)
        if style:
            self.console.print(message, style=style)
        else:
            self.console.print(message)

    def show_roots(self, roots: List[WatchedRoot]) -> None:
        """Show the configured roots as a table."""
        table = Table(show_edge=False, header_style="blue")
        table.add_column("Name")
        table.add_column("Modus")
        table.add_column("Quelle")
        table.add_column("Ziel")
        table.add_column("Unterordner")
        for root in roots:
            table.add_row(
                root.name,
                root.mode.value,
                str(root.source),
                str(root.destination),
                "ja" if root.place_in_subfolder else "nein",
            )
        self.console.print(table)

    def show_summary(self, outcomes: List[RootOutcome]) -> None:
        """Show how each root ended."""
        for outcome in outcomes:
            if outcome.ok:
                self.show_message(
                    MESSAGES["ROOT_OK"].format(name=outcome.name), "success"
                )
            else:
                self.show_message(
                    MESSAGES["ROOT_FAILED"].format(
                        name=outcome.name, error=outcome.error
                    ),
                    "error",
                )


def create_console_interface() -> ConsoleInterface:
    """Create and return a console interface."""
    return ConsoleInterface()
