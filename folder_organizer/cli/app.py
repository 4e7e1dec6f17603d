"""
CLI application.

Loads the configuration, sets up logging and runs the supervisor for
all configured roots until interrupted.
"""

import asyncio
import logging
import signal
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from folder_organizer.cli.interface import create_console_interface
from folder_organizer.cli.parser import create_parser
from folder_organizer.config.constants import MESSAGES
from folder_organizer.config.settings import AppConfig, load_config
from folder_organizer.core.context import AppContext
from folder_organizer.core.supervisor import RootOutcome, Supervisor
from folder_organizer.errors import ConfigError

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO", console: Optional[Console] = None) -> None:
    """Route all log records through a RichHandler.

    Args:
        level: Root log level name.
        console: Console to render on, shared with status output.
    """
    handler = RichHandler(
        console=console,
        show_time=True,
        show_level=True,
        show_path=True,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )


class FolderOrganizerCLI:
    """CLI application running the configured watchers."""

    def __init__(self):
        """Initialize CLI application."""
        self.parser = create_parser()
        self.interface = create_console_interface()

    def run(self, args: Optional[list] = None) -> int:
        """Run the CLI application.

        Args:
            args: Optional command line arguments

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        load_dotenv()
        parsed_args = self.parser.parse_args(args)

        config_path = Path(parsed_args.config).expanduser()
        if not config_path.is_file():
            self.interface.show_message(
                MESSAGES["CONFIG_NOT_FOUND"].format(path=config_path), message_type="error"
            )
            return 1

        try:
            config = load_config(config_path)
        except ConfigError as e:
            self.interface.show_message(
                MESSAGES["CONFIG_INVALID"].format(error=e), message_type="error"
            )
            return 1

        if parsed_args.log_level:
            config.settings.set("log_level", parsed_args.log_level)
        if parsed_args.wait is not None:
            config.settings.set("wait_seconds", parsed_args.wait)

        setup_logging(config.settings.log_level, self.interface.console)

        if not config.roots:
            self.interface.show_message(MESSAGES["NO_ROOTS"], message_type="error")
            return 1

        self.interface.show_welcome()
        self.interface.show_roots(config.roots)

        if parsed_args.check:
            self.interface.show_message(
                MESSAGES["CONFIG_OK"].format(count=len(config.roots)),
                message_type="success",
            )
            return 0

        try:
            outcomes = asyncio.run(self._execute_watch(config))
        except KeyboardInterrupt:
            print("\n" + MESSAGES["OPERATION_CANCELLED"])
            return 1

        self.interface.show_summary(outcomes)
        return 0 if all(outcome.ok for outcome in outcomes) else 1

    async def _execute_watch(self, config: AppConfig) -> List[RootOutcome]:
        """Run every root under a supervisor until stopped.

        SIGINT and SIGTERM request an orderly shutdown of all roots.
        """
        context = AppContext.from_settings(config.settings)
        supervisor = Supervisor(config.roots, context)

        loop = asyncio.get_running_loop()
        handled_signals = []
        for signum in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(signum, supervisor.stop)
                handled_signals.append(signum)
            except (NotImplementedError, RuntimeError):
                # Windows event loops have no signal handler support
                pass

        self.interface.show_message(
            MESSAGES["WATCH_STARTED"].format(count=len(config.roots))
        )
        try:
            return await supervisor.run()
        finally:
            for signum in handled_signals:
                loop.remove_signal_handler(signum)
            context.close()
            self.interface.show_message(MESSAGES["WATCH_STOPPED"])


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI.

    Args:
        args: Optional command line arguments

    Returns:
        Exit code
    """
    app = FolderOrganizerCLI()
    return app.run(args)


if __name__ == "__main__":
    sys.exit(main())
