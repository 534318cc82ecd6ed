"""Logging for gqlexplorer with CLI output helpers."""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


class ExplorerLogger(logging.Logger):
    """
    Logger that combines Python logging with CLI formatting methods.

    Provides the standard logging levels (debug, info, warning, error, critical)
    and a few semantic CLI output methods (success, hint, rule, key_value).
    """

    def __init__(self, name: str, level: int = logging.INFO) -> None:
        """
        Initialize the explorer logger.

        Args:
            name: Logger name
            level: Initial log level
        """
        super().__init__(name, level)
        self.console = Console()

        handler = RichHandler(
            console=self.console,
            rich_tracebacks=True,
            show_time=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        self.addHandler(handler)

    def print(self, message: str) -> None:
        """
        Print a plain message (with Rich markup support).

        Args:
            message: Message to display
        """
        self.console.print(message)

    def colored(self, message: str, style: str = "bold cyan") -> None:
        """
        Print a message with a Rich style, e.g. "bold cyan" or "dim".

        Args:
            message: Message to display
            style: Rich style string (default: "bold cyan")
        """
        self.print(f"[{style}]{message}[/{style}]")

    def success(self, message: str) -> None:
        """
        Print a success message in green with checkmark icon.

        Args:
            message: Message to display
        """
        self.print(f"[green]✓[/green] {message}")

    def hint(self, message: str) -> None:
        """
        Print a dimmed secondary message, such as a suggestion for the next command.

        Args:
            message: Message to display
        """
        self.colored(message, "dim")

    def rule(self, title: str, style: str = "bold blue") -> None:
        """
        Print a horizontal rule with a title.

        Args:
            title: Title text for the rule
            style: Rich style string (default: "bold blue")
        """
        self.console.rule(f"[{style}]{title}")

    def key_value(self, key: str, value: Any, key_style: str = "dim") -> None:
        """
        Print a formatted key-value pair, e.g. "URL: https://...".

        Args:
            key: The key/label to display
            value: The value to display
            key_style: Style for the key (default: "dim")
        """
        self.print(f"[{key_style}]{key}:[/{key_style}] {value}")


def get_logger(name: str = "gqlexplorer") -> ExplorerLogger:
    """
    Get or create a gqlexplorer logger instance.

    Args:
        name: Logger name (default: "gqlexplorer")

    Returns:
        ExplorerLogger instance
    """
    previous_class = logging.getLoggerClass()
    logging.setLoggerClass(ExplorerLogger)
    try:
        logger = logging.getLogger(name)
    finally:
        logging.setLoggerClass(previous_class)

    return logger  # type: ignore[return-value]
