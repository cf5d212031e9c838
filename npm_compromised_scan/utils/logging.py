"""Logging utilities for npm-compromised-scan."""

import logging
from pathlib import Path
from typing import Any, Optional
from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

ROOT_LOGGER_NAME = "npm_compromised_scan"


class ScanLogger:
    """Thin logger wrapper namespaced under the package logger."""

    def __init__(self, name: str) -> None:
        self.logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log info message."""
        self.logger.info(msg, extra=kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log warning message."""
        self.logger.warning(msg, extra=kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        """Log error message."""
        self.logger.error(msg, extra=kwargs)

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log debug message."""
        self.logger.debug(msg, extra=kwargs)


def _stderr_handler() -> RichHandler:
    # Reports go to stdout, so logs must stay on stderr.
    console = Console(stderr=True, theme=Theme({
        "logging.level.info": "cyan",
        "logging.level.warning": "yellow",
        "logging.level.error": "red",
        "logging.level.critical": "red bold",
        "logging.level.debug": "dim",
    }))

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(fmt="%(name)s: %(message)s", datefmt="[%X]"))
    return handler


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """Setup logging for the package logger.

    Args:
        verbose: Enable debug logging
        log_file: Optional log file path
    """
    level = logging.DEBUG if verbose else logging.WARNING

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()
    logger.addHandler(_stderr_handler())
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        logger.addHandler(file_handler)


def get_logger(name: str) -> ScanLogger:
    """Get a logger for a component.

    Args:
        name: Component name

    Returns:
        Logger wrapper
    """
    return ScanLogger(name)
