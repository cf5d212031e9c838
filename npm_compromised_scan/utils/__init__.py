"""Utility functions and helpers for npm-compromised-scan."""

from .logging import setup_logging, get_logger

__all__ = [
    "setup_logging",
    "get_logger",
]
