"""Output formatters for npm-compromised-scan."""

from .formatters import JSONFormatter, TextFormatter

__all__ = [
    "TextFormatter",
    "JSONFormatter",
]
