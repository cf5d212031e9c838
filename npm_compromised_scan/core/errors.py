"""Exceptions raised by npm-compromised-scan."""


class ScanError(Exception):
    """Base exception class for all scan errors."""
    pass


class DenylistEntryError(ValueError):
    """Raised when a single denylist entry is malformed."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class DenylistSyntaxError(ScanError, ValueError):
    """Raised when a denylist line violates the entry grammar."""

    def __init__(self, line_number: int, line: str, reason: str) -> None:
        self.line_number = line_number
        self.line = line
        self.reason = reason
        super().__init__(f"Invalid entry at line {line_number}: '{line}' ({reason})")


class SourceError(ScanError):
    """Raised when a denylist or dependency tree cannot be read or decoded."""
    pass


class ConfigurationError(ScanError):
    """Raised when configuration is invalid."""
    pass
