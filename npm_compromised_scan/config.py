"""Scan configuration."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .core.errors import ConfigurationError

DEFAULT_LIST_FILE = Path("compromised.txt")
DEFAULT_FAIL_EXIT_CODE = 42
STDIN_SENTINEL = "-"


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


@dataclass
class ScanConfig:
    """Configuration for a single scan run."""

    list_file: Path = DEFAULT_LIST_FILE
    npm_json: Optional[str] = None
    output_format: OutputFormat = OutputFormat.TEXT
    fail_exit_code: int = DEFAULT_FAIL_EXIT_CODE
    run_npm: bool = True
    npm_executable: str = "npm"
    project_dir: Optional[Path] = None
    output_file: Optional[Path] = None
    log_file: Optional[Path] = None
    verbose: bool = False

    def __post_init__(self) -> None:
        """Validate configuration."""
        self.list_file = Path(self.list_file)
        self.output_format = OutputFormat(self.output_format)
        if not 0 <= self.fail_exit_code <= 255:
            raise ConfigurationError(
                f"Fail exit code must be between 0 and 255, got {self.fail_exit_code}"
            )
        if not self.npm_executable:
            raise ConfigurationError("npm executable cannot be empty")

    @property
    def reads_stdin(self) -> bool:
        return self.npm_json == STDIN_SENTINEL
