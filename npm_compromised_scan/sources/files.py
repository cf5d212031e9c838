"""Tree sources reading an existing JSON document."""

import sys
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

from ..core.errors import SourceError
from ..utils.logging import get_logger
from .base import TreeSource


class FileTreeSource(TreeSource):
    """Reads the tree from a saved ``npm ls --all --json`` file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.logger = get_logger("FileTreeSource")

    def describe(self) -> str:
        return f"file {self.path}"

    def load(self) -> Dict[str, Any]:
        try:
            data = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceError(f"Failed to read npm JSON file: {self.path} ({e})") from e

        self.logger.debug(f"Read {len(data)} bytes from {self.path}")
        return self._decode(data, "Failed to parse provided npm JSON file")


class StdinTreeSource(TreeSource):
    """Reads the tree verbatim from standard input."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        """Initialize the source.

        Args:
            stream: Stream to read, defaults to ``sys.stdin`` at load time
        """
        self.stream = stream
        self.logger = get_logger("StdinTreeSource")

    def describe(self) -> str:
        return "standard input"

    def load(self) -> Dict[str, Any]:
        stream = self.stream if self.stream is not None else sys.stdin
        try:
            data = stream.read()
        except (OSError, UnicodeDecodeError) as e:
            raise SourceError(f"Failed to read stdin ({e})") from e

        self.logger.debug(f"Read {len(data)} bytes from stdin")
        return self._decode(data, "Failed to parse JSON from stdin (--npm-json -)")
