"""Base class for dependency tree sources."""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict

from ..core.errors import SourceError


class TreeSource(ABC):
    """Produces an ``npm ls --all --json`` style document."""

    @abstractmethod
    def describe(self) -> str:
        """Human readable description of where the tree comes from."""
        pass

    @abstractmethod
    def load(self) -> Dict[str, Any]:
        """Load the dependency tree document.

        Returns:
            Decoded JSON document

        Raises:
            SourceError: If the document cannot be read or decoded
        """
        pass

    def _decode(self, text: str, context: str) -> Dict[str, Any]:
        """Decode JSON text into a document.

        Args:
            text: Raw JSON text
            context: Error message prefix naming the originating operation

        Returns:
            Decoded JSON object
        """
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise SourceError(f"{context}: {e}") from e
        except RecursionError as e:
            raise SourceError(f"{context}: document is nested too deeply") from e

        if not isinstance(document, dict):
            raise SourceError(f"{context}: document must be a JSON object")
        return document
