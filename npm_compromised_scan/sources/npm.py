"""Tree source running ``npm ls`` in a project directory."""

import subprocess
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.errors import SourceError
from ..utils.logging import get_logger
from .base import TreeSource

NPM_LS_ARGS = ["ls", "--all", "--json"]


class NpmLsTreeSource(TreeSource):
    """Runs ``npm ls --all --json`` and decodes its output."""

    def __init__(self, executable: str = "npm", cwd: Optional[Path] = None) -> None:
        """Initialize the source.

        Args:
            executable: npm executable name or path
            cwd: Project directory, defaults to the current directory
        """
        self.executable = executable
        self.cwd = cwd
        self.logger = get_logger("NpmLsTreeSource")

    @property
    def command(self) -> List[str]:
        return [self.executable, *NPM_LS_ARGS]

    def describe(self) -> str:
        return f"`{' '.join(self.command)}`"

    def load(self) -> Dict[str, Any]:
        self.logger.debug(f"Running {self.describe()}")
        try:
            output = subprocess.run(
                self.command,
                cwd=self.cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=False,
            )
        except OSError as e:
            raise SourceError(f"Failed to execute {self.describe()} ({e})") from e

        # npm exits non-zero for extraneous or missing packages but still prints the tree
        if output.returncode != 0:
            self.logger.warning(
                f"npm ls exited with non-zero status ({output.returncode}). "
                "Still attempting to parse output."
            )

        stdout = output.stdout.decode("utf-8", errors="replace")
        return self._decode(stdout, f"Failed to parse JSON from {self.describe()} output")
