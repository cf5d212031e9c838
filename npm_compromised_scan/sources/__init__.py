"""Dependency tree sources for npm-compromised-scan."""

from ..config import ScanConfig
from ..core.errors import ConfigurationError
from .base import TreeSource
from .files import FileTreeSource, StdinTreeSource
from .npm import NpmLsTreeSource


def resolve_tree_source(config: ScanConfig) -> TreeSource:
    """Pick the tree source for a configuration.

    Args:
        config: Scan configuration

    Returns:
        Tree source to load the dependency tree from

    Raises:
        ConfigurationError: If running npm is disabled and no JSON source is given
    """
    if config.npm_json is not None:
        if config.reads_stdin:
            return StdinTreeSource()
        return FileTreeSource(config.npm_json)

    if not config.run_npm:
        raise ConfigurationError("no-run-npm specified but no --npm-json source provided")

    return NpmLsTreeSource(config.npm_executable, cwd=config.project_dir)


__all__ = [
    "TreeSource",
    "FileTreeSource",
    "StdinTreeSource",
    "NpmLsTreeSource",
    "resolve_tree_source",
]
