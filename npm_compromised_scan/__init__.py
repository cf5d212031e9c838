"""npm-compromised-scan - audit an npm dependency tree against a list of compromised packages."""

__version__ = "0.1.0"

from .core.denylist import Lists, load_denylist, parse_denylist
from .core.matcher import DenylistMatcher, MatchRecord, find_matches
from .core.tree import Dependency, flatten_tree
from .output.formatters import JSONFormatter, TextFormatter

__all__ = [
    "Lists",
    "parse_denylist",
    "load_denylist",
    "Dependency",
    "flatten_tree",
    "DenylistMatcher",
    "MatchRecord",
    "find_matches",
    "TextFormatter",
    "JSONFormatter",
]
