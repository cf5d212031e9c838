"""Core denylist parsing and dependency matching logic."""

from .denylist import DenylistEntry, ExactEntry, Lists, NameEntry, parse_denylist, parse_entry
from .errors import ConfigurationError, DenylistSyntaxError, ScanError, SourceError
from .matcher import DenylistMatcher, MatchRecord, MatchType, ScanResult, find_matches
from .tree import Dependency, TreeNode, flatten_tree

__all__ = [
    "DenylistEntry",
    "NameEntry",
    "ExactEntry",
    "Lists",
    "parse_entry",
    "parse_denylist",
    "Dependency",
    "TreeNode",
    "flatten_tree",
    "DenylistMatcher",
    "MatchRecord",
    "MatchType",
    "ScanResult",
    "find_matches",
    "ScanError",
    "DenylistSyntaxError",
    "SourceError",
    "ConfigurationError",
]
