"""Core denylist matching logic."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ..utils.logging import get_logger
from .denylist import Lists
from .tree import Dependency, TreeNode, flatten_tree


class MatchType(str, Enum):
    EXACT = "exact"
    NAME = "name"


@dataclass(frozen=True)
class MatchRecord:
    """A flattened dependency that matched the denylist."""

    match_type: MatchType
    name: str
    version: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "match_type": self.match_type.value,
            "name": self.name,
            "version": self.version,
        }


@dataclass(frozen=True)
class ScanResult:
    """Matches found in one scan, with the denylist they were found against."""

    matches: List[MatchRecord]
    lists: Lists
    dependencies: List[Dependency] = field(default_factory=list)

    @property
    def match_count(self) -> int:
        return len(self.matches)

    @property
    def any_match(self) -> bool:
        return bool(self.matches)


def classify(dependency: Dependency, lists: Lists) -> Optional[MatchType]:
    """Classify one dependency against the denylist.

    An exact entry takes precedence over a name entry for the same package.
    """
    if (dependency.name, dependency.version) in lists.exact:
        return MatchType.EXACT
    if dependency.name in lists.names:
        return MatchType.NAME
    return None


def find_matches(dependencies: List[Dependency], lists: Lists) -> Tuple[List[MatchRecord], bool]:
    """Classify dependencies against the denylist.

    Args:
        dependencies: Flattened, sorted dependencies
        lists: Parsed denylist

    Returns:
        Matches in dependency order, and whether any match was found
    """
    matches = []
    for dependency in dependencies:
        match_type = classify(dependency, lists)
        if match_type is not None:
            matches.append(MatchRecord(match_type, dependency.name, dependency.version))
    return matches, bool(matches)


class DenylistMatcher:
    """Matches dependency trees against a parsed denylist."""

    def __init__(self, lists: Lists) -> None:
        """Initialize the matcher.

        Args:
            lists: Parsed denylist
        """
        self.lists = lists
        self.logger = get_logger("DenylistMatcher")

    def match_dependencies(self, dependencies: List[Dependency]) -> List[MatchRecord]:
        """Match flattened dependencies against the denylist.

        Args:
            dependencies: Flattened, sorted dependencies

        Returns:
            List of match records
        """
        matches, _ = find_matches(dependencies, self.lists)
        for match in matches:
            self.logger.debug(f"MATCH ({match.match_type.value}): {match.name}@{match.version}")
        self.logger.debug(f"{len(matches)} of {len(dependencies)} dependencies matched")
        return matches

    def scan(self, document: Union[TreeNode, Mapping[str, Any]]) -> ScanResult:
        """Flatten a dependency tree document and match it.

        Args:
            document: Root TreeNode or decoded ``npm ls --json`` document

        Returns:
            Scan result
        """
        dependencies = flatten_tree(document)
        if self.lists.is_empty:
            self.logger.warning("Compromised list is empty; nothing can match")
        matches = self.match_dependencies(dependencies)
        return ScanResult(matches=matches, lists=self.lists, dependencies=dependencies)
