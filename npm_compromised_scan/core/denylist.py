"""Denylist parsing for compromised package identities."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, List, Tuple, Union

from ..utils.logging import get_logger
from .errors import DenylistEntryError, DenylistSyntaxError, SourceError

logger = get_logger("denylist")


@dataclass(frozen=True)
class NameEntry:
    """Denylist entry matching every version of a package."""

    name: str


@dataclass(frozen=True)
class ExactEntry:
    """Denylist entry matching a single version of a package."""

    name: str
    version: str


DenylistEntry = Union[NameEntry, ExactEntry]


@dataclass(frozen=True)
class Lists:
    """Parsed denylist.

    Every name appearing in ``exact`` is also present in ``names``, so an
    exact match is always a name match too.
    """

    exact: FrozenSet[Tuple[str, str]] = field(default_factory=frozenset)
    names: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_entries(cls, entries: Iterable[DenylistEntry]) -> "Lists":
        """Build lists from parsed entries.

        Args:
            entries: Parsed denylist entries

        Returns:
            Lists holding the entries
        """
        exact = set()
        names = set()
        for entry in entries:
            names.add(entry.name)
            if isinstance(entry, ExactEntry):
                exact.add((entry.name, entry.version))
        return cls(exact=frozenset(exact), names=frozenset(names))

    @property
    def is_empty(self) -> bool:
        return not self.names

    def sorted_names(self) -> List[str]:
        return sorted(self.names)

    def sorted_exact(self) -> List[str]:
        """Exact entries formatted as ``name@version``, sorted as strings."""
        return sorted(f"{name}@{version}" for name, version in self.exact)


def parse_entry(line: str) -> DenylistEntry:
    """Classify a single trimmed, non-comment denylist line.

    Args:
        line: Denylist line without surrounding whitespace

    Returns:
        NameEntry or ExactEntry

    Raises:
        DenylistEntryError: If the line is not a valid entry
    """
    if "@" not in line:
        return NameEntry(line)

    at_count = line.count("@")
    if line.startswith("@"):
        # @scope/name with no version
        if at_count < 2:
            return NameEntry(line)
    elif at_count > 1:
        raise DenylistEntryError("Too many @ characters for unscoped package")

    name_part, _, version_part = line.rpartition("@")

    if not name_part:
        raise DenylistEntryError("Empty name part")
    if not version_part:
        raise DenylistEntryError("Empty version part")
    if "/" in version_part:
        raise DenylistEntryError("Version contains '/'")
    first = version_part[0]
    if not (first.isascii() and first.isalnum()):
        raise DenylistEntryError("Version does not start with alphanumeric")

    return ExactEntry(name=name_part, version=version_part)


def parse_denylist(text: str) -> Lists:
    """Parse denylist text.

    Blank lines and lines starting with ``#`` are ignored. Parsing stops at
    the first invalid line.

    Args:
        text: Full denylist content

    Returns:
        Parsed lists

    Raises:
        DenylistSyntaxError: On the first invalid line
    """
    entries = []
    for line_number, raw_line in enumerate(text.split("\n"), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        try:
            entries.append(parse_entry(line))
        except DenylistEntryError as e:
            raise DenylistSyntaxError(line_number, line, e.reason) from e

    lists = Lists.from_entries(entries)
    logger.debug(f"Parsed denylist: {len(lists.names)} names, {len(lists.exact)} exact entries")
    return lists


def load_denylist(path: Path) -> Lists:
    """Read and parse a denylist file.

    Args:
        path: Path to the denylist file

    Returns:
        Parsed lists

    Raises:
        SourceError: If the file cannot be read
        DenylistSyntaxError: If the file contains an invalid entry
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(f"Unable to read compromised list file: {path} ({e})") from e

    logger.debug(f"Loaded compromised list from {path}")
    return parse_denylist(content)
