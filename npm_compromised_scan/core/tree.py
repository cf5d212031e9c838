"""Dependency tree model and flattening."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple, Union

from ..utils.logging import get_logger

logger = get_logger("tree")


@dataclass(frozen=True, order=True)
class Dependency:
    """A resolved package occurrence."""

    name: str
    version: str

    def __str__(self) -> str:
        return f"{self.name}@{self.version}"


@dataclass
class TreeNode:
    """A node of an ``npm ls --all --json`` style document.

    Only ``version`` and ``dependencies`` are read. Other fields are ignored,
    and fields of the wrong type are treated as absent.
    """

    version: Optional[str] = None
    dependencies: Dict[str, "TreeNode"] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "TreeNode":
        """Build a node from decoded JSON.

        Args:
            data: Decoded JSON value for this node

        Returns:
            TreeNode, empty if data is not an object
        """
        root = cls._shallow(data)

        # Work stack of (raw node, dependencies dict of its built node)
        stack: List[Tuple[Any, Dict[str, "TreeNode"]]] = [(data, root.dependencies)]
        while stack:
            raw, target = stack.pop()
            children = raw.get("dependencies") if isinstance(raw, Mapping) else None
            if not isinstance(children, Mapping):
                continue
            for name, child in children.items():
                node = cls._shallow(child)
                target[name] = node
                stack.append((child, node.dependencies))

        return root

    @classmethod
    def _shallow(cls, data: Any) -> "TreeNode":
        if not isinstance(data, Mapping):
            return cls()
        version = data.get("version")
        return cls(version=version if isinstance(version, str) else None)


def flatten_tree(document: Union[TreeNode, Mapping[str, Any]]) -> List[Dependency]:
    """Collect every (name, version) occurrence in a dependency tree.

    A node without a version contributes nothing itself but its children are
    still visited. Each pair appears once regardless of how many paths lead
    to it.

    Args:
        document: Root TreeNode or decoded JSON document

    Returns:
        Deduplicated dependencies sorted by (name, version)
    """
    root = document if isinstance(document, TreeNode) else TreeNode.from_dict(document)

    acc: List[Dependency] = []
    seen: Set[Tuple[str, str]] = set()

    # Explicit stack so nesting depth is not bound by the recursion limit
    stack: List[Tuple[str, TreeNode]] = list(reversed(list(root.dependencies.items())))
    while stack:
        name, node = stack.pop()
        if node.version is not None:
            key = (name, node.version)
            if key not in seen:
                seen.add(key)
                acc.append(Dependency(name=name, version=node.version))
        stack.extend(reversed(list(node.dependencies.items())))

    acc.sort()
    logger.debug(f"Flattened dependency tree into {len(acc)} unique entries")
    return acc
