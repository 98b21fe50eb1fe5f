"""Binary tree stored as an arena of nodes.

Nodes live in a list and refer to each other by index; the parent link is
an optional index. Re-parenting a node detaches it from its old parent,
and linking a node below one of its own descendants is rejected, so the
structure can never contain a cycle.

Example::

    tree = BinaryTree.from_dict({"root": ["a", {"b": ["c", None]}]})
    root = tree.root
    tree.value(tree.left(root))        # "a"
    tree.parent(tree.left(root))       # root
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Iterator, List, Optional, TypeVar

T = TypeVar("T")


@dataclass
class _Node(Generic[T]):
    value: T
    parent: Optional[int] = None
    left: Optional[int] = None
    right: Optional[int] = None


class BinaryTree(Generic[T]):
    """Arena-backed binary tree with parent links."""

    def __init__(self) -> None:
        self._nodes: List[_Node[T]] = []

    def __len__(self) -> int:
        return len(self._nodes)

    def add_node(self, value: T) -> int:
        """Add a detached node and return its index."""
        self._nodes.append(_Node(value))
        return len(self._nodes) - 1

    def _node(self, index: int) -> _Node[T]:
        if not 0 <= index < len(self._nodes):
            raise IndexError(f"No node at index {index}")
        return self._nodes[index]

    def value(self, index: int) -> T:
        return self._node(index).value

    def parent(self, index: int) -> Optional[int]:
        return self._node(index).parent

    def left(self, index: int) -> Optional[int]:
        return self._node(index).left

    def right(self, index: int) -> Optional[int]:
        return self._node(index).right

    def children(self, index: int) -> List[int]:
        node = self._node(index)
        return [c for c in (node.left, node.right) if c is not None]

    def ancestors(self, index: int) -> Iterator[int]:
        current = self._node(index).parent
        while current is not None:
            yield current
            current = self._nodes[current].parent

    @property
    def root(self) -> Optional[int]:
        """First node without a parent, or ``None`` for an empty tree."""
        for index, node in enumerate(self._nodes):
            if node.parent is None:
                return index
        return None

    # ------------------------------------------------------------------
    # Linking
    # ------------------------------------------------------------------

    def _link(self, parent: int, child: Optional[int], side: str) -> None:
        parent_node = self._node(parent)
        if child is not None and (child == parent or child in self.ancestors(parent)):
            raise ValueError(f"Node {child} cannot become a descendant of itself")

        previous = getattr(parent_node, side)
        if previous is not None:
            self._nodes[previous].parent = None
        if child is None:
            setattr(parent_node, side, None)
            return

        child_node = self._node(child)
        if child_node.parent is not None:
            old = self._nodes[child_node.parent]
            if old.left == child:
                old.left = None
            if old.right == child:
                old.right = None
        child_node.parent = parent
        setattr(parent_node, side, child)

    def set_left(self, parent: int, child: Optional[int]) -> None:
        self._link(parent, child, "left")

    def set_right(self, parent: int, child: Optional[int]) -> None:
        self._link(parent, child, "right")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Dict[Any, Any]) -> BinaryTree:
        """Build a tree from ``{value: [left, right]}``.

        Each child is ``None``, a leaf value, or another single-key mapping.

        Raises:
            ValueError: If a mapping does not have exactly one key.
        """
        tree: BinaryTree = cls()
        tree._build(data)
        return tree

    def _build(self, data: Any) -> Optional[int]:
        if data is None:
            return None
        if not isinstance(data, dict):
            return self.add_node(data)
        if len(data) != 1:
            raise ValueError(f"Expected exactly one root, found {len(data)}")

        (value, children), = data.items()
        index = self.add_node(value)
        children = list(children or [])
        left = children[0] if len(children) > 0 else None
        right = children[1] if len(children) > 1 else None
        left_index = self._build(left)
        if left_index is not None:
            self.set_left(index, left_index)
        right_index = self._build(right)
        if right_index is not None:
            self.set_right(index, right_index)
        return index
