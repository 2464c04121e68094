"""
Node in a rank-balanced tree.
"""

from dataclasses import dataclass, field
from typing import Any

# Rank of an absent child
EXTERNAL_RANK = -1


def rank_of_node(node: "Node | None") -> int:
    """Rank of a node, treating a missing child as external."""
    return node.rank if node is not None else EXTERNAL_RANK


def size_of_node(node: "Node | None") -> int:
    return node.size if node is not None else 0


@dataclass(eq=False)
class Node:
    """
    Node in the WAVL tree.

    Attributes:
        key: Unique, totally ordered key.
        value: Opaque payload.
        rank: Height approximation; leaves always have rank 0.
        size: Number of nodes in this subtree, including this one.
        left, right: Children, or None.
        parent: Back-reference to the parent, None for the root.
    """

    key: Any
    value: Any
    rank: int = 0
    size: int = 1
    left: "Node | None" = field(default=None, repr=False)
    right: "Node | None" = field(default=None, repr=False)
    parent: "Node | None" = field(default=None, repr=False)

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def is_inner_node(self) -> bool:
        return not self.is_leaf()

    def rank_differences(self) -> tuple[int, int]:
        """Return (left, right) rank differences to this node's children."""
        return (
            self.rank - rank_of_node(self.left),
            self.rank - rank_of_node(self.right),
        )

    def update_size(self) -> None:
        """Recompute size from the children's sizes."""
        self.size = 1 + size_of_node(self.left) + size_of_node(self.right)
