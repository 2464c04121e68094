"""
Structural validation for WAVL Trees.

Used by tests and the performance script to check that a tree is still
well-formed after a sequence of mutations.
"""

from typing import Any

from wavltree.models.exceptions import InvariantViolationError
from wavltree.models.node import Node
from wavltree.models.sortedcontainers.wavl_tree import WAVLTree


class TreeValidator:
    """
    Checks every structural invariant of a WAVLTree.

    Verified per node:
    - Keys respect BST order against all ancestors
    - Children point back to their parent
    - Both rank differences are 1 or 2, and leaves have rank 0
    - size == 1 + left size + right size
    """

    def validate(self, tree: WAVLTree) -> int:
        """
        Validate the whole tree.

        Args:
            tree: The tree to check.

        Returns:
            The tree height (-1 for an empty tree).

        Raises:
            InvariantViolationError: On the first broken invariant found.
        """
        root = tree.root
        if root is not None and root.parent is not None:
            raise InvariantViolationError(root.key, "root has a parent")

        height, _ = self._validate_subtree(root, None, None)
        return height

    def _validate_subtree(
        self, node: Node | None, low: Any, high: Any
    ) -> tuple[int, int]:
        """Return (height, node count) of a valid subtree bounded by (low, high)."""
        if node is None:
            return -1, 0

        if low is not None and not low < node.key:
            raise InvariantViolationError(node.key, f"key not greater than {low!r}")
        if high is not None and not node.key < high:
            raise InvariantViolationError(node.key, f"key not less than {high!r}")

        for child in (node.left, node.right):
            if child is not None and child.parent is not node:
                raise InvariantViolationError(
                    child.key, "parent link does not point to its parent"
                )

        left_diff, right_diff = node.rank_differences()
        if left_diff not in (1, 2) or right_diff not in (1, 2):
            raise InvariantViolationError(
                node.key, f"rank differences ({left_diff}, {right_diff})"
            )
        if node.is_leaf() and node.rank != 0:
            raise InvariantViolationError(node.key, f"leaf has rank {node.rank}")

        left_height, left_count = self._validate_subtree(node.left, low, node.key)
        right_height, right_count = self._validate_subtree(node.right, node.key, high)

        count = 1 + left_count + right_count
        if node.size != count:
            raise InvariantViolationError(
                node.key, f"size {node.size} but subtree holds {count} nodes"
            )

        return 1 + max(left_height, right_height), count
