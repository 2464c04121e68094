"""
WAVL Tree implementation for sorted key-value storage.

Weak AVL tree (Haeupler, Sen & Tarjan). Rebalancing after insert and delete
does O(1) amortized work with at most two rotations per operation, while the
height stays O(log N).
"""

import logging
from collections.abc import AsyncIterator, Iterable, Iterator
from typing import Any

from wavltree.interfaces.sorted_container import SortedContainer
from wavltree.models.node import Node, size_of_node
from wavltree.models.sentinels import ALREADY_EXISTS, NOT_FOUND

logger = logging.getLogger(__name__)

# Rank-difference pairs that need no rebalancing
_VALID_DIFFERENCES = frozenset({(1, 1), (1, 2), (2, 1), (2, 2)})


class WAVLTree(SortedContainer):
    """
    WAVL Tree implementation of SortedContainer.

    Properties maintained:
    1. BST order on keys
    2. Every rank difference (parent rank - child rank, -1 for a missing child)
       is 1 or 2
    3. Leaves have rank 0
    4. Every node's size is 1 + the sizes of its children

    insert() and delete() return the number of rebalancing steps they
    performed: each promotion or demotion counts 1, each rotation counts 1
    plus the rank changes it makes.
    """

    def __init__(self, items: Iterable[tuple[Any, Any]] | None = None) -> None:
        self._root: Node | None = None

        if items is not None:
            for key, value in items:
                self.insert(key, value)

    @property
    def root(self) -> Node | None:
        """Root node, for read-only inspection of the tree shape."""
        return self._root

    def empty(self) -> bool:
        return self._root is None

    def search(self, key: Any) -> Any | None:
        """Retrieve value by key. O(log N)"""
        node = self._find_node(key)
        return node.value if node is not None else None

    def has(self, key: Any) -> bool:
        return self._find_node(key) is not None

    def insert(self, key: Any, value: Any) -> int:
        """Insert a new key-value pair. O(log N)"""
        if self._root is None:
            self._root = Node(key=key, value=value)
            return 0

        # Find insertion point
        parent = None
        current = self._root

        while current is not None:
            parent = current
            if key < current.key:
                current = current.left
            elif key > current.key:
                current = current.right
            else:
                logger.debug(f"Insert rejected, key already exists: {key!r}")
                return ALREADY_EXISTS

        new_node = Node(key=key, value=value, parent=parent)
        if key < parent.key:
            parent.left = new_node
        else:
            parent.right = new_node

        self._adjust_sizes(parent, 1)
        return self._rebalance_insert(parent)

    def delete(self, key: Any) -> int:
        """Remove a key-value pair. O(log N)"""
        node = self._find_node(key)
        if node is None:
            logger.debug(f"Delete missed, key not found: {key!r}")
            return NOT_FOUND

        leaf = self._reduce_to_leaf(node)
        parent = self._remove_leaf(leaf)
        self._adjust_sizes(parent, -1)
        return self._rebalance_delete(parent)

    def min(self) -> Any | None:
        if self._root is None:
            return None
        return _min_node(self._root).value

    def max(self) -> Any | None:
        if self._root is None:
            return None
        return _max_node(self._root).value

    def size(self) -> int:
        return size_of_node(self._root)

    def height(self) -> int:
        """Return the tree height: -1 when empty, 0 for a single node."""
        return _height(self._root)

    def keys_to_array(self) -> list[Any]:
        return [key for key, _ in self]

    def values_to_array(self) -> list[Any]:
        return [value for _, value in self]

    def select(self, i: int) -> Any | None:
        """Return the value of the i-th smallest key (1-indexed). O(log N)"""
        if i < 1 or i > self.size():
            return None

        node = self._root
        while True:
            left_size = size_of_node(node.left)
            if i <= left_size:
                node = node.left
            elif i == left_size + 1:
                return node.value
            else:
                i -= left_size + 1
                node = node.right

    def rank_of(self, key: Any) -> int | None:
        """Return the 1-indexed position of key in ascending order. O(log N)"""
        position = 0
        node = self._root
        while node is not None:
            if key < node.key:
                node = node.left
            elif key > node.key:
                position += size_of_node(node.left) + 1
                node = node.right
            else:
                return position + size_of_node(node.left) + 1
        return None

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: Any) -> bool:
        return self.has(key)

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        return self.iterator()

    def iterator(self) -> "_InOrderIterator":
        return _InOrderIterator(self._root)

    def __aiter__(self) -> AsyncIterator[tuple[Any, Any]]:
        return self.async_iterator()

    def async_iterator(self) -> "_AsyncInOrderIterator":
        return _AsyncInOrderIterator(self._root)

    def _find_node(self, key: Any) -> Node | None:
        """Find node by key."""
        current = self._root
        while current is not None:
            if key < current.key:
                current = current.left
            elif key > current.key:
                current = current.right
            else:
                return current
        return None

    def _adjust_sizes(self, node: Node | None, delta: int) -> None:
        """Add delta to the size of node and every ancestor."""
        while node is not None:
            node.size += delta
            node = node.parent

    def _rebalance_insert(self, node: Node | None) -> int:
        """Restore rank differences from node upwards after an insert."""
        steps = 0

        while node is not None:
            differences = node.rank_differences()

            if differences in _VALID_DIFFERENCES:
                break

            if differences in ((0, 1), (1, 0)):
                # Promote and push the problem one level up
                node.rank += 1
                steps += 1
                node = node.parent
            elif differences == (0, 2):
                if node.left.rank_differences() == (1, 2):
                    steps += self._insert_rotate_right(node)
                else:
                    steps += self._insert_double_rotate_right(node)
                break
            else:
                # (2, 0)
                if node.right.rank_differences() == (2, 1):
                    steps += self._insert_rotate_left(node)
                else:
                    steps += self._insert_double_rotate_left(node)
                break

        return steps

    def _insert_rotate_right(self, node: Node) -> int:
        self._rotate_right(node)
        node.rank -= 1
        return 2

    def _insert_rotate_left(self, node: Node) -> int:
        self._rotate_left(node)
        node.rank -= 1
        return 2

    def _insert_double_rotate_right(self, node: Node) -> int:
        child = node.left
        grandchild = child.right

        self._rotate_left(child)
        self._rotate_right(node)

        child.rank -= 1
        node.rank -= 1
        grandchild.rank += 1
        return 5

    def _insert_double_rotate_left(self, node: Node) -> int:
        child = node.right
        grandchild = child.left

        self._rotate_right(child)
        self._rotate_left(node)

        child.rank -= 1
        node.rank -= 1
        grandchild.rank += 1
        return 5

    def _reduce_to_leaf(self, node: Node) -> Node:
        """
        Move the entry of node into a leaf and return that leaf.

        A node with only a left child takes that child's entry; otherwise the
        in-order successor's entry moves up. A successor is never binary, so
        at most one more copy (from its right leaf) is needed.
        """
        if node.is_leaf():
            return node

        if node.right is None:
            # A lone left child is always a leaf
            leaf = node.left
            _copy_entry(leaf, node)
            return leaf

        successor = _min_node(node.right)
        _copy_entry(successor, node)
        if successor.right is None:
            return successor

        leaf = successor.right
        _copy_entry(leaf, successor)
        return leaf

    def _remove_leaf(self, leaf: Node) -> Node | None:
        """Detach leaf from the tree and return its former parent."""
        parent = leaf.parent

        if parent is None:
            self._root = None
        elif leaf is parent.left:
            parent.left = None
        else:
            parent.right = None

        leaf.parent = None
        return parent

    def _rebalance_delete(self, node: Node | None) -> int:
        """Restore rank differences from node upwards after a delete."""
        steps = 0

        if node is not None and node.is_leaf() and node.rank != 0:
            # Lost its only child: a (2, 2) leaf
            node.rank = 0
            steps += 1
            node = node.parent

        while node is not None:
            differences = node.rank_differences()

            if differences in _VALID_DIFFERENCES:
                break

            if differences in ((2, 3), (3, 2)):
                node.rank -= 1
                steps += 1
                node = node.parent
            elif differences == (3, 1):
                sibling = node.right
                sibling_differences = sibling.rank_differences()

                if sibling_differences == (2, 2):
                    node.rank -= 1
                    sibling.rank -= 1
                    steps += 2
                    node = node.parent
                elif sibling_differences[1] == 1:
                    steps += self._delete_rotate_left(node)
                    break
                else:
                    steps += self._delete_double_rotate_left(node)
                    break
            else:
                # (1, 3)
                sibling = node.left
                sibling_differences = sibling.rank_differences()

                if sibling_differences == (2, 2):
                    node.rank -= 1
                    sibling.rank -= 1
                    steps += 2
                    node = node.parent
                elif sibling_differences[0] == 1:
                    steps += self._delete_rotate_right(node)
                    break
                else:
                    steps += self._delete_double_rotate_right(node)
                    break

        return steps

    def _delete_rotate_left(self, node: Node) -> int:
        child = node.right
        self._rotate_left(node)

        child.rank += 1
        node.rank -= 1
        steps = 3

        if node.is_leaf() and node.rank != 0:
            node.rank = 0
            steps += 1
        return steps

    def _delete_rotate_right(self, node: Node) -> int:
        child = node.left
        self._rotate_right(node)

        child.rank += 1
        node.rank -= 1
        steps = 3

        if node.is_leaf() and node.rank != 0:
            node.rank = 0
            steps += 1
        return steps

    def _delete_double_rotate_left(self, node: Node) -> int:
        child = node.right
        grandchild = child.left

        self._rotate_right(child)
        self._rotate_left(node)

        grandchild.rank += 2
        child.rank -= 1
        node.rank -= 2
        return 5

    def _delete_double_rotate_right(self, node: Node) -> int:
        child = node.left
        grandchild = child.right

        self._rotate_left(child)
        self._rotate_right(node)

        grandchild.rank += 2
        child.rank -= 1
        node.rank -= 2
        return 5

    def _rotate_left(self, node: Node) -> None:
        """Left rotation. Sizes of node and its right child are recomputed."""
        right_child = node.right

        node.right = right_child.left
        if right_child.left is not None:
            right_child.left.parent = node

        right_child.parent = node.parent

        if node.parent is None:
            self._root = right_child
        elif node is node.parent.left:
            node.parent.left = right_child
        else:
            node.parent.right = right_child

        right_child.left = node
        node.parent = right_child

        node.update_size()
        right_child.update_size()
        logger.debug(f"Rotated left at {node.key!r}, new subtree root {right_child.key!r}")

    def _rotate_right(self, node: Node) -> None:
        """Right rotation. Sizes of node and its left child are recomputed."""
        left_child = node.left

        node.left = left_child.right
        if left_child.right is not None:
            left_child.right.parent = node

        left_child.parent = node.parent

        if node.parent is None:
            self._root = left_child
        elif node is node.parent.right:
            node.parent.right = left_child
        else:
            node.parent.left = left_child

        left_child.right = node
        node.parent = left_child

        node.update_size()
        left_child.update_size()
        logger.debug(f"Rotated right at {node.key!r}, new subtree root {left_child.key!r}")


def _min_node(node: Node) -> Node:
    while node.left is not None:
        node = node.left
    return node


def _max_node(node: Node) -> Node:
    while node.right is not None:
        node = node.right
    return node


def _successor(node: Node) -> Node | None:
    """In-order successor, following parent links when there is no right subtree."""
    if node.right is not None:
        return _min_node(node.right)

    while node.parent is not None and node is node.parent.right:
        node = node.parent
    return node.parent


def _copy_entry(source: Node, target: Node) -> None:
    target.key = source.key
    target.value = source.value


def _height(node: Node | None) -> int:
    if node is None:
        return -1
    return 1 + max(_height(node.left), _height(node.right))


class _InOrderIterator(Iterator[tuple[Any, Any]]):
    """
    Forward-only in-order iterator over a WAVL Tree.

    Steps from node to successor through parent links, so it holds no stack.
    Exhaustion is detected by counting visits against the root's size. The
    tree must not be modified while the iterator is in use.
    """

    def __init__(self, root: Node | None) -> None:
        self._root = root
        self._current: Node | None = None
        self._visited = 0

    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        return self

    def has_next(self) -> bool:
        return self._root is not None and self._visited < self._root.size

    def __next__(self) -> tuple[Any, Any]:
        if not self.has_next():
            raise StopIteration

        if self._current is None:
            self._current = _min_node(self._root)
        else:
            self._current = _successor(self._current)
        self._visited += 1

        return (self._current.key, self._current.value)


class _AsyncInOrderIterator(AsyncIterator[tuple[Any, Any]]):
    """Async iterator for in-order traversal of a WAVL Tree (in-memory, no I/O)."""

    def __init__(self, root: Node | None) -> None:
        self._cursor = _InOrderIterator(root)

    def __aiter__(self) -> "_AsyncInOrderIterator":
        return self

    def has_next(self) -> bool:
        return self._cursor.has_next()

    async def __anext__(self) -> tuple[Any, Any]:
        if not self._cursor.has_next():
            raise StopAsyncIteration

        return next(self._cursor)
