"""
WAVL-tree based ordered key-value container.

This package provides a rank-balanced binary search tree with:
- insert(key, value) - O(log N), returns rebalancing step count
- search(key) - O(log N)
- delete(key) - O(log N), returns rebalancing step count
- select(i) / rank_of(key) - O(log N) order statistics
- In-order iteration (sync and async)
"""

from wavltree.models.sentinels import ALREADY_EXISTS, NOT_FOUND
from wavltree.models.sortedcontainers import TreeValidator, WAVLTree

__all__ = ["WAVLTree", "TreeValidator", "ALREADY_EXISTS", "NOT_FOUND"]
