"""
Sorted container implementations.
"""

from wavltree.models.sortedcontainers.validator import TreeValidator
from wavltree.models.sortedcontainers.wavl_tree import WAVLTree

__all__ = ["WAVLTree", "TreeValidator"]
