"""
Data models for the tree.
"""

from wavltree.models.exceptions import InvariantViolationError
from wavltree.models.node import Node
from wavltree.models.sentinels import ALREADY_EXISTS, NOT_FOUND

__all__ = [
    "Node",
    "InvariantViolationError",
    "ALREADY_EXISTS",
    "NOT_FOUND",
]
