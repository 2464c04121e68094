"""
Custom exceptions for tree diagnostics.
"""

from typing import Any


class InvariantViolationError(Exception):
    """
    Raised by the validator when a tree breaks one of its structural invariants.

    Tree operations never raise this; it signals a bug in the balancing code.
    """

    def __init__(self, key: Any, reason: str):
        """
        Initialize violation error.

        Args:
            key: Key of the node where the violation was detected.
            reason: Human readable description of the broken invariant.
        """
        self.key = key
        self.reason = reason
        super().__init__(f"Invariant violated at node {key!r}: {reason}")
