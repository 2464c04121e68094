"""
SortedContainer abstract base class for ordered key-value data structures.
"""

from abc import abstractmethod
from typing import Any

from wavltree.interfaces.ordered_iterable import OrderedIterable


class SortedContainer(OrderedIterable):
    """
    Abstract base class for sorted key-value containers with order statistics.

    Keys are unique and totally ordered. Misses are reported through return
    values (None or a sentinel count), never through exceptions.

    Implementations:
    - WAVLTree: rank-balanced tree with subtree sizes
    """

    @abstractmethod
    def empty(self) -> bool:
        """
        Check whether the container holds no entries.

        Time complexity: O(1)
        """
        pass

    @abstractmethod
    def insert(self, key: Any, value: Any) -> int:
        """
        Insert a new key-value pair.

        Args:
            key: The key to insert.
            value: The value to associate with the key.

        Returns:
            Number of rebalancing steps performed, or ALREADY_EXISTS if the
            key is present (the container is left unchanged).

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def search(self, key: Any) -> Any | None:
        """
        Retrieve the value for a given key.

        Args:
            key: The key to look up.

        Returns:
            The value if found, None otherwise.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def delete(self, key: Any) -> int:
        """
        Remove a key-value pair.

        Args:
            key: The key to remove.

        Returns:
            Number of rebalancing steps performed, or NOT_FOUND if the key
            is absent (the container is left unchanged).

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def has(self, key: Any) -> bool:
        """
        Check if a key exists.

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def min(self) -> Any | None:
        """Return the value of the smallest key, or None if empty."""
        pass

    @abstractmethod
    def max(self) -> Any | None:
        """Return the value of the largest key, or None if empty."""
        pass

    @abstractmethod
    def size(self) -> int:
        """
        Return the number of key-value pairs.

        Time complexity: O(1)
        """
        pass

    @abstractmethod
    def keys_to_array(self) -> list[Any]:
        """Return all keys in ascending order."""
        pass

    @abstractmethod
    def values_to_array(self) -> list[Any]:
        """Return all values, ordered by their keys."""
        pass

    @abstractmethod
    def select(self, i: int) -> Any | None:
        """
        Return the value of the i-th smallest key.

        Args:
            i: 1-indexed position in ascending key order.

        Returns:
            The value, or None if i is out of [1, size].

        Time complexity: O(log N)
        """
        pass

    @abstractmethod
    def rank_of(self, key: Any) -> int | None:
        """
        Return the 1-indexed position of a key in ascending order.

        Returns:
            The position, or None if the key is absent.

        Time complexity: O(log N)
        """
        pass
