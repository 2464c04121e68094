"""
OrderedIterable protocol for data structures that iterate in key order.
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterator
from typing import Any


class OrderedIterable(ABC):
    """
    Protocol for data structures that yield their entries in ascending key order.

    Implementations must support:
    - Full iteration via __iter__
    - A fresh forward-only iterator via iterator()
    - Async iteration via __aiter__
    - A fresh async iterator via async_iterator()

    Iterators are single-use: once exhausted, a new one must be requested.
    """

    @abstractmethod
    def __iter__(self) -> Iterator[tuple[Any, Any]]:
        """Return an iterator over all key-value pairs in sorted order."""
        pass

    @abstractmethod
    def iterator(self) -> Iterator[tuple[Any, Any]]:
        """
        Return a new forward-only iterator over key-value pairs.

        Returns:
            Iterator yielding (key, value) tuples in ascending key order.
        """
        pass

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[tuple[Any, Any]]:
        """Return an async iterator over all key-value pairs in sorted order."""
        pass

    @abstractmethod
    def async_iterator(self) -> AsyncIterator[tuple[Any, Any]]:
        """
        Return a new forward-only async iterator over key-value pairs.

        Returns:
            AsyncIterator yielding (key, value) tuples in ascending key order.
        """
        pass
