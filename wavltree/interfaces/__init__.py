"""
Abstract base classes for the ordered containers.
"""

from wavltree.interfaces.ordered_iterable import OrderedIterable
from wavltree.interfaces.sorted_container import SortedContainer

__all__ = ["OrderedIterable", "SortedContainer"]
