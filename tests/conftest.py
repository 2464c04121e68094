"""
Shared pytest fixtures for WAVL tree tests.
"""

import random

import pytest

from wavltree.models.node import Node
from wavltree.models.sortedcontainers import TreeValidator, WAVLTree


def build_node(shape, parent=None):
    """
    Build a subtree from nested tuples of (key, rank, left_shape, right_shape).

    Leaves may be written as (key, rank). Values are str(key).
    """
    if shape is None:
        return None

    key, rank, *children = shape
    left_shape, right_shape = children if children else (None, None)

    node = Node(key=key, value=str(key), rank=rank, parent=parent)
    node.left = build_node(left_shape, node)
    node.right = build_node(right_shape, node)
    node.update_size()
    return node


@pytest.fixture
def build_tree():
    """Provide a factory building a WAVLTree with an exact shape, bypassing insert()."""

    def _build(shape) -> WAVLTree:
        tree = WAVLTree()
        tree._root = build_node(shape)
        return tree

    return _build


@pytest.fixture
def validator():
    """Provide a TreeValidator."""
    return TreeValidator()


@pytest.fixture
def tree():
    """Provide a fresh, empty WAVLTree."""
    return WAVLTree()


@pytest.fixture
def small_tree():
    """Provide the three-entry tree used throughout the scenarios."""
    tree = WAVLTree()
    tree.insert(1, "a")
    tree.insert(-1, "b")
    tree.insert(7, "c")
    return tree


@pytest.fixture
def rng():
    """Provide a seeded random generator so failures are reproducible."""
    return random.Random(20171215)


@pytest.fixture
def large_sample_keys(rng):
    """Provide 10,000 distinct random keys."""
    return rng.sample(range(-(10**9), 10**9), 10_000)
