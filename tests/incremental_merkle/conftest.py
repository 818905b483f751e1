"""
Shared pytest fixtures for the incremental Merkle tree tests.

Trees built here use the symbolic hash function from the helpers package.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import pytest

from incremental_merkle import Dynamic, Fixed, IncrementalMerkleTree
from tests.incremental_merkle.helpers import symbolic_hash


@pytest.fixture
def dynamic_tree_factory() -> Callable[..., IncrementalMerkleTree]:
    """Factory for dynamic trees filled with the given leaves."""

    def _create(leaves: Sequence[Any] = (), arity: int = 2) -> IncrementalMerkleTree:
        tree = IncrementalMerkleTree(symbolic_hash, Dynamic(), arity=arity)
        for leaf in leaves:
            tree.insert(leaf)
        return tree

    return _create


@pytest.fixture
def fixed_tree_factory() -> Callable[..., IncrementalMerkleTree]:
    """Factory for fixed-depth trees filled with the given leaves."""

    def _create(depth: int, leaves: Sequence[Any] = (), arity: int = 2) -> IncrementalMerkleTree:
        tree = IncrementalMerkleTree(symbolic_hash, Fixed(depth=depth), arity=arity)
        for leaf in leaves:
            tree.insert(leaf)
        return tree

    return _create
