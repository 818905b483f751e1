"""Reusable type definitions for the incremental Merkle tree."""

from .base import CamelModel, StrictBaseModel
from .exceptions import (
    EmptyTreeError,
    InvalidParameterError,
    LeafNotFoundError,
    MalformedProofError,
    MerkleTreeError,
    TreeFullError,
)
from .node import LEAF_TYPES, HashFunction, Node, is_leaf, validate_leaf

__all__ = [
    # Core types
    "Node",
    "HashFunction",
    "LEAF_TYPES",
    "is_leaf",
    "validate_leaf",
    "CamelModel",
    "StrictBaseModel",
    # Exceptions
    "MerkleTreeError",
    "InvalidParameterError",
    "TreeFullError",
    "EmptyTreeError",
    "LeafNotFoundError",
    "MalformedProofError",
]
