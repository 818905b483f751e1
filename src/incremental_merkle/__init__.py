"""
An append-only Merkle tree with incremental updates and membership proofs.

It exposes the tree, its configuration, proofs and their verification.
"""

from .config import DEFAULT_ARITY, MAX_DEPTH, Dynamic, Fixed, GrowthMode, TreeConfig
from .hashing import sha256_hash
from .tree import IncrementalMerkleTree, MerkleProof, verify_proof
from .types import (
    EmptyTreeError,
    InvalidParameterError,
    LeafNotFoundError,
    MalformedProofError,
    MerkleTreeError,
    TreeFullError,
)

__all__ = [
    "IncrementalMerkleTree",
    "MerkleProof",
    "verify_proof",
    "sha256_hash",
    # Configuration
    "TreeConfig",
    "GrowthMode",
    "Fixed",
    "Dynamic",
    "MAX_DEPTH",
    "DEFAULT_ARITY",
    # Exceptions
    "MerkleTreeError",
    "InvalidParameterError",
    "TreeFullError",
    "EmptyTreeError",
    "LeafNotFoundError",
    "MalformedProofError",
]
