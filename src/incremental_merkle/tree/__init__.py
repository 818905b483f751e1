"""The incremental Merkle tree, its proofs and their verification."""

from .proof import MerkleProof
from .store import NodeStore
from .tree import IncrementalMerkleTree, required_depth
from .verify import verify_proof

__all__ = [
    "IncrementalMerkleTree",
    "MerkleProof",
    "NodeStore",
    "required_depth",
    "verify_proof",
]
