"""
Stateless verification of membership proofs.

Verification needs only the proof and the hash function. It never touches a
tree, so a party that never saw the full set of leaves can check a proof.

### Verification Algorithm

1.  **Shape check**: The proof must have as many path entries as sibling
    entries, and every path entry must be a valid position. A proof that fails
    this check is malformed and raises instead of returning `False`.

2.  **Bottom-up reconstruction**: Starting from the leaf, each level's group is
    rebuilt by placing the current node at its recorded position among the
    recorded siblings. The group is hashed to obtain the parent, which becomes
    the current node for the next level.

3.  **Final comparison**: The proof is valid if and only if the last computed
    node equals the root embedded in the proof.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, List, Tuple

from pydantic import ValidationError

from ..metrics import hash_invocations, proofs_rejected, proofs_verified
from ..types import HashFunction, InvalidParameterError, MalformedProofError, Node
from .proof import MerkleProof

logger = logging.getLogger(__name__)


def _coerce(proof: Any) -> MerkleProof:
    """Read a proof object or a transmitted mapping as a `MerkleProof`."""
    if isinstance(proof, MerkleProof):
        return proof
    if isinstance(proof, Mapping):
        try:
            return MerkleProof.model_validate(proof)
        except ValidationError as e:
            raise MalformedProofError(f"invalid fields ({e.error_count()} errors)") from e
    raise MalformedProofError(f"expected a MerkleProof or a mapping, got {type(proof).__name__}")


def _is_position(value: Any, upper: int) -> bool:
    """Return whether `value` is an int in `[0, upper]`."""
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= upper


def _levels(proof: MerkleProof, arity: int) -> List[Tuple[int, List[Node]]]:
    """
    Pair every path position with its sibling group, checking the shape.

    Returns:
        A list of `(position, siblings)` tuples, leaf-first.

    Raises:
        MalformedProofError: If the lists differ in length or an entry is invalid.
    """
    if len(proof.siblings) != len(proof.path):
        raise MalformedProofError(
            f"{len(proof.siblings)} siblings but {len(proof.path)} path entries"
        )

    levels: List[Tuple[int, List[Node]]] = []
    for level, (position, sibling) in enumerate(zip(proof.path, proof.siblings, strict=True)):
        if arity == 2:
            # Binary proofs store bare sibling nodes and direction bits.
            siblings = [sibling]
        else:
            if isinstance(sibling, (str, bytes)) or not isinstance(sibling, Sequence):
                raise MalformedProofError(f"sibling entry {level} must be a list of nodes")
            siblings = list(sibling)
            if not 1 <= len(siblings) < arity:
                raise MalformedProofError(
                    f"sibling entry {level} has {len(siblings)} nodes, "
                    f"expected between 1 and {arity - 1}"
                )

        if not _is_position(position, len(siblings)):
            raise MalformedProofError(
                f"path entry {level} must be an int between 0 and {len(siblings)}"
            )
        levels.append((position, siblings))

    return levels


def verify_proof(
    proof: MerkleProof | Mapping[str, Any],
    hash_function: HashFunction,
    arity: int = 2,
) -> bool:
    """
    Verify a membership proof against the root it carries.

    Args:
        proof: A `MerkleProof`, or a mapping with the same (snake or camel case) fields.
        hash_function: The hash function of the tree the proof came from.
        arity: The arity of the tree the proof came from.

    Returns:
        `True` if the leaf and siblings reconstruct the proof's root, `False` otherwise.

    Raises:
        InvalidParameterError: If the hash function or arity is unusable.
        MalformedProofError: If the proof is structurally invalid.
    """
    if not callable(hash_function):
        raise InvalidParameterError("hash_function", "must be callable", hash_function)
    if isinstance(arity, bool) or not isinstance(arity, int) or arity < 2:
        raise InvalidParameterError("arity", "expected an int of at least 2", arity)

    merkle_proof = _coerce(proof)

    node = merkle_proof.leaf
    for position, siblings in _levels(merkle_proof, arity):
        # Put the current node back at its place among its siblings.
        group = siblings[:position] + [node] + siblings[position:]
        node = hash_function(group)
        hash_invocations.inc()

    if node == merkle_proof.root:
        proofs_verified.inc()
        return True

    proofs_rejected.inc()
    if merkle_proof.leaf_index is None:
        logger.debug("Proof does not match its root")
    else:
        logger.debug("Proof for leaf index %d does not match its root", merkle_proof.leaf_index)
    return False
