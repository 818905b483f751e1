"""
Membership proofs for an incremental Merkle tree.

A proof carries everything needed to recompute a root from a single leaf:

- `siblings`: for each level where the leaf's ancestor has siblings, the
  nodes it was hashed with. For binary trees each entry is a single node.
  For wider trees each entry is the list of the other filled members of the
  group, leftmost first.
- `path`: for the same levels, the position the ancestor occupies within its
  group. For binary trees this is a direction bit: 1 when the ancestor is the
  right member, 0 when it is the left one.

Both lists are ordered leaf-first. Levels where the ancestor was passed
through unchanged (it had no siblings yet) contribute no entry, so a proof can
be shorter than the depth of the tree it came from.

A proof also embeds the root it was generated against, which lets it be
verified long after the tree has moved on.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from ..types import HashFunction, Node, StrictBaseModel


class MerkleProof(StrictBaseModel):
    """
    An immutable proof that `leaf` is committed to by `root`.

    Serializes with camel-case field names (`leafIndex`).
    """

    root: Node
    """The root the proof was generated against."""

    leaf: Node
    """The leaf being proven."""

    siblings: tuple[Any, ...]
    """The co-path nodes, leaf-first."""

    path: tuple[Any, ...]
    """The position of the path node within each group, leaf-first."""

    leaf_index: int | None = Field(default=None, ge=0)
    """The position of the leaf among the tree's leaves, when known."""

    @field_validator("siblings", "path", mode="before")
    @classmethod
    def freeze_lists(cls, value: Any) -> Any:
        """Store lists, and the sibling groups inside them, as tuples."""
        if isinstance(value, (list, tuple)):
            return tuple(tuple(item) if isinstance(item, list) else item for item in value)
        return value

    def verify(self, hash_function: HashFunction, arity: int = 2) -> bool:
        """
        Check the proof against its own root.

        This is a convenience method that delegates to `verify_proof()`.

        Raises:
            MalformedProofError: If the siblings and path do not line up.
        """
        from .verify import verify_proof

        return verify_proof(self, hash_function, arity)
