"""Exception hierarchy for the incremental Merkle tree."""

from __future__ import annotations

from typing import Any


def _short_repr(value: Any, limit: int = 50) -> str:
    """Repr a value, truncated for display in error messages."""
    value_repr = repr(value)
    if len(value_repr) > limit:
        value_repr = value_repr[: limit - 3] + "..."
    return value_repr


class MerkleTreeError(Exception):
    """
    Base exception for all tree errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class InvalidParameterError(MerkleTreeError):
    """
    Raised when a construction option or call argument is malformed or mistyped.

    Attributes:
        name: The parameter that failed validation (e.g. "leaf", "depth").
        detail: What was wrong with it.
        value: The offending value, if one was supplied.
    """

    def __init__(self, name: str, detail: str, value: Any = None) -> None:
        self.name = name
        self.detail = detail
        self.value = value

        msg = f"Invalid {name}: {detail}"
        if value is not None:
            msg = f"{msg}: {_short_repr(value)}"

        super().__init__(msg)


class TreeFullError(MerkleTreeError):
    """
    Raised when a fixed-depth tree has no room for another leaf.

    Attributes:
        capacity: The maximum number of leaves the tree can hold.
    """

    def __init__(self, capacity: int) -> None:
        self.capacity = capacity
        super().__init__(f"The tree is full (capacity: {capacity} leaves)")


class EmptyTreeError(MerkleTreeError):
    """Raised when the root of a tree without leaves is requested."""

    def __init__(self) -> None:
        super().__init__("The tree has no leaves, so it has no root")


class LeafNotFoundError(MerkleTreeError):
    """
    Raised when a proof is requested for a leaf that was never inserted.

    Attributes:
        leaf: The leaf that could not be found.
    """

    def __init__(self, leaf: Any) -> None:
        self.leaf = leaf
        super().__init__(f"Leaf not found in the tree: {_short_repr(leaf)}")


class MalformedProofError(MerkleTreeError):
    """
    Raised when a value handed to verification is not a structurally valid proof.

    A proof that is well-formed but does not match its root is not an error:
    verification simply returns `False` for it.

    Attributes:
        detail: Description of the structural problem.
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Malformed proof: {detail}")
