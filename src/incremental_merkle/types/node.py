"""
Node values and the hash oracle signature.

Leaves are supplied by the caller and must be integers (of any size), strings
or byte strings. Internal nodes are produced by the hash function and are
opaque to the tree: they are only stored, compared and passed back to it.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

from .exceptions import InvalidParameterError

Node = Any
"""A tree node: a leaf value or a hash function output."""

LEAF_TYPES: tuple[type, ...] = (int, str, bytes)
"""The accepted leaf types."""

HashFunction = Callable[[Sequence[Node]], Node]
"""
Combines an ordered group of sibling nodes into their parent.

The group is passed as a single sequence, leftmost child first. It must be a
pure, deterministic function.
"""


def is_leaf(value: Any) -> bool:
    """Return whether `value` is an acceptable leaf."""
    # bool is an int subclass but never a meaningful leaf.
    return isinstance(value, LEAF_TYPES) and not isinstance(value, bool)


def validate_leaf(value: Any) -> Node:
    """
    Check that `value` can be inserted as a leaf.

    Returns:
        The value itself, unchanged.

    Raises:
        InvalidParameterError: If the value is not an int, str or bytes.
    """
    if not is_leaf(value):
        raise InvalidParameterError(
            "leaf",
            f"expected int, str or bytes, got {type(value).__name__}",
            value,
        )
    return value
