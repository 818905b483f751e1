"""Helpers shared by the incremental Merkle tree tests."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any


def symbolic_hash(nodes: Sequence[Any]) -> str:
    """
    Render a group of nodes as `H(n0,n1,...)`.

    Its outputs are readable, so expected roots can be written out by hand.
    """
    return "H(" + ",".join(str(node) for node in nodes) + ")"


__all__ = ["symbolic_hash"]
