"""
A SHA-256 hash function for trees whose nodes are ints, strings or bytes.

The tree treats its hash function as an opaque collaborator; this one is
provided for callers that do not bring their own (and for benchmarking).

Each node is encoded as a one-byte type tag, a 4-byte big-endian length and
its payload, so that distinct groups never encode to the same byte string:

- `bytes`: the bytes themselves,
- `str`: its UTF-8 encoding,
- `int`: its minimal two's-complement big-endian encoding.
"""

from __future__ import annotations

import hashlib
from typing import Sequence

from typing_extensions import Final

from .types import InvalidParameterError, Node

TAG_BYTES: Final = b"\x00"
TAG_STR: Final = b"\x01"
TAG_INT: Final = b"\x02"


def encode_node(node: Node) -> bytes:
    """
    Encode a node unambiguously as bytes.

    Raises:
        InvalidParameterError: If the node is not an int, str or bytes.
    """
    if isinstance(node, bytes):
        tag, payload = TAG_BYTES, node
    elif isinstance(node, str):
        tag, payload = TAG_STR, node.encode("utf-8")
    elif isinstance(node, int) and not isinstance(node, bool):
        length = node.bit_length() // 8 + 1
        tag, payload = TAG_INT, node.to_bytes(length, "big", signed=True)
    else:
        raise InvalidParameterError(
            "node", f"cannot hash values of type {type(node).__name__}", node
        )
    return tag + len(payload).to_bytes(4, "big") + payload


def sha256_hash(nodes: Sequence[Node]) -> bytes:
    """Hash an ordered group of nodes into a 32-byte digest."""
    hasher = hashlib.sha256()
    for node in nodes:
        hasher.update(encode_node(node))
    return hasher.digest()
