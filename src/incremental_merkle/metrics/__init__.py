"""
Metrics module for observability.

Provides counters for tree insertions, hashing and proof handling.
Exposes metrics in Prometheus text format.
"""

from .registry import (
    REGISTRY,
    depth_growths,
    generate_metrics,
    hash_invocations,
    inserts_rejected,
    leaves_inserted,
    proofs_generated,
    proofs_rejected,
    proofs_verified,
)

__all__ = [
    "REGISTRY",
    "depth_growths",
    "generate_metrics",
    "hash_invocations",
    "inserts_rejected",
    "leaves_inserted",
    "proofs_generated",
    "proofs_rejected",
    "proofs_verified",
]
