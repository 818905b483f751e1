"""
Metric registry using prometheus_client.

Counts tree activity across all tree instances in the process.
Exposes metrics in Prometheus text format.
"""

from __future__ import annotations

from prometheus_client import (
    CollectorRegistry,
    Counter,
    generate_latest,
)

# Dedicated registry, so callers only see tree metrics.
REGISTRY = CollectorRegistry()

# -----------------------------------------------------------------------------
# Insertion
# -----------------------------------------------------------------------------

leaves_inserted = Counter(
    "imt_leaves_inserted_total",
    "Leaves appended to trees, including bulk-loaded leaves",
    registry=REGISTRY,
)

inserts_rejected = Counter(
    "imt_inserts_rejected_total",
    "Insertions refused because the leaf was invalid or the tree was full",
    registry=REGISTRY,
)

depth_growths = Counter(
    "imt_depth_growths_total",
    "Levels added to dynamic trees",
    registry=REGISTRY,
)

hash_invocations = Counter(
    "imt_hash_invocations_total",
    "Calls made to the injected hash function",
    registry=REGISTRY,
)

# -----------------------------------------------------------------------------
# Proofs
# -----------------------------------------------------------------------------

proofs_generated = Counter(
    "imt_proofs_generated_total",
    "Membership proofs generated",
    registry=REGISTRY,
)

proofs_verified = Counter(
    "imt_proofs_verified_total",
    "Proofs that reconstructed their claimed root",
    registry=REGISTRY,
)

proofs_rejected = Counter(
    "imt_proofs_rejected_total",
    "Proofs that did not reconstruct their claimed root",
    registry=REGISTRY,
)


def generate_metrics() -> bytes:
    """
    Generate Prometheus metrics output.

    Returns:
        Prometheus text format output as bytes.
    """
    return generate_latest(REGISTRY)
