"""Benchmark leaf insertion into incremental Merkle trees.

Inserts the same sequence of integer leaves into a fixed-depth tree and into a
dynamic tree, using the SHA-256 hash function, and reports the throughput of
each.

Usage:
    uv run python scripts/benchmark_insert.py
    uv run python scripts/benchmark_insert.py --leaves 4096 --depth 20 --arity 2
"""

import argparse
import time

from incremental_merkle import Dynamic, Fixed, IncrementalMerkleTree, sha256_hash


def time_inserts(tree: IncrementalMerkleTree, num_leaves: int) -> float:
    """Insert leaves `1..num_leaves` and return the elapsed seconds."""
    start = time.perf_counter()
    for i in range(num_leaves):
        tree.insert(i + 1)
    return time.perf_counter() - start


def main() -> None:
    """Run the benchmark and print one line per tree."""
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--leaves", type=int, default=2**6, help="leaves to insert")
    parser.add_argument("--depth", type=int, default=20, help="depth of the fixed tree")
    parser.add_argument("--arity", type=int, default=2, help="children per node")
    args = parser.parse_args()

    trees = {
        f"Fixed(depth={args.depth})": IncrementalMerkleTree(
            sha256_hash, Fixed(depth=args.depth), arity=args.arity
        ),
        "Dynamic": IncrementalMerkleTree(sha256_hash, Dynamic(), arity=args.arity),
    }

    print(f"Inserting {args.leaves} leaves (arity={args.arity})...\n")
    for name, tree in trees.items():
        elapsed = time_inserts(tree, args.leaves)
        rate = args.leaves / elapsed if elapsed else float("inf")
        print(f"  {name:<16} {elapsed * 1000:9.2f} ms  {rate:12.0f} inserts/s  depth={tree.depth}")


if __name__ == "__main__":
    main()
