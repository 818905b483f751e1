"""
An append-only Merkle tree that is updated incrementally.

### Incremental Insertion

Appending a leaf only changes the nodes on the path from that leaf to the root.
Every other stored node is reused as is, so an insertion costs `O(depth)` writes
and at most `depth` hash invocations, instead of rebuilding the whole tree.

### Incomplete Groups

The tree never pads with synthetic values. A parent whose group of children is
not full yet is computed from the children that exist:

- If the group has a single child, the parent *is* that child. It is passed
  through unchanged and the hash function is not called.
- If the group has several children (only possible when `arity > 2`), the
  parent is the hash of exactly those children, leftmost first.

Once the group fills up, the parent becomes the hash of all `arity` children.
This keeps every stored node reproducible from a membership proof.

### Growth

A `Fixed` tree keeps its depth and refuses leaves once it holds
`arity ** depth`. A `Dynamic` tree starts with depth 1 and adds one level on top
whenever the next leaf would not fit, so its depth always is the smallest `d`
with `arity ** d >= size`.

### Concurrency

A tree instance has a single writer. `insert` updates several levels one after
the other, so it must not run concurrently with another `insert` or with any
read on the same instance. Reads may run concurrently with each other.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Sequence

from pydantic import ValidationError

from ..config import DEFAULT_ARITY, Dynamic, Fixed, GrowthMode, TreeConfig
from ..metrics import (
    depth_growths,
    hash_invocations,
    inserts_rejected,
    leaves_inserted,
    proofs_generated,
)
from ..types import (
    HashFunction,
    InvalidParameterError,
    LeafNotFoundError,
    Node,
    TreeFullError,
    validate_leaf,
)
from .proof import MerkleProof
from .store import NodeStore
from .verify import verify_proof

logger = logging.getLogger(__name__)


def required_depth(size: int, arity: int) -> int:
    """
    Return the smallest depth, at least 1, whose capacity holds `size` leaves.

    Examples with arity 2: 0->1, 1->1, 2->1, 3->2, 4->2, 5->3.
    """
    depth, capacity = 1, arity
    while capacity < size:
        depth += 1
        capacity *= arity
    return depth


class IncrementalMerkleTree:
    """An append-only Merkle tree with incremental root maintenance."""

    def __init__(
        self,
        hash_function: HashFunction,
        growth: GrowthMode | Mapping[str, Any] | None = None,
        arity: int = DEFAULT_ARITY,
    ):
        """
        Initializes the tree.

        Args:
            hash_function: Combines an ordered group of children into their parent.
            growth: `Fixed(depth)` or `Dynamic(initial_leaves)`. Defaults to an
                empty dynamic tree.
            arity: The number of children per internal node.

        Raises:
            InvalidParameterError: If any option is malformed.
        """
        try:
            self.config = TreeConfig(
                hash_function=hash_function,
                growth=Dynamic() if growth is None else growth,
                arity=arity,
            )
        except ValidationError as e:
            error = e.errors()[0]
            name = ".".join(str(part) for part in error["loc"]) or "config"
            raise InvalidParameterError(name, error["msg"]) from e

        self._hash = self.config.hash_function
        self._growth = self.config.growth

        if isinstance(self._growth, Fixed):
            self._store = NodeStore(self._growth.depth, self.config.arity)
        else:
            leaves = [validate_leaf(leaf) for leaf in self._growth.initial_leaves]
            depth = required_depth(len(leaves), self.config.arity)
            self._store = NodeStore(depth, self.config.arity)
            if leaves:
                self._build(leaves)

    @classmethod
    def from_config(cls, config: TreeConfig) -> IncrementalMerkleTree:
        """Build a tree from an already validated configuration."""
        return cls(config.hash_function, config.growth, config.arity)

    # ---------------------------------------------------------------------
    # Reads
    # ---------------------------------------------------------------------

    @property
    def root(self) -> Node:
        """
        The root of the tree.

        Raises:
            EmptyTreeError: If the tree has no leaves.
        """
        return self._store.root

    @property
    def depth(self) -> int:
        """The number of levels above the leaves."""
        return self._store.depth

    @property
    def size(self) -> int:
        """The number of leaves."""
        return self._store.size

    @property
    def leaves(self) -> List[Node]:
        """A copy of the leaves, in insertion order."""
        return self._store.leaves()

    @property
    def arity(self) -> int:
        """The number of children per internal node."""
        return self._store.arity

    @property
    def capacity(self) -> int | None:
        """The maximum number of leaves for a fixed tree, `None` for a dynamic one."""
        if isinstance(self._growth, Fixed):
            return self.arity**self._growth.depth
        return None

    def level(self, level: int) -> List[Node]:
        """Return a copy of the nodes stored at `level` (0 being the leaves)."""
        return self._store.level(level)

    def index_of(self, leaf: Node) -> int:
        """Return the index of the first leaf equal to `leaf`, or -1 if absent."""
        return self._store.index_of(leaf)

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        mode = "fixed" if isinstance(self._growth, Fixed) else "dynamic"
        return (
            f"{self.__class__.__name__}(size={self.size}, depth={self.depth}, "
            f"arity={self.arity}, mode={mode})"
        )

    # ---------------------------------------------------------------------
    # Mutation
    # ---------------------------------------------------------------------

    def _parent(self, group: Sequence[Node]) -> Node:
        """Compute the parent of a group of stored siblings."""
        if len(group) == 1:
            # Pass-through: a lone child stands for its group.
            return group[0]
        hash_invocations.inc()
        return self._hash(list(group))

    def insert(self, leaf: Node) -> Node:
        """
        Append a new leaf and update the path from it to the root.

        ### Insertion Algorithm

        1.  **Validation**: The leaf type and, for fixed trees, the remaining
            capacity are checked before anything is written.

        2.  **Growth**: A dynamic tree that cannot hold one more leaf gets a new,
            empty top level.

        3.  **Climb**: The leaf is appended to level 0. At every level, the parent
            of the group containing the current index is recomputed from that
            group and written one level up. The index is then divided by the arity.

        4.  **Root**: The node written to the top level is the new root.

        Args:
            leaf: The value to append.

        Returns:
            The new root.

        Raises:
            InvalidParameterError: If the leaf is not an int, str or bytes.
            TreeFullError: If a fixed tree is already full.
        """
        try:
            validate_leaf(leaf)
            capacity = self.capacity
            if capacity is not None and self.size >= capacity:
                raise TreeFullError(capacity)
        except (InvalidParameterError, TreeFullError) as e:
            inserts_rejected.inc()
            logger.debug("Rejected insert: %s", e.message)
            raise

        if capacity is None and self.arity**self.depth < self.size + 1:
            self._store.add_level()
            depth_growths.inc()
            logger.debug("Tree grew to depth %d at size %d", self.depth, self.size + 1)

        index = self.size
        node = leaf
        self._store.put(0, index, node)

        for level in range(self.depth):
            node = self._parent(self._store.group(level, index))
            index //= self.arity
            self._store.put(level + 1, index, node)

        leaves_inserted.inc()
        return node

    def insert_many(self, leaves: Iterable[Node]) -> Node:
        """
        Insert several leaves, one at a time.

        Stops at the first leaf that cannot be inserted; the leaves before it
        remain in the tree.

        Returns:
            The root after the last insertion.

        Raises:
            InvalidParameterError: If a leaf is not an int, str or bytes.
            TreeFullError: If a fixed tree fills up.
            EmptyTreeError: If the tree is still empty afterwards.
        """
        for leaf in leaves:
            self.insert(leaf)
        return self.root

    def _build(self, leaves: List[Node]) -> None:
        """
        Load leaves into an empty store in one bottom-up pass.

        Every parent is computed once, from its final group, which produces the
        same nodes as inserting the leaves one by one.
        """
        self._store.replace_level(0, leaves)
        children = leaves
        for level in range(1, self.depth + 1):
            parents = [
                self._parent(children[start : start + self.arity])
                for start in range(0, len(children), self.arity)
            ]
            self._store.replace_level(level, parents)
            children = parents

        leaves_inserted.inc(len(leaves))
        logger.debug("Loaded %d leaves into a tree of depth %d", len(leaves), self.depth)

    # ---------------------------------------------------------------------
    # Proofs
    # ---------------------------------------------------------------------

    def generate_proof(self, leaf: Node) -> MerkleProof:
        """
        Compute the membership proof of a leaf.

        The proof climbs from the leaf to the root. At each level, the other
        stored members of the current group are recorded together with the
        position of the current node among them. Levels where the current node
        is alone in its group are skipped, since the parent equals it.

        Only the first occurrence of a duplicated leaf can be proven.

        Args:
            leaf: A leaf previously inserted into the tree.

        Returns:
            The proof, embedding the current root.

        Raises:
            LeafNotFoundError: If the leaf is not in the tree.
        """
        leaf_index = self.index_of(leaf)
        if leaf_index == -1:
            raise LeafNotFoundError(leaf)

        siblings: List[Any] = []
        path: List[int] = []
        index = leaf_index

        for level in range(self.depth):
            group = self._store.group(level, index)
            position = index % self.arity
            others = group[:position] + group[position + 1 :]
            if others:
                siblings.append(others[0] if self.arity == 2 else others)
                path.append(position)
            index //= self.arity

        proofs_generated.inc()
        return MerkleProof(
            root=self.root,
            leaf=leaf,
            leaf_index=leaf_index,
            siblings=siblings,
            path=path,
        )

    def verify_proof(self, proof: MerkleProof | Mapping[str, Any]) -> bool:
        """
        Verify a proof using this tree's hash function and arity.

        The proof is checked against the root it carries, not the current root
        of the tree, so proofs stay valid after further insertions.

        Raises:
            MalformedProofError: If the proof is structurally invalid.
        """
        return verify_proof(proof, self._hash, self.arity)
