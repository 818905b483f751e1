"""
The leveled node store backing an incremental Merkle tree.

### Layout

Nodes are kept as a list of levels. Level 0 holds the leaves in insertion
order, level `depth` holds the root. Each level only stores the entries that
exist so far: a tree of 5 binary leaves and depth 3 looks like

    level 3:  [r]
    level 2:  [a, 4]
    level 1:  [x, y, 4]
    level 0:  [0, 1, 2, 3, 4]

The levels themselves are grown and overwritten in place. New levels are only
ever appended on top, when a dynamic tree needs more depth.

### Groups

Every `arity` consecutive entries of a level form a group whose parent sits at
`index // arity` one level up. A group is "complete" once all `arity` entries
exist. The store only answers questions about groups; deciding what a parent
is worth belongs to the insertion engine.
"""

from __future__ import annotations

from typing import List

from ..types import EmptyTreeError, InvalidParameterError, Node


class NodeStore:
    """Leveled storage of the nodes of one tree."""

    def __init__(self, depth: int, arity: int):
        """Initializes `depth + 1` empty levels."""
        self.arity = arity
        self._levels: List[List[Node]] = [[] for _ in range(depth + 1)]

    @property
    def depth(self) -> int:
        """The number of levels above the leaves."""
        return len(self._levels) - 1

    @property
    def size(self) -> int:
        """The number of leaves."""
        return len(self._levels[0])

    @property
    def root(self) -> Node:
        """
        The single entry of the top level.

        Raises:
            EmptyTreeError: If no leaf has been stored yet.
        """
        if self.size == 0:
            raise EmptyTreeError()
        return self._levels[-1][0]

    def leaves(self) -> List[Node]:
        """Return a copy of the leaves, in insertion order."""
        return list(self._levels[0])

    def level(self, level: int) -> List[Node]:
        """
        Return a copy of the entries stored at `level`.

        Raises:
            InvalidParameterError: If the level does not exist.
        """
        if isinstance(level, bool) or not isinstance(level, int):
            raise InvalidParameterError("level", "expected an int", level)
        if not 0 <= level <= self.depth:
            raise InvalidParameterError("level", f"must be between 0 and {self.depth}", level)
        return list(self._levels[level])

    def index_of(self, leaf: Node) -> int:
        """Return the index of the first leaf equal to `leaf`, or -1."""
        for index, candidate in enumerate(self._levels[0]):
            if candidate == leaf:
                return index
        return -1

    def group(self, level: int, index: int) -> List[Node]:
        """
        Return the stored members of the group that contains `index`.

        The result has between 1 and `arity` entries, leftmost first.
        """
        start = index - index % self.arity
        return self._levels[level][start : start + self.arity]

    def put(self, level: int, index: int, node: Node) -> None:
        """
        Write `node` at `index` of `level`.

        Writes may overwrite an existing entry or append exactly one past the end.
        """
        entries = self._levels[level]
        if index == len(entries):
            entries.append(node)
        else:
            entries[index] = node

    def replace_level(self, level: int, nodes: List[Node]) -> None:
        """Overwrite the contents of a level in place."""
        self._levels[level][:] = nodes

    def add_level(self) -> None:
        """Append a new, empty top level."""
        self._levels.append([])
