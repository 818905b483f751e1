"""Tests for stateless proof verification."""

from __future__ import annotations

from typing import Any

import pytest

from incremental_merkle import (
    Dynamic,
    IncrementalMerkleTree,
    InvalidParameterError,
    MalformedProofError,
    MerkleProof,
    sha256_hash,
    verify_proof,
)
from tests.incremental_merkle.helpers import symbolic_hash


@pytest.fixture
def binary_tree() -> IncrementalMerkleTree:
    """A binary SHA-256 tree with 11 leaves."""
    return IncrementalMerkleTree(sha256_hash, Dynamic(initial_leaves=list(range(11))))


@pytest.fixture
def ternary_tree() -> IncrementalMerkleTree:
    """A ternary SHA-256 tree with 11 leaves."""
    return IncrementalMerkleTree(sha256_hash, Dynamic(initial_leaves=list(range(11))), arity=3)


def test_verification_needs_no_tree(binary_tree: IncrementalMerkleTree) -> None:
    """A proof verifies with only the hash function."""
    proof = binary_tree.generate_proof(6)
    assert verify_proof(proof, sha256_hash)
    assert proof.verify(sha256_hash)


def test_wrong_hash_function(binary_tree: IncrementalMerkleTree) -> None:
    """Another hash function does not reconstruct the root."""
    proof = binary_tree.generate_proof(6)
    assert not verify_proof(proof, symbolic_hash)


class TestTampering:
    """Changing any part of a valid proof makes it fail, without raising."""

    @pytest.mark.parametrize("leaf", [0, 5, 9, 10])
    def test_flipped_sibling(self, binary_tree: IncrementalMerkleTree, leaf: int) -> None:
        """Each sibling is needed to reach the root."""
        proof = binary_tree.generate_proof(leaf)
        for i in range(len(proof.siblings)):
            siblings = list(proof.siblings)
            siblings[i] = b"\x00" * 32
            assert not verify_proof(proof.copy(siblings=siblings), sha256_hash)

    def test_flipped_leaf(self, binary_tree: IncrementalMerkleTree) -> None:
        """Another leaf does not reconstruct the root."""
        proof = binary_tree.generate_proof(4)
        assert not verify_proof(proof.copy(leaf=104), sha256_hash)

    def test_flipped_direction(self, binary_tree: IncrementalMerkleTree) -> None:
        """The direction bits fix the order in which pairs are hashed."""
        proof = binary_tree.generate_proof(4)
        path = [1 - bit for bit in proof.path]
        assert not verify_proof(proof.copy(path=path), sha256_hash)

    def test_flipped_root(self, binary_tree: IncrementalMerkleTree) -> None:
        """A proof only matches its own root."""
        proof = binary_tree.generate_proof(4)
        assert not verify_proof(proof.copy(root=b"\x01" * 32), sha256_hash)

    def test_flipped_sibling_in_group(self, ternary_tree: IncrementalMerkleTree) -> None:
        """Every member of a wider sibling group matters."""
        proof = ternary_tree.generate_proof(4)
        siblings = [list(group) for group in proof.siblings]
        siblings[0][1] = 999
        assert not ternary_tree.verify_proof(proof.copy(siblings=siblings))

    def test_moved_position_in_group(self, ternary_tree: IncrementalMerkleTree) -> None:
        """The position of the path node within its group matters."""
        proof = ternary_tree.generate_proof(4)
        path = list(proof.path)
        path[0] = (path[0] + 1) % 3
        assert not ternary_tree.verify_proof(proof.copy(path=path))

    def test_single_leaf_tree(self) -> None:
        """A proof without siblings still checks the leaf against the root."""
        tree = IncrementalMerkleTree(sha256_hash, Dynamic(initial_leaves=[b"x"]))
        proof = tree.generate_proof(b"x")
        assert tree.verify_proof(proof)
        assert not tree.verify_proof(proof.copy(leaf=b"y"))


class TestMalformedProofs:
    """Structurally invalid proofs raise instead of returning False."""

    def test_length_mismatch(self, binary_tree: IncrementalMerkleTree) -> None:
        """Siblings and path must line up."""
        proof = binary_tree.generate_proof(3)
        with pytest.raises(MalformedProofError, match="siblings"):
            verify_proof(proof.copy(path=proof.path[:-1]), sha256_hash)

    @pytest.mark.parametrize("bit", [2, -1, "1", True, None])
    def test_bad_direction(self, binary_tree: IncrementalMerkleTree, bit: Any) -> None:
        """Binary path entries must be 0 or 1."""
        proof = binary_tree.generate_proof(3)
        path = [bit] + list(proof.path[1:])
        with pytest.raises(MalformedProofError, match="path entry 0"):
            verify_proof(proof.copy(path=path), sha256_hash)

    def test_bare_sibling_for_wide_tree(self, ternary_tree: IncrementalMerkleTree) -> None:
        """Wider trees need a list of nodes per level."""
        proof = ternary_tree.generate_proof(4)
        siblings = [b"node"] + list(proof.siblings[1:])
        with pytest.raises(MalformedProofError, match="sibling entry 0"):
            ternary_tree.verify_proof(proof.copy(siblings=siblings))

    @pytest.mark.parametrize("group_size", [0, 3])
    def test_wrong_group_size(
        self, ternary_tree: IncrementalMerkleTree, group_size: int
    ) -> None:
        """A group holds between 1 and arity - 1 siblings."""
        proof = ternary_tree.generate_proof(4)
        siblings = [[b"n"] * group_size] + list(proof.siblings[1:])
        with pytest.raises(MalformedProofError):
            ternary_tree.verify_proof(proof.copy(siblings=siblings))

    def test_position_past_group(self, ternary_tree: IncrementalMerkleTree) -> None:
        """A position cannot exceed the number of siblings in its group."""
        proof = ternary_tree.generate_proof(4)
        path = [len(proof.siblings[0]) + 1] + list(proof.path[1:])
        with pytest.raises(MalformedProofError):
            ternary_tree.verify_proof(proof.copy(path=path))

    @pytest.mark.parametrize("value", [None, 42, "proof", [1, 2]])
    def test_not_a_proof(self, value: Any) -> None:
        """Only proofs and mappings are accepted."""
        with pytest.raises(MalformedProofError):
            verify_proof(value, sha256_hash)

    @pytest.mark.parametrize(
        "missing",
        [("root",), ("leaf",), ("siblings",), ("path",), ("siblings", "path")],
    )
    def test_mapping_missing_fields(self, missing: tuple[str, ...]) -> None:
        """A transmitted proof must carry its root, leaf, siblings and path."""
        data = {"root": 1, "leaf": 1, "siblings": [], "path": []}
        for name in missing:
            del data[name]
        with pytest.raises(MalformedProofError, match="invalid fields"):
            verify_proof(data, symbolic_hash)


def test_transmitted_proof(binary_tree: IncrementalMerkleTree) -> None:
    """A proof serialized to a mapping verifies like the original."""
    proof = binary_tree.generate_proof(7)
    data = proof.model_dump(by_alias=True)
    assert verify_proof(data, sha256_hash)
    assert binary_tree.verify_proof(data)


def test_transmitted_proof_without_leaf_index() -> None:
    """The leaf index is informational; proofs from other sources may omit it."""
    data = {"root": "H(H(1,2),3)", "leaf": 3, "siblings": ["H(1,2)"], "path": [1]}
    assert verify_proof(data, symbolic_hash)
    assert MerkleProof.model_validate(data).leaf_index is None


def test_hand_built_proof() -> None:
    """A proof assembled by another party verifies if it is correct."""
    proof = MerkleProof(
        root="H(H(1,2),3)",
        leaf=3,
        leaf_index=2,
        siblings=["H(1,2)"],
        path=[1],
    )
    assert verify_proof(proof, symbolic_hash)


@pytest.mark.parametrize(
    "hash_function, arity",
    [(None, 2), ("sha256", 2), (sha256_hash, 1), (sha256_hash, True), (sha256_hash, "2")],
)
def test_bad_verifier_parameters(
    binary_tree: IncrementalMerkleTree, hash_function: Any, arity: Any
) -> None:
    """The hash function and arity are checked before the proof."""
    proof = binary_tree.generate_proof(1)
    with pytest.raises(InvalidParameterError):
        verify_proof(proof, hash_function, arity)
