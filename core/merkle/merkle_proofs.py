"""
Module 02 - Merkle Proofs Convenience Wrappers
Record-level interfaces on top of the core tree functions.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- MerkleProof: A leaf, its position, its sibling path and the root
- MerkleProver: Generate proofs from leaves or records
- MerkleVerifier: Verify proofs the way the distributor contract does

These are thin wrappers around merkle_tree.py and leaves.py.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.crypto.hashing import to_hex
from core.merkle.leaves import build_leaf, build_leaves
from core.merkle.merkle_tree import (
    build_tree,
    proof_for_index,
    verify_proof,
)
from core.schemas.records import EntitlementRecord


@dataclass(frozen=True)
class MerkleProof:
    """
    An inclusion proof for a single leaf.

    Attributes:
        leaf: The leaf hash being proven
        index: 0-based position of the leaf in layer 0
        siblings: Sibling hashes from leaf to root
        root: The root this proof is against
    """
    leaf: bytes
    index: int
    siblings: list[bytes]
    root: bytes

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Leaf index must be non-negative, got {self.index}")

    def siblings_hex(self) -> list[str]:
        return [to_hex(sibling) for sibling in self.siblings]


class MerkleProver:
    """
    Convenience class for generating proofs.

    Example:
        >>> proof = MerkleProver.prove(leaves, index=1)
        >>> proof.leaf == leaves[1]
        True
    """

    @staticmethod
    def prove(leaves: Sequence[bytes], index: int) -> MerkleProof:
        """
        Generate a proof for the leaf at the given index.

        Raises:
            EmptyTreeException: If leaves is empty
            LeafNotFoundException: If index is out of range
        """
        root, layers = build_tree(leaves)
        siblings = proof_for_index(index, layers)
        return MerkleProof(
            leaf=layers[0][index],
            index=index,
            siblings=siblings,
            root=root,
        )

    @staticmethod
    def prove_record(records: Sequence[EntitlementRecord], index: int) -> MerkleProof:
        """Generate a proof for the record at index (records in tree order)."""
        return MerkleProver.prove(build_leaves(records), index)

    @staticmethod
    def compute_root(leaves: Sequence[bytes]) -> bytes:
        return build_tree(leaves).root

    @staticmethod
    def compute_root_from_records(records: Sequence[EntitlementRecord]) -> bytes:
        return build_tree(build_leaves(records)).root


class MerkleVerifier:
    """Convenience class for verifying proofs."""

    @staticmethod
    def verify(proof: MerkleProof) -> bool:
        return verify_proof(proof.leaf, proof.siblings, proof.root)

    @staticmethod
    def verify_record(
        record: EntitlementRecord,
        siblings: Sequence[bytes],
        root: bytes,
    ) -> bool:
        """
        Verify a record against a root, as MerkleProof.verify does on-chain:
        the leaf is recomputed from the record's fields.
        """
        return verify_proof(build_leaf(record), siblings, root)


__all__ = [
    "MerkleProof",
    "MerkleProver",
    "MerkleVerifier",
]
