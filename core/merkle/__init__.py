"""
Module 02 - Merkle Tree and Commitments
Sorted-pair Keccak Merkle tree construction + proof extraction/verification,
byte-compatible with the on-chain distributor.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- build_leaf / build_leaves: Record -> 32-byte leaf
- build_tree: Ordered leaves -> MerkleTree(root, layers)
- proof_for / proof_for_index: Sibling path for one leaf
- verify_proof: Recompute a root from a leaf and its proof
- MerkleProver / MerkleVerifier: Record-level convenience wrappers

Canonical Commitment Rules:
1. Leaf hashing: keccak256(abi.encodePacked(address, uint256, uint256))
2. Parent hashing: keccak256(min(a, b) || max(a, b))
3. Padding: Pair the last node with itself on odd layers
4. Empty tree: rejected
5. Single leaf: root = leaf, empty proof

Usage:
    from core.merkle import build_leaves, build_tree, proof_for, verify_proof

    leaves = build_leaves(sorted_records)
    root, layers = build_tree(leaves)
    proof = proof_for(leaves[2], layers)
    assert verify_proof(leaves[2], proof, root)
"""
from .merkle_tree import (
    Layer,
    MerkleTree,
    combine,
    build_tree,
    proof_for,
    proof_for_index,
    compute_root_from_proof,
    verify_proof,
    compute_tree_depth,
)

from .leaves import (
    leaf_hash,
    build_leaf,
    build_leaves,
)

from .merkle_proofs import (
    MerkleProof,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "Layer",
    "MerkleTree",
    "MerkleProof",
    # Core functions
    "combine",
    "build_tree",
    "proof_for",
    "proof_for_index",
    "compute_root_from_proof",
    "verify_proof",
    "compute_tree_depth",
    # Leaves
    "leaf_hash",
    "build_leaf",
    "build_leaves",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
