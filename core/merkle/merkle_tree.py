"""
Module 02 - Merkle Tree Implementation
Deterministic sorted-pair Merkle tree construction, proof extraction,
and proof verification.

Owner: Protocol/Crypto Engineer
Module ID: M02

Canonical Commitment Rules (Hard Contracts, shared with the distributor):
1. Leaf hashing: keccak256(abi.encodePacked(address, amount, generatedLoss))
   - Implemented in core.merkle.leaves
2. Parent hashing: keccak256(min(a, b) || max(a, b)), byte-lexicographic
   - Proofs carry sibling identity only, no left/right flags
3. Padding rule: on an odd layer the last node is paired with itself
4. Empty leaves: rejected, there is no root for zero entries
5. Single leaf: root = leaf, proof = []

Determinism Notes:
- This module never sorts leaves; layer 0 is exactly the caller's order
- Layers are tuples and are never mutated after construction
- No logging and no recovery: violations raise to the caller
"""
from __future__ import annotations

from typing import NamedTuple, Sequence

from core.crypto.hashing import HASH_LENGTH, keccak256, to_hex
from core.crypto.packed import encode_pair_input
from core.schemas.errors import (
    EmptyTreeException,
    EncodingException,
    LeafNotFoundException,
)


Layer = tuple[bytes, ...]


class MerkleTree(NamedTuple):
    """
    A built tree: the root plus every layer from leaves (0) to root.

    Unpacks as ``root, layers = build_tree(leaves)``.
    """
    root: bytes
    layers: tuple[Layer, ...]

    @property
    def leaves(self) -> Layer:
        return self.layers[0]

    @property
    def depth(self) -> int:
        """Number of layers, leaves and root included."""
        return len(self.layers)


def _check_hash(value: bytes, field: str) -> None:
    if not isinstance(value, (bytes, bytearray)) or len(value) != HASH_LENGTH:
        raise EncodingException(
            f"{field} is not a {HASH_LENGTH}-byte hash",
            field_path=field,
        )


def combine(a: bytes, b: bytes) -> bytes:
    """
    Compute the parent hash of two child nodes.

    The pair is ordered byte-lexicographically before hashing, so
    combine(a, b) == combine(b, a) for all inputs.

    Args:
        a: 32-byte child hash
        b: 32-byte child hash

    Returns:
        32-byte parent hash

    Raises:
        EncodingException: If either child is not a 32-byte value
    """
    _check_hash(a, "a")
    _check_hash(b, "b")
    if a <= b:
        return keccak256(encode_pair_input(a, b))
    return keccak256(encode_pair_input(b, a))


def _next_layer(layer: Layer) -> Layer:
    parents: list[bytes] = []
    for i in range(0, len(layer), 2):
        left = layer[i]
        # Duplicate-last: an unpaired final node is combined with itself
        right = layer[i + 1] if i + 1 < len(layer) else left
        parents.append(combine(left, right))
    return tuple(parents)


def build_tree(leaves: Sequence[bytes]) -> MerkleTree:
    """
    Build every layer of the tree bottom-up.

    Algorithm:
    1. Layer 0 is the leaves in the order supplied
    2. While the current layer has more than one node:
       - Pair positions (0,1), (2,3), ...
       - An odd final node is paired with itself
       - Parent = combine(left, right)
    3. The single node of the last layer is the root

    Example: [a, b, c] -> [combine(a,b), combine(c,c)] -> [root]

    Args:
        leaves: Ordered 32-byte leaf hashes. Callers sort beforehand
                if they need a canonical order.

    Returns:
        MerkleTree(root, layers)

    Raises:
        EmptyTreeException: If leaves is empty
        EncodingException: If any leaf is not a 32-byte value
    """
    if len(leaves) == 0:
        raise EmptyTreeException()

    for index, leaf in enumerate(leaves):
        _check_hash(leaf, f"leaves[{index}]")

    current: Layer = tuple(bytes(leaf) for leaf in leaves)
    layers: list[Layer] = [current]

    while len(current) > 1:
        current = _next_layer(current)
        layers.append(current)

    return MerkleTree(root=current[0], layers=tuple(layers))


def proof_for_index(index: int, layers: Sequence[Sequence[bytes]]) -> list[bytes]:
    """
    Extract the sibling path for the leaf at a layer-0 position.

    At each layer below the root:
    - sibling = index - 1 if index is odd, else index + 1
    - if that position is past the end of the layer, the node is its own
      sibling (mirrors the duplicate-last combine rule)
    - move up: index = index // 2

    Args:
        index: 0-based position in layer 0
        layers: Layers as returned by build_tree

    Returns:
        Sibling hashes ordered leaf to root (empty for a single-leaf tree)

    Raises:
        LeafNotFoundException: If index is outside layer 0
    """
    if not layers or index < 0 or index >= len(layers[0]):
        raise LeafNotFoundException(
            f"Leaf index {index} out of range for "
            f"{len(layers[0]) if layers else 0} leaves",
            leaf_index=index,
        )

    proof: list[bytes] = []
    current_index = index

    for layer in layers[:-1]:
        sibling_index = current_index - 1 if current_index % 2 == 1 else current_index + 1
        if sibling_index < len(layer):
            proof.append(layer[sibling_index])
        else:
            proof.append(layer[current_index])
        current_index = current_index // 2

    return proof


def proof_for(leaf: bytes, layers: Sequence[Sequence[bytes]]) -> list[bytes]:
    """
    Extract the sibling path for a leaf value.

    The leaf is located by its FIRST occurrence in layer 0. Identical
    records hash to identical leaves, so duplicates always receive the
    first position's proof; use proof_for_index to pick a position.

    Raises:
        LeafNotFoundException: If the leaf is not in layer 0
    """
    leaf_layer = layers[0] if layers else ()
    try:
        index = list(leaf_layer).index(leaf)
    except ValueError:
        raise LeafNotFoundException(
            "Leaf not found in layer 0",
            leaf=to_hex(leaf) if isinstance(leaf, (bytes, bytearray)) else repr(leaf),
        ) from None
    return proof_for_index(index, layers)


def compute_root_from_proof(leaf: bytes, proof: Sequence[bytes]) -> bytes:
    """
    Fold a proof back up to a root: h = combine(h, sibling) per element.

    Raises:
        EncodingException: If the leaf or a proof element is not 32 bytes
    """
    _check_hash(leaf, "leaf")
    current = bytes(leaf)
    for sibling in proof:
        current = combine(current, sibling)
    return current


def verify_proof(leaf: bytes, proof: Sequence[bytes], root: bytes) -> bool:
    """
    Verify that a leaf and its proof recompute the given root.

    Mirrors the distributor contract's check. Malformed values (wrong
    widths) verify as False rather than raising.

    Args:
        leaf: The 32-byte leaf hash
        proof: Sibling hashes, leaf to root
        root: The published root

    Returns:
        True if the recomputed root equals root, False otherwise
    """
    try:
        return compute_root_from_proof(leaf, proof) == root
    except EncodingException:
        return False


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a tree with the given number of leaves.

    Depth counts layers from leaves to root inclusive; a proof has
    depth - 1 elements.

    Returns:
        Tree depth (0 for an empty tree)
    """
    if num_leaves == 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1

    return depth


__all__ = [
    "Layer",
    "MerkleTree",
    "combine",
    "build_tree",
    "proof_for",
    "proof_for_index",
    "compute_root_from_proof",
    "verify_proof",
    "compute_tree_depth",
]
