"""
Module 02 - Leaf Builder
Maps entitlement records to 32-byte leaves.

leaf = keccak256(abi.encodePacked(address, uint256 amount, uint256 generatedLoss))
"""
from __future__ import annotations

from typing import Iterable

from core.crypto.hashing import keccak256
from core.crypto.packed import encode_leaf_input
from core.schemas.records import EntitlementRecord


def leaf_hash(address: bytes, amount: int, generated_loss: int) -> bytes:
    """Hash raw leaf fields. Raises EncodingException on bad widths."""
    return keccak256(encode_leaf_input(address, amount, generated_loss))


def build_leaf(record: EntitlementRecord) -> bytes:
    """Compute the leaf for one record from its canonical address bytes."""
    return leaf_hash(record.address_bytes, record.amount, record.generated_loss)


def build_leaves(records: Iterable[EntitlementRecord]) -> list[bytes]:
    """Compute leaves for records, preserving their order."""
    return [build_leaf(record) for record in records]


__all__ = [
    "leaf_hash",
    "build_leaf",
    "build_leaves",
]
