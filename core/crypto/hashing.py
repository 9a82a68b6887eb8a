"""
Module 02 - Hashing Utilities
Keccak-256 hashing and hex helpers for Merkle commitments.

Owner: Protocol/Crypto Engineer
Module ID: M02

This module provides:
- Keccak-256 hashing for raw bytes (the EVM's keccak256, NOT SHA3-256)
- Hex encoding/decoding with 0x prefix
- Fixed-width decoding for 32-byte hashes

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Keccak-256 and NIST SHA3-256 differ only in padding; hashlib.sha3_256
  must never be used here
- All operations are deterministic
"""
from __future__ import annotations

from eth_utils import decode_hex, encode_hex, keccak

from core.schemas.errors import EncodingException


HASH_LENGTH = 32


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(data)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return encode_hex(data)


def from_hex(hex_string: str) -> bytes:
    """
    Convert a 0x-prefixed hexadecimal string to bytes.

    Raises:
        EncodingException: If the string lacks the 0x prefix, has odd
            length or contains invalid hex characters
    """
    if not isinstance(hex_string, str) or not hex_string.startswith("0x"):
        raise EncodingException(
            f"Hex string must start with '0x' prefix, got: {str(hex_string)[:10]}..."
        )
    try:
        return decode_hex(hex_string)
    except ValueError as e:
        raise EncodingException(f"Invalid hex string {hex_string[:10]}...: {e}") from e


def from_hex32(hex_string: str) -> bytes:
    """
    Decode a 0x-prefixed 32-byte hash (root, leaf or proof element).

    Raises:
        EncodingException: If the value is not exactly 32 bytes of hex
    """
    data = from_hex(hex_string)
    if len(data) != HASH_LENGTH:
        raise EncodingException(
            f"Expected a {HASH_LENGTH}-byte hash, got {len(data)} bytes",
            details={"value": hex_string},
        )
    return data


__all__ = [
    "HASH_LENGTH",
    "keccak256",
    "to_hex",
    "from_hex",
    "from_hex32",
]
