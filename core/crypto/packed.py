"""
Module 02 - Packed Encoding
Tight ("packed") byte layouts shared with the on-chain distributor.

Owner: Protocol/Crypto Engineer
Module ID: M02

Wire layout (Solidity abi.encodePacked, no length prefixes, no delimiters):
- leaf input: address (20 bytes) || amount (uint256, 32 bytes BE)
              || generatedLoss (uint256, 32 bytes BE)           = 84 bytes
- pair input: hash_a (32 bytes) || hash_b (32 bytes)             = 64 bytes

Field order and widths are fixed by the contract. Choosing the padded
abi.encode layout instead would yield roots the contract never accepts.
The pair encoder does not order its inputs; the caller decides.
"""
from __future__ import annotations

from eth_abi.packed import encode_packed

from core.crypto.hashing import HASH_LENGTH
from core.schemas.errors import EncodingException


ADDRESS_LENGTH = 20
UINT256_MAX = 2**256 - 1

LEAF_INPUT_TYPES = ("address", "uint256", "uint256")
PAIR_INPUT_TYPES = ("bytes32", "bytes32")

LEAF_INPUT_LENGTH = ADDRESS_LENGTH + 32 + 32
PAIR_INPUT_LENGTH = 2 * HASH_LENGTH


def _check_uint256(value: int, field: str) -> None:
    # bool is an int subclass; True must not silently become 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodingException(
            f"{field} must be an integer, got {type(value).__name__}",
            field_path=field,
        )
    if value < 0 or value > UINT256_MAX:
        raise EncodingException(
            f"{field} does not fit in uint256: {value}",
            field_path=field,
        )


def _check_fixed_bytes(value: bytes, length: int, field: str) -> None:
    if not isinstance(value, (bytes, bytearray)):
        raise EncodingException(
            f"{field} must be bytes, got {type(value).__name__}",
            field_path=field,
        )
    if len(value) != length:
        raise EncodingException(
            f"{field} must be exactly {length} bytes, got {len(value)}",
            field_path=field,
        )


def encode_leaf_input(address: bytes, amount: int, generated_loss: int) -> bytes:
    """
    Pack (address, amount, generatedLoss) exactly as
    abi.encodePacked(address, uint256, uint256) does.

    Args:
        address: Raw 20-byte address
        amount: Unsigned 256-bit integer
        generated_loss: Unsigned 256-bit integer

    Returns:
        84-byte packed encoding

    Raises:
        EncodingException: If the address is not 20 bytes or an integer
            is negative or wider than 256 bits
    """
    _check_fixed_bytes(address, ADDRESS_LENGTH, "address")
    _check_uint256(amount, "amount")
    _check_uint256(generated_loss, "generatedLoss")
    return encode_packed(LEAF_INPUT_TYPES, (bytes(address), amount, generated_loss))


def encode_pair_input(hash_a: bytes, hash_b: bytes) -> bytes:
    """
    Pack two 32-byte hashes in the order given (64 bytes).

    Raises:
        EncodingException: If either value is not exactly 32 bytes
    """
    _check_fixed_bytes(hash_a, HASH_LENGTH, "hash_a")
    _check_fixed_bytes(hash_b, HASH_LENGTH, "hash_b")
    return encode_packed(PAIR_INPUT_TYPES, (bytes(hash_a), bytes(hash_b)))


__all__ = [
    "ADDRESS_LENGTH",
    "UINT256_MAX",
    "LEAF_INPUT_LENGTH",
    "PAIR_INPUT_LENGTH",
    "encode_leaf_input",
    "encode_pair_input",
]
