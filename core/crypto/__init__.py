"""
Core cryptographic utilities.

Module 02 provides Keccak-256 hashing and the packed byte encodings
shared with the on-chain distributor.
"""
from .hashing import (
    HASH_LENGTH,
    keccak256,
    to_hex,
    from_hex,
    from_hex32,
)
from .packed import (
    ADDRESS_LENGTH,
    UINT256_MAX,
    LEAF_INPUT_LENGTH,
    PAIR_INPUT_LENGTH,
    encode_leaf_input,
    encode_pair_input,
)

__all__ = [
    "HASH_LENGTH",
    "keccak256",
    "to_hex",
    "from_hex",
    "from_hex32",
    "ADDRESS_LENGTH",
    "UINT256_MAX",
    "LEAF_INPUT_LENGTH",
    "PAIR_INPUT_LENGTH",
    "encode_leaf_input",
    "encode_pair_input",
]
