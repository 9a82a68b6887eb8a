"""
Module 01 - Schemas
File: versioning.py

Purpose: Centralize the leaf/pair encoding version.
The encoding is a wire contract with the on-chain distributor; any change
to it must ship together with a contract change and a new version here.
No imports from other schema files to avoid circular dependencies.
"""

from typing import Literal

# v1: leaf = keccak256(abi.encodePacked(address, uint256 amount, uint256 generatedLoss))
#     node = keccak256(abi.encodePacked(min(a, b), max(a, b))), duplicate last on odd layers
ENCODING_VERSION: str = "v1"

EncodingVersion = Literal["v1"]

SUPPORTED_ENCODING_VERSIONS: frozenset[str] = frozenset({"v1"})


class UnsupportedEncodingVersionError(ValueError):
    """Raised when an artifact declares an encoding this build cannot verify."""

    def __init__(self, version: str, supported: frozenset[str] | None = None) -> None:
        self.version = version
        self.supported = supported or SUPPORTED_ENCODING_VERSIONS
        super().__init__(
            f"Unsupported encoding version: '{version}'. "
            f"Supported versions: {sorted(self.supported)}"
        )


def assert_supported_encoding_version(version: str) -> None:
    """
    Validate that the given encoding version is supported.

    Raises:
        UnsupportedEncodingVersionError: If the version is not supported.
    """
    if version not in SUPPORTED_ENCODING_VERSIONS:
        raise UnsupportedEncodingVersionError(version)
