"""
Module 01 - Schemas
File: records.py

Purpose: The entitlement record consumed by the leaf builder.

A record is one (address, amount, generatedLoss) row for an epoch.
The address is kept in lowercase 0x-hex for ordering and display;
hashing always goes through the raw 20 bytes (address_bytes).
"""

from __future__ import annotations

from eth_utils import is_hex_address, to_canonical_address
from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.crypto.packed import UINT256_MAX


class EntitlementRecord(BaseModel):
    """One validated entitlement row. Immutable once constructed."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )

    address: str = Field(
        ...,
        description="20-byte account address as 0x-prefixed hex",
    )
    amount: int = Field(
        ...,
        strict=True,
        ge=0,
        le=UINT256_MAX,
        description="Claimable amount in base units (uint256)",
    )
    generated_loss: int = Field(
        ...,
        alias="generatedLoss",
        strict=True,
        ge=0,
        le=UINT256_MAX,
        description="Loss generated during the epoch in base units (uint256)",
    )

    @field_validator("address")
    @classmethod
    def _normalize_address(cls, value: str) -> str:
        if not is_hex_address(value):
            raise ValueError(f"not a 20-byte hex address: {value!r}")
        return value.lower()

    @property
    def address_bytes(self) -> bytes:
        """Canonical 20-byte form of the address."""
        return to_canonical_address(self.address)

    def sort_key(self) -> str:
        """Canonical ordering key (lowercase hex sorts like the raw bytes)."""
        return self.address


__all__ = ["EntitlementRecord"]
