"""
Module 01 - Schemas
File: artifacts.py

Purpose: Persisted shapes written per epoch.

- ClaimBundle:   claims/<chainId>/<address>.json
- EpochMetadata: epochs/<chainId>/<epochId>.json and latest.json

256-bit integers are decimal strings so no JSON consumer loses precision.
Hashes are 0x-prefixed lowercase hex, 32 bytes wide.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.schemas.versioning import ENCODING_VERSION


_UINT_STRING = re.compile(r"^\d+$")
_HASH32_STRING = re.compile(r"^0x[0-9a-f]{64}$")


def _check_uint_string(value: str) -> str:
    if not _UINT_STRING.match(value):
        raise ValueError(f"must be a decimal uint256 string, got {value!r}")
    return value


def _check_hash32(value: str) -> str:
    lowered = value.lower()
    if not _HASH32_STRING.match(lowered):
        raise ValueError(f"must be a 0x-prefixed 32-byte hex string, got {value!r}")
    return lowered


class ClaimBundle(BaseModel):
    """Everything an account needs to submit its claim on-chain."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    epoch_id: int = Field(..., alias="epochId", gt=0)
    amount: str = Field(..., description="uint256 as decimal string")
    generated_loss: str = Field(..., alias="generatedLoss", description="uint256 as decimal string")
    proof: list[str] = Field(default_factory=list, description="Sibling hashes, leaf to root")

    @field_validator("amount", "generated_loss")
    @classmethod
    def _uint_strings(cls, value: str) -> str:
        return _check_uint_string(value)

    @field_validator("proof")
    @classmethod
    def _proof_hashes(cls, value: list[str]) -> list[str]:
        return [_check_hash32(item) for item in value]

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class EpochMetadata(BaseModel):
    """Root and totals published for one epoch."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    chain_id: int = Field(..., alias="chainId", gt=0)
    epoch_id: int = Field(..., alias="epochId", gt=0)
    merkle_root: str = Field(..., alias="merkleRoot")
    count: int = Field(..., ge=1)
    total_amount: str = Field(..., alias="totalAmount")
    total_generated_loss: str = Field(..., alias="totalGeneratedLoss")
    input: str | None = Field(default=None, description="Input CSV, relative to the workdir")
    generated_at: str | None = Field(default=None, alias="generatedAt")
    encoding_version: str = Field(default=ENCODING_VERSION, alias="encodingVersion")

    @field_validator("merkle_root")
    @classmethod
    def _root_hash(cls, value: str) -> str:
        return _check_hash32(value)

    @field_validator("total_amount", "total_generated_loss")
    @classmethod
    def _totals(cls, value: str) -> str:
        return _check_uint_string(value)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = ["ClaimBundle", "EpochMetadata"]
