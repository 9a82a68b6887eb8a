"""
Module 09A - Epoch Pipeline

Deterministic, in-process epoch build:
    records -> canonical order -> leaves -> tree -> proofs -> self-check

Key features:
- Records sorted by address so the root does not depend on input order
- Proofs attributed by position (duplicate leaves are safe)
- Every proof re-verified against the root before anything is persisted
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional, Sequence

from core.config.runtime import EpochConfig
from core.crypto.hashing import to_hex
from core.merkle import build_leaves, build_tree, proof_for_index, verify_proof
from core.merkle.merkle_tree import Layer, compute_tree_depth
from core.schemas.artifacts import ClaimBundle, EpochMetadata
from core.schemas.errors import (
    ErrorCodes,
    InputValidationException,
    MerkleVerificationException,
)
from core.schemas.records import EntitlementRecord


logger = logging.getLogger(__name__)


# =============================================================================
# Result Types
# =============================================================================

@dataclass(frozen=True)
class EpochClaim:
    """One record with its leaf, position and proof."""
    record: EntitlementRecord
    index: int
    leaf: bytes
    proof: list[bytes]

    @property
    def address(self) -> str:
        return self.record.address

    def to_bundle(self, epoch_id: int) -> ClaimBundle:
        return ClaimBundle(
            epoch_id=epoch_id,
            amount=str(self.record.amount),
            generated_loss=str(self.record.generated_loss),
            proof=[to_hex(sibling) for sibling in self.proof],
        )


@dataclass
class EpochResult:
    """Complete result of an epoch build."""
    chain_id: int
    epoch_id: int
    root: bytes
    layers: tuple[Layer, ...]
    claims: list[EpochClaim] = field(default_factory=list)

    @property
    def root_hex(self) -> str:
        return to_hex(self.root)

    @property
    def count(self) -> int:
        return len(self.claims)

    @property
    def depth(self) -> int:
        return compute_tree_depth(self.count)

    @property
    def total_amount(self) -> int:
        return sum(claim.record.amount for claim in self.claims)

    @property
    def total_generated_loss(self) -> int:
        return sum(claim.record.generated_loss for claim in self.claims)

    def claim_for(self, address: str) -> Optional[EpochClaim]:
        """Claim persisted for address (the last one in tree order)."""
        address = address.lower()
        found = None
        for claim in self.claims:
            if claim.address == address:
                found = claim
        return found

    def claim_bundles(self) -> dict[str, ClaimBundle]:
        """
        Bundles keyed by address.

        With duplicate addresses the later claim in tree order wins,
        matching one claim file per address.
        """
        bundles: dict[str, ClaimBundle] = {}
        for claim in self.claims:
            bundles[claim.address] = claim.to_bundle(self.epoch_id)
        return bundles

    def metadata(
        self,
        input_label: Optional[str] = None,
        generated_at: Optional[str] = None,
    ) -> EpochMetadata:
        return EpochMetadata(
            chain_id=self.chain_id,
            epoch_id=self.epoch_id,
            merkle_root=self.root_hex,
            count=self.count,
            total_amount=str(self.total_amount),
            total_generated_loss=str(self.total_generated_loss),
            input=input_label,
            generated_at=generated_at,
        )


# =============================================================================
# Build Steps
# =============================================================================

def sort_records(records: Iterable[EntitlementRecord]) -> list[EntitlementRecord]:
    """Canonical tree order: stable sort by lowercase address."""
    return sorted(records, key=lambda record: record.sort_key())


def check_duplicate_addresses(
    records: Sequence[EntitlementRecord],
    *,
    reject: bool = False,
) -> list[str]:
    """
    Find addresses that appear more than once.

    Every row keeps its own leaf; only the claim file is shared, and the
    last row in tree order owns it.

    Raises:
        InputValidationException: If duplicates exist and reject is True
    """
    seen: set[str] = set()
    duplicates: list[str] = []
    for record in records:
        if record.address in seen and record.address not in duplicates:
            duplicates.append(record.address)
        seen.add(record.address)

    if duplicates and reject:
        raise InputValidationException(
            f"Duplicate address in input: {duplicates[0]}",
            field_path="address",
            code=ErrorCodes.DUPLICATE_ADDRESS,
            details={"addresses": duplicates},
        )
    for address in duplicates:
        logger.warning(f"Duplicate address {address}: the last row in tree order wins its claim file")
    return duplicates


def build_epoch(
    records: Iterable[EntitlementRecord],
    *,
    chain_id: int,
    epoch_id: int,
    reject_duplicate_addresses: bool = False,
) -> EpochResult:
    """
    Build the tree and all claims for one epoch.

    Raises:
        EmptyTreeException: If there are no records
        InputValidationException: On duplicate addresses when rejecting them
        MerkleVerificationException: If a generated proof fails to verify
    """
    ordered = sort_records(records)
    logger.info(f"Building epoch chain={chain_id} epoch={epoch_id} with {len(ordered)} records")

    check_duplicate_addresses(ordered, reject=reject_duplicate_addresses)

    leaves = build_leaves(ordered)
    root, layers = build_tree(leaves)

    claims: list[EpochClaim] = []
    for index, record in enumerate(ordered):
        proof = proof_for_index(index, layers)
        if not verify_proof(leaves[index], proof, root):
            raise MerkleVerificationException(
                f"Proof self-check failed for {record.address}",
                leaf_index=index,
                details={"address": record.address, "root": to_hex(root)},
            )
        logger.debug(f"Claim {index} {record.address}: {len(proof)} siblings")
        claims.append(EpochClaim(record=record, index=index, leaf=leaves[index], proof=proof))

    result = EpochResult(
        chain_id=chain_id,
        epoch_id=epoch_id,
        root=root,
        layers=layers,
        claims=claims,
    )
    logger.info(f"Epoch {epoch_id} root {result.root_hex} (depth {result.depth})")
    return result


# =============================================================================
# Runner
# =============================================================================

@dataclass
class EpochRun:
    """An epoch build plus where its inputs and outputs live."""
    result: EpochResult
    input_path: Path
    written: dict[str, Path] = field(default_factory=dict)


def _input_label(input_path: Path, workdir: Path) -> str:
    try:
        return input_path.resolve().relative_to(workdir.resolve()).as_posix()
    except ValueError:
        return input_path.as_posix()


def run_epoch(
    config: EpochConfig,
    input_path: str | Path | None = None,
    *,
    write: bool = True,
    generated_at: Optional[str] = None,
) -> EpochRun:
    """
    Resolve input, build the epoch and (optionally) write all artifacts.

    Args:
        config: Validated chain/epoch configuration
        input_path: Explicit CSV path; resolved from the workdir when None
        write: Persist claim and epoch files
        generated_at: Timestamp for the metadata (UTC now when None)
    """
    from orchestrator.artifacts.inputs import read_records_csv, resolve_input_csv
    from orchestrator.artifacts.io import write_epoch_outputs

    config.validate()
    workdir = Path(config.workdir)

    if input_path is None:
        path = resolve_input_csv(
            workdir, config.chain_id, config.epoch_id, config.layout.inputs_dirs
        )
    else:
        path = Path(input_path)

    records = read_records_csv(path)
    result = build_epoch(
        records,
        chain_id=config.chain_id,
        epoch_id=config.epoch_id,
        reject_duplicate_addresses=config.reject_duplicate_addresses,
    )

    run = EpochRun(result=result, input_path=path)
    if write:
        if generated_at is None:
            generated_at = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
        run.written = write_epoch_outputs(
            result,
            workdir,
            input_label=_input_label(path, workdir),
            generated_at=generated_at,
            layout=config.layout,
        )
    return run


__all__ = [
    "EpochClaim",
    "EpochResult",
    "EpochRun",
    "sort_records",
    "check_duplicate_addresses",
    "build_epoch",
    "run_epoch",
]
