"""
Module 09A - Epoch Pipeline (In-Process Runtime Wiring)

Composes the Merkle core with input parsing and artifact IO.

Public API:
- build_epoch: Records -> EpochResult (root, layers, per-record proofs)
- run_epoch: Resolve CSV, build, write claim and epoch files
- EpochResult / EpochClaim / EpochRun: Result containers
- sort_records: Canonical tree order
"""

from orchestrator.pipeline import (
    EpochClaim,
    EpochResult,
    EpochRun,
    build_epoch,
    check_duplicate_addresses,
    run_epoch,
    sort_records,
)


__all__ = [
    "EpochClaim",
    "EpochResult",
    "EpochRun",
    "build_epoch",
    "check_duplicate_addresses",
    "run_epoch",
    "sort_records",
]
