"""
Common test fixtures shared by all modules.

Provides factory functions for core claimroot data structures:
- EntitlementRecord
- Epoch input CSV files on disk
- Raw 32-byte leaves for tree-only tests
"""

from pathlib import Path
from typing import Optional, Sequence

from core.crypto.hashing import keccak256
from core.schemas.records import EntitlementRecord


# Four fixed accounts, deliberately listed out of address order
ADDRESS_A = "0x" + "aa" * 20
ADDRESS_B = "0x" + "bb" * 20
ADDRESS_C = "0x" + "cc" * 20
ADDRESS_D = "0x" + "dd" * 20

CHAIN_ID = 8453
EPOCH_ID = 7

# Known-answer vectors for make_scenario_records(), pinned against the
# on-chain leaf layout keccak256(abi.encodePacked(address, uint256, uint256))
SCENARIO_LEAF_A = "0xf8bccf9e57472b82ca5d4fa970a4151847805659a94eacb35d5b2ea08e10c871"
SCENARIO_LEAF_C = "0xa2189e362ea16121e8d0b200cd7d2025920ed3dbfa62cacf09d0e7e3d505ed45"
SCENARIO_ROOT = "0xf2c28247f2c3f9419bfcce6af2d3b9733d36ebbf54dd778c9854c2a4d4e66737"


# =============================================================================
# Record Factories
# =============================================================================

def make_record(
    address: str = ADDRESS_A,
    amount: int = 1000,
    generated_loss: int = 25,
) -> EntitlementRecord:
    """Create an EntitlementRecord for testing."""
    return EntitlementRecord(
        address=address,
        amount=amount,
        generated_loss=generated_loss,
    )


def make_records(count: int = 4, start: int = 1) -> list[EntitlementRecord]:
    """
    Create count records with distinct addresses 0x..01, 0x..02, ...

    Amounts are 100 * i and losses i, so totals are easy to check.
    """
    return [
        make_record(
            address="0x" + f"{i:040x}",
            amount=100 * i,
            generated_loss=i,
        )
        for i in range(start, start + count)
    ]


def make_scenario_records() -> list[EntitlementRecord]:
    """The four fixed accounts, supplied in non-canonical order."""
    return [
        make_record(ADDRESS_C, 300, 3),
        make_record(ADDRESS_A, 100, 1),
        make_record(ADDRESS_D, 400, 4),
        make_record(ADDRESS_B, 200, 2),
    ]


def make_leaves(count: int) -> list[bytes]:
    """Distinct 32-byte leaves derived from a counter."""
    return [keccak256(f"leaf-{i}".encode()) for i in range(count)]


# =============================================================================
# CSV Factories
# =============================================================================

def csv_text(
    rows: Sequence[Sequence[object]],
    header: Sequence[str] = ("address", "amount", "generatedLoss"),
) -> str:
    lines = [",".join(header)]
    lines.extend(",".join(str(cell) for cell in row) for row in rows)
    return "\n".join(lines) + "\n"


def write_epoch_csv(
    workdir: Path,
    records: Optional[Sequence[EntitlementRecord]] = None,
    chain_id: int = CHAIN_ID,
    epoch_id: int = EPOCH_ID,
    inputs_dir: str = "inputs",
    file_name: Optional[str] = None,
) -> Path:
    """
    Write records to <workdir>/<inputs_dir>/<chain>/epoch-<epoch>.csv.

    Returns:
        Path of the written CSV
    """
    if records is None:
        records = make_scenario_records()
    path = workdir / inputs_dir / str(chain_id) / (file_name or f"epoch-{epoch_id}.csv")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        csv_text([(r.address, r.amount, r.generated_loss) for r in records]),
        encoding="utf-8",
    )
    return path
