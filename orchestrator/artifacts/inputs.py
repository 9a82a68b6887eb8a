"""
Module 09B - Epoch Inputs
File: inputs.py

Purpose: Locate and parse the per-epoch entitlement CSV.

Expected layout (first match wins):
    inputs/<chainId>/epoch-<epochId>.csv
    input/<chainId>/epoch-<epochId>.csv
    input/<chainId>/<epochId>.csv

CSV format:
    address,amount,generatedLoss
    0xabc...,1000,25
"""

from __future__ import annotations

import csv
import logging
import re
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from core.schemas.errors import InputValidationException
from core.schemas.records import EntitlementRecord


logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("address", "amount", "generatedloss")
DEFAULT_INPUTS_DIRS = ("inputs", "input")

_UINT_PATTERN = re.compile(r"^\d+$")


def candidate_input_paths(
    workdir: str | Path,
    chain_id: int,
    epoch_id: int,
    inputs_dirs: Sequence[str] = DEFAULT_INPUTS_DIRS,
) -> list[Path]:
    """Paths checked by resolve_input_csv, in priority order."""
    root = Path(workdir)
    paths = [root / d / str(chain_id) / f"epoch-{epoch_id}.csv" for d in inputs_dirs]
    paths.append(root / inputs_dirs[-1] / str(chain_id) / f"{epoch_id}.csv")
    return paths


def resolve_input_csv(
    workdir: str | Path,
    chain_id: int,
    epoch_id: int,
    inputs_dirs: Sequence[str] = DEFAULT_INPUTS_DIRS,
) -> Path:
    """
    Find the input CSV for an epoch.

    Raises:
        InputValidationException: If none of the candidate paths exists
    """
    candidates = candidate_input_paths(workdir, chain_id, epoch_id, inputs_dirs)
    for path in candidates:
        if path.is_file():
            logger.debug(f"Resolved input CSV: {path}")
            return path

    raise InputValidationException(
        f"Missing input CSV: {candidates[0]}",
        details={"searched": [str(p) for p in candidates]},
    )


def _check_uint(value: str, column: str, line: int) -> int:
    if not _UINT_PATTERN.match(value):
        raise InputValidationException(
            f"Bad {column} on line {line}: {value}",
            line=line,
            field_path=column,
        )
    return int(value)


def parse_records(rows: Sequence[Sequence[str]], line_numbers: Sequence[int] | None = None) -> list[EntitlementRecord]:
    """
    Parse already-split CSV rows (header first) into records.

    Args:
        rows: Header row followed by data rows
        line_numbers: 1-based file line of each row, for error messages

    Returns:
        Records in file order

    Raises:
        InputValidationException: On a missing column or a bad cell
    """
    if line_numbers is None:
        line_numbers = list(range(1, len(rows) + 1))

    if len(rows) < 2:
        raise InputValidationException("CSV must have header + at least 1 row")

    header = [cell.strip().lower() for cell in rows[0]]
    index: dict[str, int] = {}
    for column in REQUIRED_COLUMNS:
        if column not in header:
            raise InputValidationException(
                f"CSV header must include: address, amount, generatedLoss (missing {column})",
                line=line_numbers[0],
                field_path=column,
            )
        index[column] = header.index(column)

    records: list[EntitlementRecord] = []
    for row, line in zip(rows[1:], line_numbers[1:]):
        cells = [value.strip() for value in row]
        values = {
            column: cells[position] if position < len(cells) else ""
            for column, position in index.items()
        }

        address = values["address"].lower()
        amount = _check_uint(values["amount"] or "0", "amount", line)
        generated_loss = _check_uint(values["generatedloss"] or "0", "generatedLoss", line)

        try:
            record = EntitlementRecord(
                address=address,
                amount=amount,
                generated_loss=generated_loss,
            )
        except ValidationError as e:
            error = e.errors()[0]
            field = str(error["loc"][0]) if error.get("loc") else "address"
            shown = address if field == "address" else values.get(field.lower().replace("_", ""), "")
            raise InputValidationException(
                f"Bad {field} on line {line}: {shown}",
                line=line,
                field_path=field,
                details={"reason": error.get("msg", "")},
            ) from None

        records.append(record)
    return records


def read_records_csv(path: str | Path) -> list[EntitlementRecord]:
    """
    Read and validate an entitlement CSV.

    Blank lines are skipped; line numbers in errors refer to the file.
    """
    path = Path(path)
    if not path.is_file():
        raise InputValidationException(f"Missing input CSV: {path}")

    rows: list[list[str]] = []
    line_numbers: list[int] = []
    with open(path, newline="", encoding="utf-8-sig") as f:
        reader = csv.reader(f)
        for row in reader:
            if not any(cell.strip() for cell in row):
                continue
            rows.append(row)
            line_numbers.append(reader.line_num)

    records = parse_records(rows, line_numbers)
    logger.info(f"Read {len(records)} records from {path}")
    return records


__all__ = [
    "REQUIRED_COLUMNS",
    "candidate_input_paths",
    "resolve_input_csv",
    "parse_records",
    "read_records_csv",
]
