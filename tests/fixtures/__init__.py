"""
Test fixtures package for claimroot tests.

This package provides factory functions for creating test objects.

Usage:
    from fixtures import make_records, write_epoch_csv

    def test_something(tmp_path):
        path = write_epoch_csv(tmp_path, make_records(3))
"""

from .common import (
    ADDRESS_A,
    ADDRESS_B,
    ADDRESS_C,
    ADDRESS_D,
    CHAIN_ID,
    EPOCH_ID,
    SCENARIO_LEAF_A,
    SCENARIO_LEAF_C,
    SCENARIO_ROOT,
    make_record,
    make_records,
    make_scenario_records,
    make_leaves,
    csv_text,
    write_epoch_csv,
)

__all__ = [
    "ADDRESS_A",
    "ADDRESS_B",
    "ADDRESS_C",
    "ADDRESS_D",
    "CHAIN_ID",
    "EPOCH_ID",
    "SCENARIO_LEAF_A",
    "SCENARIO_LEAF_C",
    "SCENARIO_ROOT",
    "make_record",
    "make_records",
    "make_scenario_records",
    "make_leaves",
    "csv_text",
    "write_epoch_csv",
]
