"""
Pytest configuration and shared fixtures for claimroot tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Keeps CHAIN_ID / EPOCH_ID / CLAIMROOT_* from leaking in from the shell
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_record = _common.make_record
make_records = _common.make_records
make_scenario_records = _common.make_scenario_records
make_leaves = _common.make_leaves
write_epoch_csv = _common.write_epoch_csv


_ENV_VARS = (
    "CHAIN_ID",
    "EPOCH_ID",
    "CLAIMROOT_WORKDIR",
    "CLAIMROOT_REJECT_DUPLICATES",
    "CLAIMROOT_LOG_LEVEL",
    "CLAIMROOT_LOG_FILE",
    "CLAIMROOT_OUTPUT_FORMAT",
)


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without chain/epoch or CLI settings in the environment."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def scenario_records():
    """Four records supplied out of address order."""
    return make_scenario_records()


@pytest.fixture
def epoch_workdir(tmp_path):
    """A workdir holding inputs/<chain>/epoch-<epoch>.csv for the scenario records."""
    write_epoch_csv(tmp_path)
    return tmp_path


# =============================================================================
# Test Helpers (available to all tests via fixtures)
# =============================================================================

@pytest.fixture
def assert_check_passed():
    """Helper to assert a specific check passed in VerificationResult."""
    def _assert(result, check_id: str):
        checks = [c for c in result.checks if c.check_id == check_id]
        assert len(checks) == 1, f"Expected check '{check_id}' not found in {[c.check_id for c in result.checks]}"
        assert checks[0].ok, f"Check '{check_id}' failed: {checks[0].message}"
    return _assert


@pytest.fixture
def assert_check_failed():
    """Helper to assert a specific check failed in VerificationResult."""
    def _assert(result, check_id: str):
        checks = [c for c in result.checks if c.check_id == check_id]
        assert len(checks) == 1, f"Expected check '{check_id}' not found in {[c.check_id for c in result.checks]}"
        assert not checks[0].ok, f"Check '{check_id}' unexpectedly passed"
    return _assert
