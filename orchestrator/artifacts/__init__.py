"""
Module 09B - Epoch Inputs & Artifact IO

Provides input CSV resolution/parsing and saving/loading of claim and
epoch files.
"""

from orchestrator.artifacts.inputs import (
    REQUIRED_COLUMNS,
    candidate_input_paths,
    resolve_input_csv,
    parse_records,
    read_records_csv,
)

from orchestrator.artifacts.io import (
    ArtifactIOError,
    ArtifactMissingError,
    dump_json,
    write_json,
    claim_path,
    epoch_path,
    latest_path,
    write_epoch_outputs,
    load_claim_bundle,
    load_epoch_metadata,
)

__all__ = [
    # Inputs
    "REQUIRED_COLUMNS",
    "candidate_input_paths",
    "resolve_input_csv",
    "parse_records",
    "read_records_csv",
    # IO
    "ArtifactIOError",
    "ArtifactMissingError",
    "dump_json",
    "write_json",
    "claim_path",
    "epoch_path",
    "latest_path",
    "write_epoch_outputs",
    "load_claim_bundle",
    "load_epoch_metadata",
]
