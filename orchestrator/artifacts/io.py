"""
Module 09B - Artifact IO
File: io.py

Purpose: Save and load epoch artifacts to/from disk.

Layout under the workdir:
    claims/<chainId>/<address>.json
    epochs/<chainId>/<epochId>.json
    epochs/<chainId>/latest.json
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from core.config.runtime import OutputLayout
from core.schemas.artifacts import ClaimBundle, EpochMetadata
from core.schemas.errors import ErrorCodes

from orchestrator.pipeline import EpochResult


logger = logging.getLogger(__name__)


class ArtifactIOError(Exception):
    """Error during artifact IO operations."""
    code = ErrorCodes.ARTIFACT_IO_ERROR


class ArtifactMissingError(ArtifactIOError):
    """Artifact file not found."""
    code = ErrorCodes.ARTIFACT_MISSING

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Artifact not found: {path}")


def dump_json(obj: Any) -> str:
    """Serialize to 2-space indented JSON with a trailing newline."""
    if hasattr(obj, "to_json_dict"):
        obj = obj.to_json_dict()
    return json.dumps(obj, indent=2) + "\n"


def write_json(path: Path, obj: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_json(obj), encoding="utf-8")
    return path


def _read_json_file(path: Path) -> Any:
    if not path.is_file():
        raise ArtifactMissingError(path)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ArtifactIOError(f"Invalid JSON in {path}: {e}") from e


def claim_path(workdir: str | Path, chain_id: int, address: str, layout: OutputLayout | None = None) -> Path:
    layout = layout or OutputLayout()
    return Path(workdir) / layout.claims_dir / str(chain_id) / f"{address.lower()}.json"


def epoch_path(workdir: str | Path, chain_id: int, epoch_id: int, layout: OutputLayout | None = None) -> Path:
    layout = layout or OutputLayout()
    return Path(workdir) / layout.epochs_dir / str(chain_id) / f"{epoch_id}.json"


def latest_path(workdir: str | Path, chain_id: int, layout: OutputLayout | None = None) -> Path:
    layout = layout or OutputLayout()
    return Path(workdir) / layout.epochs_dir / str(chain_id) / layout.latest_name


def write_epoch_outputs(
    result: EpochResult,
    workdir: str | Path,
    *,
    input_label: Optional[str] = None,
    generated_at: Optional[str] = None,
    layout: OutputLayout | None = None,
) -> dict[str, Path]:
    """
    Write every claim bundle plus the epoch and latest metadata.

    All models are built before the first file is written, so a
    validation error leaves the workdir untouched.

    Returns:
        Mapping of "claim:<address>", "epoch" and "latest" to written paths
    """
    layout = layout or OutputLayout()
    bundles = result.claim_bundles()
    metadata = result.metadata(input_label=input_label, generated_at=generated_at)

    written: dict[str, Path] = {}
    for address, bundle in bundles.items():
        path = claim_path(workdir, result.chain_id, address, layout)
        written[f"claim:{address}"] = write_json(path, bundle)

    written["epoch"] = write_json(epoch_path(workdir, result.chain_id, result.epoch_id, layout), metadata)
    written["latest"] = write_json(latest_path(workdir, result.chain_id, layout), metadata)

    logger.info(
        f"Wrote {len(bundles)} claim files and epoch metadata under {Path(workdir)}"
    )
    return written


def load_claim_bundle(path: str | Path) -> ClaimBundle:
    """
    Load and validate a claim file.

    Raises:
        ArtifactMissingError: If the file does not exist
        ArtifactIOError: If the file is not a valid claim bundle
    """
    path = Path(path)
    data = _read_json_file(path)
    try:
        return ClaimBundle.model_validate(data)
    except ValidationError as e:
        raise ArtifactIOError(f"Invalid claim bundle {path}: {e}") from e


def load_epoch_metadata(path: str | Path) -> EpochMetadata:
    """
    Load and validate an epoch metadata file.

    Raises:
        ArtifactMissingError: If the file does not exist
        ArtifactIOError: If the file is not valid epoch metadata
    """
    path = Path(path)
    data = _read_json_file(path)
    try:
        return EpochMetadata.model_validate(data)
    except ValidationError as e:
        raise ArtifactIOError(f"Invalid epoch metadata {path}: {e}") from e


__all__ = [
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
