"""
Runtime Configuration

Chain/epoch selection and working-directory layout for an epoch build.
The Merkle core never reads this; the orchestrator passes the values
down as explicit parameters.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.schemas.errors import ConfigurationException

load_dotenv()


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_positive_int(name: str, value: Any) -> int:
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        raise ConfigurationException(
            f"Bad {name}: {value!r} is not an integer",
            details={"field": name, "value": str(value)},
        ) from None
    if parsed <= 0:
        raise ConfigurationException(
            f"Bad {name}: must be > 0, got {parsed}",
            details={"field": name, "value": str(value)},
        )
    return parsed


@dataclass
class OutputLayout:
    """Directory names under the workdir."""
    inputs_dirs: tuple[str, ...] = ("inputs", "input")
    claims_dir: str = "claims"
    epochs_dir: str = "epochs"
    latest_name: str = "latest.json"


@dataclass
class EpochConfig:
    """
    Complete configuration for one epoch build.

    Can be loaded from:
    - Environment variables (CHAIN_ID, EPOCH_ID, CLAIMROOT_*)
    - YAML file
    - Programmatic construction
    """
    chain_id: Optional[int] = None
    epoch_id: Optional[int] = None
    workdir: Path = field(default_factory=Path.cwd)
    reject_duplicate_addresses: bool = False
    layout: OutputLayout = field(default_factory=OutputLayout)
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.workdir = Path(self.workdir)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - CHAIN_ID: Chain the epoch is published on
        - EPOCH_ID: Epoch number
        - CLAIMROOT_WORKDIR: Directory holding inputs/, claims/ and epochs/
        - CLAIMROOT_REJECT_DUPLICATES: Fail on repeated addresses (true/false)
        """
        overrides: dict[str, Any] = {}

        if os.getenv("CHAIN_ID"):
            overrides["chain_id"] = os.getenv("CHAIN_ID")
        if os.getenv("EPOCH_ID"):
            overrides["epoch_id"] = os.getenv("EPOCH_ID")
        if os.getenv("CLAIMROOT_WORKDIR"):
            overrides["workdir"] = os.getenv("CLAIMROOT_WORKDIR")
        if os.getenv("CLAIMROOT_REJECT_DUPLICATES"):
            overrides["reject_duplicate_addresses"] = _parse_bool(
                os.getenv("CLAIMROOT_REJECT_DUPLICATES", "false")
            )

        return overrides

    @classmethod
    def from_env(cls) -> "EpochConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "EpochConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EpochConfig":
        """Load configuration from a dictionary (supports partial data)."""
        layout_data = data.get("layout", {}) or {}
        if "inputs_dirs" in layout_data:
            layout_data = dict(layout_data, inputs_dirs=tuple(layout_data["inputs_dirs"]))

        chain_id = data.get("chain_id")
        epoch_id = data.get("epoch_id")
        reject_duplicates = data.get("reject_duplicate_addresses", False)
        if isinstance(reject_duplicates, str):
            reject_duplicates = _parse_bool(reject_duplicates)

        return cls(
            chain_id=_parse_positive_int("CHAIN_ID", chain_id) if chain_id is not None else None,
            epoch_id=_parse_positive_int("EPOCH_ID", epoch_id) if epoch_id is not None else None,
            workdir=Path(data.get("workdir") or Path.cwd()),
            reject_duplicate_addresses=bool(reject_duplicates),
            layout=OutputLayout(**layout_data) if layout_data else OutputLayout(),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "EpochConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self
        return self.with_overrides(**overrides)

    def with_overrides(self, **overrides: Any) -> "EpochConfig":
        """Return a copy with the given non-None fields replaced."""
        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            if value is None:
                continue
            if key in ("chain_id", "epoch_id"):
                value = _parse_positive_int(key.upper(), value)
            elif key == "workdir":
                value = Path(value)
            if not hasattr(new_config, key):
                raise ConfigurationException(f"Unknown configuration field: {key}")
            setattr(new_config, key, value)
        return new_config

    def validate(self) -> "EpochConfig":
        """
        Check that chain and epoch are set.

        Raises:
            ConfigurationException: If CHAIN_ID or EPOCH_ID is missing
        """
        if self.chain_id is None:
            raise ConfigurationException("Missing env var CHAIN_ID")
        if self.epoch_id is None:
            raise ConfigurationException("Missing env var EPOCH_ID")
        _parse_positive_int("CHAIN_ID", self.chain_id)
        _parse_positive_int("EPOCH_ID", self.epoch_id)
        return self
