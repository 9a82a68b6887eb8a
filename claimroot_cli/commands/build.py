"""
Module 09C - CLI Build Command

Generate claim bundles and epoch metadata from an epoch CSV.

Usage:
    claimroot build --chain-id 8453 --epoch-id 12 [--input FILE] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

from claimroot_cli.config import CLIConfig
from claimroot_cli.output import report_error
from core.config.runtime import EpochConfig
from core.schemas.errors import ClaimRootException
from orchestrator.artifacts.io import ArtifactIOError
from orchestrator.pipeline import EpochRun, run_epoch


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class BuildSummary:
    """Summary of an epoch build for CLI output."""
    chain_id: int = 0
    epoch_id: int = 0
    input: str = ""
    merkle_root: str = ""
    count: int = 0
    depth: int = 0
    total_amount: str = "0"
    total_generated_loss: str = "0"
    claims_dir: Optional[str] = None
    epoch_file: Optional[str] = None
    latest_file: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


def epoch_config_from_args(args: Namespace, cli_config: CLIConfig | None = None) -> EpochConfig:
    """
    Environment first, then the CLI config workdir, then explicit flags.

    Raises:
        ConfigurationException: If chain or epoch ends up unset or invalid
    """
    config = EpochConfig.from_env()
    if cli_config is not None and cli_config.workdir:
        config = config.with_overrides(workdir=cli_config.workdir)
    config = config.with_overrides(
        chain_id=getattr(args, "chain_id", None),
        epoch_id=getattr(args, "epoch_id", None),
        workdir=getattr(args, "workdir", None),
        reject_duplicate_addresses=True if getattr(args, "reject_duplicates", False) else None,
    )
    return config.validate()


def build_summary(run: EpochRun) -> BuildSummary:
    result = run.result
    summary = BuildSummary(
        chain_id=result.chain_id,
        epoch_id=result.epoch_id,
        input=str(run.input_path),
        merkle_root=result.root_hex,
        count=result.count,
        depth=result.depth,
        total_amount=str(result.total_amount),
        total_generated_loss=str(result.total_generated_loss),
    )
    claim_files = [path for key, path in run.written.items() if key.startswith("claim:")]
    if claim_files:
        summary.claims_dir = str(claim_files[0].parent)
    if "epoch" in run.written:
        summary.epoch_file = str(run.written["epoch"])
        summary.latest_file = str(run.written["latest"])
    return summary


def print_summary_human(summary: BuildSummary) -> None:
    """Print summary in human-readable format."""
    print(f"Generated {summary.count} bundles")
    print(f"   chain: {summary.chain_id} epoch: {summary.epoch_id}")
    print(f"   root: {summary.merkle_root}")
    print(f"   depth: {summary.depth}")
    print(f"   totals: amount={summary.total_amount} generatedLoss={summary.total_generated_loss}")
    if summary.claims_dir:
        print(f"   claims: {summary.claims_dir}/*.json")
    if summary.epoch_file:
        print(f"   epoch meta: {summary.epoch_file}")


def print_summary_json(summary: BuildSummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    cli_config: CLIConfig | None = getattr(args, "cli_config", None)
    output_json = args.json or (cli_config is not None and cli_config.json_output)

    try:
        config = epoch_config_from_args(args, cli_config)
        run = run_epoch(config, input_path=Path(args.input) if args.input else None)
    except (ClaimRootException, ArtifactIOError) as e:
        report_error(e, output_json)
        return EXIT_RUNTIME_ERROR

    summary = build_summary(run)
    if output_json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)

    logger.info(f"Build complete: {summary.count} claims, root {summary.merkle_root}")
    return EXIT_SUCCESS
