"""
Module 09C - CLI Proof Command

Build an epoch in memory and print the claim bundle for one address.
Nothing is written to disk.

Usage:
    claimroot proof 0xabc... --chain-id 8453 --epoch-id 12 [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from pathlib import Path

from eth_utils import is_hex_address

from claimroot_cli.commands.build import epoch_config_from_args
from claimroot_cli.config import CLIConfig
from claimroot_cli.output import report_error
from core.schemas.errors import (
    ClaimRootException,
    InputValidationException,
    LeafNotFoundException,
)
from orchestrator.pipeline import run_epoch


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def proof_cmd(args: Namespace) -> int:
    """
    Execute the proof command.

    Returns:
        Exit code (1 if the address is not part of the epoch)
    """
    cli_config: CLIConfig | None = getattr(args, "cli_config", None)
    output_json = args.json or (cli_config is not None and cli_config.json_output)

    if not is_hex_address(args.address):
        report_error(
            InputValidationException(f"Bad address: {args.address}", field_path="address"),
            output_json,
        )
        return EXIT_RUNTIME_ERROR
    address = args.address.lower()

    try:
        config = epoch_config_from_args(args, cli_config)
        run = run_epoch(
            config,
            input_path=Path(args.input) if args.input else None,
            write=False,
        )
    except ClaimRootException as e:
        report_error(e, output_json)
        return EXIT_RUNTIME_ERROR

    claim = run.result.claim_for(address)
    if claim is None:
        report_error(
            LeafNotFoundException(f"{address} has no claim in epoch {config.epoch_id}"),
            output_json,
        )
        return EXIT_RUNTIME_ERROR

    bundle = claim.to_bundle(config.epoch_id)
    if output_json:
        data = {
            "address": address,
            "merkleRoot": run.result.root_hex,
            "leafIndex": claim.index,
            **bundle.to_json_dict(),
        }
        print(json.dumps(data, indent=2))
    else:
        print(f"address: {address}")
        print(f"epoch: {bundle.epoch_id}")
        print(f"amount: {bundle.amount}")
        print(f"generatedLoss: {bundle.generated_loss}")
        print(f"root: {run.result.root_hex}")
        print(f"proof ({len(bundle.proof)}):")
        for sibling in bundle.proof:
            print(f"  {sibling}")

    logger.debug(f"Proof for {address} at index {claim.index}")
    return EXIT_SUCCESS
