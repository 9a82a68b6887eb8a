"""
Module 09C - CLI Verify Command

Verify a claim file offline, the same way the distributor contract does:
- Recompute the leaf from (address, amount, generatedLoss)
- Fold the proof into a root
- Compare against the published epoch root

Usage:
    claimroot verify claims/8453/0xabc....json [--epoch-file F | --root HEX] [--json]
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

from eth_utils import is_hex_address
from pydantic import ValidationError

from claimroot_cli.config import CLIConfig
from claimroot_cli.output import error_model, report_error
from core.crypto.hashing import from_hex32, to_hex
from core.merkle import build_leaf, compute_root_from_proof
from core.schemas.artifacts import ClaimBundle, EpochMetadata
from core.schemas.errors import ClaimRootException, ErrorCodes, InputValidationException
from core.schemas.records import EntitlementRecord
from core.schemas.verification import CheckResult, VerificationResult
from core.schemas.versioning import (
    UnsupportedEncodingVersionError,
    assert_supported_encoding_version,
)
from orchestrator.artifacts.io import (
    ArtifactIOError,
    load_claim_bundle,
    load_epoch_metadata,
)


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of claim verification for CLI output."""
    claim_file: str = ""
    address: str = ""
    epoch_id: int = 0
    expected_root: str = ""
    computed_root: str = ""
    ok: bool = False
    checks: list[dict[str, Any]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["computed_root"]:
            del d["computed_root"]
        if not d["errors"]:
            del d["errors"]
        return d


def default_epoch_file(claim_file: Path, epoch_id: int) -> Path:
    """claims/<chain>/<address>.json -> epochs/<chain>/<epochId>.json"""
    chain_dir = claim_file.parent
    return chain_dir.parent.parent / "epochs" / chain_dir.name / f"{epoch_id}.json"


def verify_claim(
    bundle: ClaimBundle,
    address: str,
    root: bytes,
    metadata: Optional[EpochMetadata] = None,
) -> tuple[VerificationResult, Optional[bytes]]:
    """
    Run every check for one claim.

    Returns:
        (result, computed_root); computed_root is None when the leaf
        could not be rebuilt
    """
    result = VerificationResult(ok=True)

    if metadata is not None:
        try:
            assert_supported_encoding_version(metadata.encoding_version)
            result.add_check(CheckResult.passed(
                "encoding_version", f"Encoding {metadata.encoding_version} supported"
            ))
        except UnsupportedEncodingVersionError as e:
            result.add_check(CheckResult.failed(
                "encoding_version", str(e), {"code": ErrorCodes.UNSUPPORTED_ENCODING}
            ))

        if metadata.epoch_id == bundle.epoch_id:
            result.add_check(CheckResult.passed("epoch_match", "Claim and epoch metadata agree"))
        else:
            result.add_check(CheckResult.failed(
                "epoch_match",
                f"Claim is for epoch {bundle.epoch_id}, metadata is for epoch {metadata.epoch_id}",
            ))

    try:
        record = EntitlementRecord(
            address=address,
            amount=int(bundle.amount),
            generated_loss=int(bundle.generated_loss),
        )
    except ValidationError as e:
        result.add_check(CheckResult.failed(
            "leaf", f"Cannot rebuild leaf: {e.errors()[0].get('msg', e)}",
        ))
        return result, None

    leaf = build_leaf(record)
    result.add_check(CheckResult.passed("leaf", "Leaf rebuilt", {"leaf": to_hex(leaf)}))

    proof = [from_hex32(sibling) for sibling in bundle.proof]
    computed = compute_root_from_proof(leaf, proof)
    if computed == root:
        result.add_check(CheckResult.passed("merkle_proof", "Proof folds to the epoch root"))
    else:
        result.add_check(CheckResult.failed(
            "merkle_proof",
            "Proof does not fold to the epoch root",
            {"code": ErrorCodes.ROOT_MISMATCH, "computed": to_hex(computed), "expected": to_hex(root)},
        ))
    return result, computed


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"claim: {summary.claim_file}")
    print(f"address: {summary.address}")
    print(f"epoch: {summary.epoch_id}")
    print(f"expected_root: {summary.expected_root}")
    if summary.computed_root:
        print(f"computed_root: {summary.computed_root}")
    print(f"ok: {str(summary.ok).lower()}")

    for check in summary.checks:
        status = "✓" if check["ok"] else "✗"
        print(f"  {status} {check['check_id']}: {check['message']}")


def print_summary_json(summary: VerifySummary) -> None:
    """Print summary as JSON."""
    print(json.dumps(summary.to_dict(), indent=2))


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        Exit code (2 when any check fails)
    """
    cli_config: CLIConfig | None = getattr(args, "cli_config", None)
    output_json = args.json or (cli_config is not None and cli_config.json_output)
    claim_file = Path(args.claim_file)

    try:
        address = args.address or claim_file.stem
        if not is_hex_address(address):
            raise InputValidationException(
                f"Bad address: {address} (pass --address)", field_path="address"
            )
        address = address.lower()

        bundle = load_claim_bundle(claim_file)

        metadata: Optional[EpochMetadata] = None
        if args.root:
            root = from_hex32(args.root)
        else:
            epoch_file = Path(args.epoch_file) if args.epoch_file else default_epoch_file(claim_file, bundle.epoch_id)
            metadata = load_epoch_metadata(epoch_file)
            root = from_hex32(metadata.merkle_root)
    except (ArtifactIOError, ClaimRootException) as e:
        if output_json:
            print(VerificationResult.from_error(error_model(e)).model_dump_json(indent=2))
        else:
            report_error(e)
        return EXIT_RUNTIME_ERROR

    result, computed = verify_claim(bundle, address, root, metadata)

    summary = VerifySummary(
        claim_file=str(claim_file),
        address=address,
        epoch_id=bundle.epoch_id,
        expected_root=to_hex(root),
        computed_root=to_hex(computed) if computed is not None else "",
        ok=result.ok,
        checks=[
            {"check_id": c.check_id, "ok": c.ok, "message": c.message}
            for c in result.checks
        ],
        errors=result.get_error_messages(),
    )

    if output_json:
        print_summary_json(summary)
    else:
        print_summary_human(summary)

    if result.ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS

    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
