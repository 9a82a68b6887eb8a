"""
Module 09C - CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m claimroot_cli build [--chain-id N] [--epoch-id N] [--input CSV] [--workdir DIR] [--json]
    python -m claimroot_cli proof <address> [--chain-id N] [--epoch-id N] [--json]
    python -m claimroot_cli verify <claim_file> [--address A] [--epoch-file F | --root HEX] [--json]
    python -m claimroot_cli config --init

Environment Variables:
    CHAIN_ID                    Chain the epoch is published on
    EPOCH_ID                    Epoch number
    CLAIMROOT_WORKDIR           Directory holding inputs/, claims/ and epochs/
    CLAIMROOT_REJECT_DUPLICATES  Fail on repeated addresses (default: false)
    CLAIMROOT_LOG_LEVEL         Log level (default: INFO)
    CLAIMROOT_LOG_FILE          Also log to this file
    CLAIMROOT_OUTPUT_FORMAT     human or json (default: human)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from claimroot_cli import __version__
from claimroot_cli.commands import build, proof, verify
from claimroot_cli.config import load_config, get_default_config_template
from claimroot_cli.output import report_error


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def _add_epoch_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--chain-id",
        type=int,
        default=None,
        help="Chain id (default: $CHAIN_ID)",
    )
    parser.add_argument(
        "--epoch-id",
        type=int,
        default=None,
        help="Epoch id (default: $EPOCH_ID)",
    )
    parser.add_argument(
        "--input", "-i",
        type=str,
        default=None,
        help="Input CSV (default: inputs/<chain>/epoch-<epoch>.csv under the workdir)",
    )
    parser.add_argument(
        "--workdir", "-w",
        type=str,
        default=None,
        help="Directory holding inputs/, claims/ and epochs/ (default: current directory)",
    )
    parser.add_argument(
        "--reject-duplicates",
        action="store_true",
        default=False,
        help="Fail on repeated addresses instead of letting the last row in tree order take the claim file",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="claimroot",
        description="Claimroot CLI - Build epoch Merkle roots, extract and verify claim proofs.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./claimroot.json or ~/.config/claimroot/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on unexpected errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build the epoch tree and write claim files",
        description="Read the epoch CSV, build the Merkle tree, write claims/ and epochs/ files.",
    )
    _add_epoch_arguments(build_parser)
    build_parser.set_defaults(func=build.build_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Print the claim bundle for one address",
        description="Build the epoch in memory and print one address's proof without writing files.",
    )
    proof_parser.add_argument(
        "address",
        type=str,
        help="Account address (0x-prefixed hex)",
    )
    _add_epoch_arguments(proof_parser)
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify a claim file offline",
        description="Recompute the leaf from a claim file and check its proof against the epoch root.",
    )
    verify_parser.add_argument(
        "claim_file",
        type=str,
        help="Path to claims/<chain>/<address>.json",
    )
    verify_parser.add_argument(
        "--address", "-a",
        type=str,
        default=None,
        help="Claiming address (default: claim file name)",
    )
    root_group = verify_parser.add_mutually_exclusive_group()
    root_group.add_argument(
        "--epoch-file",
        type=str,
        default=None,
        help="Epoch metadata file (default: epochs/<chain>/<epochId>.json next to claims/)",
    )
    root_group.add_argument(
        "--root",
        type=str,
        default=None,
        help="Expected Merkle root as 0x-prefixed hex",
    )
    verify_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON report",
    )
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage configuration",
        description="Create or show configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="claimroot.json",
        help="Path for config file (default: claimroot.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (CLAIMROOT_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config = args.cli_config
        config_dict = {
            "log_level": config.log_level,
            "log_file": config.log_file,
            "default_output_format": config.default_output_format,
            "workdir": config.workdir,
        }
        print(json.dumps(config_dict, indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: claimroot config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            report_error(e, getattr(args, "json", False))
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
