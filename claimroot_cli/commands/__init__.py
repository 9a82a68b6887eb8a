"""
CLI command modules.
"""

from claimroot_cli.commands import build, proof, verify

__all__ = ["build", "proof", "verify"]
