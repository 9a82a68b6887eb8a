"""
Module 09C - Claimroot CLI

Command-line interface for building and checking epoch claim trees.

Usage:
    python -m claimroot_cli build --chain-id 8453 --epoch-id 12
    python -m claimroot_cli proof 0xabc... --chain-id 8453 --epoch-id 12
    python -m claimroot_cli verify claims/8453/0xabc....json
"""

__version__ = "0.1.0"
