"""
Runtime Configuration Module

Provides configuration loading for epoch builds.
"""

from .runtime import EpochConfig, OutputLayout

__all__ = [
    "EpochConfig",
    "OutputLayout",
]
