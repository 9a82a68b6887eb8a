"""
Module 01 - Schemas
File: __init__.py

Purpose: Export error, versioning and verification schemas.

The record and artifact models depend on core.crypto and are imported
from their own modules (core.schemas.records, core.schemas.artifacts).
"""

# Version constants
from .versioning import (
    ENCODING_VERSION,
    SUPPORTED_ENCODING_VERSIONS,
    EncodingVersion,
    UnsupportedEncodingVersionError,
    assert_supported_encoding_version,
)

# Error models and exceptions
from .errors import (
    ClaimRootError,
    ClaimRootException,
    ConfigurationException,
    EmptyTreeException,
    EncodingException,
    ErrorCodes,
    InputValidationException,
    LeafNotFoundException,
    MerkleVerificationException,
)

# Verification results
from .verification import (
    CheckResult,
    CheckSeverity,
    VerificationResult,
)

__all__ = [
    # Versioning
    "ENCODING_VERSION",
    "SUPPORTED_ENCODING_VERSIONS",
    "EncodingVersion",
    "UnsupportedEncodingVersionError",
    "assert_supported_encoding_version",
    # Errors
    "ClaimRootError",
    "ClaimRootException",
    "ConfigurationException",
    "EmptyTreeException",
    "EncodingException",
    "ErrorCodes",
    "InputValidationException",
    "LeafNotFoundException",
    "MerkleVerificationException",
    # Verification
    "CheckResult",
    "CheckSeverity",
    "VerificationResult",
]
