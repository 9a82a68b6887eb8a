"""
Module 01 - Schemas
File: errors.py

Purpose: Standard error taxonomy for claimroot.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Taxonomy:
- malformed input: bad address width, 256-bit overflow, empty leaf set
- consistency: a leaf queried for a proof is not part of the tree
- verification: a proof or root did not check out

None of these are retryable; they are surfaced to the caller synchronously.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Encoding & Input Errors
    ENCODING_ERROR = "ENCODING_ERROR"
    INPUT_VALIDATION_ERROR = "INPUT_VALIDATION_ERROR"
    DUPLICATE_ADDRESS = "DUPLICATE_ADDRESS"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Tree Errors
    EMPTY_TREE = "EMPTY_TREE"
    LEAF_NOT_FOUND = "LEAF_NOT_FOUND"

    # Merkle & Commitment Errors
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"
    ROOT_MISMATCH = "ROOT_MISMATCH"
    UNSUPPORTED_ENCODING = "UNSUPPORTED_ENCODING"

    # Artifact Errors
    ARTIFACT_IO_ERROR = "ARTIFACT_IO_ERROR"
    ARTIFACT_MISSING = "ARTIFACT_MISSING"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class ClaimRootError(BaseModel):
    """
    Error model for structured error output (e.g. the CLI's --json mode).
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.ENCODING_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "ClaimRootException":
        """Convert this error model to a raised exception."""
        return ClaimRootException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class ClaimRootException(Exception):
    """
    Base exception for all claimroot errors.

    Carries structured error information and can be converted
    to a ClaimRootError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "CLAIMROOT_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> ClaimRootError:
        """Convert this exception to a ClaimRootError model."""
        return ClaimRootError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EncodingException(ClaimRootException):
    """Raised when a value cannot be packed into the leaf or pair layout."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.ENCODING_ERROR,
            details=full_details,
            retryable=False,
        )


class EmptyTreeException(ClaimRootException):
    """Raised when a tree is requested over zero leaves."""

    def __init__(self, message: str = "Cannot build a Merkle tree from zero leaves") -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_TREE,
            retryable=False,
        )


class LeafNotFoundException(ClaimRootException):
    """Raised when a proof is requested for a leaf that is not in layer 0."""

    def __init__(
        self,
        message: str,
        leaf: str | None = None,
        leaf_index: int | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if leaf is not None:
            details["leaf"] = leaf
        if leaf_index is not None:
            details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.LEAF_NOT_FOUND,
            details=details,
            retryable=False,
        )


class InputValidationException(ClaimRootException):
    """Raised when an input file or record fails validation."""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        field_path: str | None = None,
        code: str = ErrorCodes.INPUT_VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if line is not None:
            full_details["line"] = line
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=False,
        )
        self.line = line


class ConfigurationException(ClaimRootException):
    """Raised when chain/epoch configuration is missing or invalid."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIGURATION_ERROR,
            details=details,
            retryable=False,
        )


class MerkleVerificationException(ClaimRootException):
    """Raised when Merkle proof verification fails."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.MERKLE_PROOF_INVALID,
            details=full_details,
            retryable=False,
        )
