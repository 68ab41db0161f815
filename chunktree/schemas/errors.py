"""
Schemas
File: errors.py

Purpose: Standard error taxonomy for chunktree.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Negative lookups (no proof for an item, a proof that does not verify)
are ordinary return values and never appear here.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Tree construction preconditions
    INVALID_LEAF_COUNT = "INVALID_LEAF_COUNT"
    LEAF_COUNT_NOT_POWER_OF_TWO = "LEAF_COUNT_NOT_POWER_OF_TWO"
    DATA_TOO_SHORT = "DATA_TOO_SHORT"
    TRAILING_BYTES = "TRAILING_BYTES"
    INVALID_INPUT_TYPE = "INVALID_INPUT_TYPE"
    INVALID_TREE_LAYOUT = "INVALID_TREE_LAYOUT"

    # Merkle & Commitment Errors
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"
    ROOT_MISMATCH = "ROOT_MISMATCH"
    LEAF_HASH_MISMATCH = "LEAF_HASH_MISMATCH"

    # Encoding
    PROOF_ENCODING_ERROR = "PROOF_ENCODING_ERROR"

    # Configuration
    CONFIG_ERROR = "CONFIG_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class ChunkTreeError(BaseModel):
    """
    Base error model for structured error reporting.

    Used by the CLI to emit machine-readable failures without
    carrying exception objects around.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_LEAF_COUNT],
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

    def to_exception(self) -> "ChunkTreeException":
        """Convert this error model to a raised exception."""
        return ChunkTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class ChunkTreeException(Exception):
    """
    Base exception for all chunktree errors.

    Carries structured error information and can be converted
    to a ChunkTreeError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "CHUNKTREE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> ChunkTreeError:
        """Convert this exception to a ChunkTreeError model."""
        return ChunkTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class TreePreconditionException(ChunkTreeException):
    """Exception raised when tree construction inputs are invalid."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.INVALID_LEAF_COUNT,
        leaves: int | None = None,
        data_length: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaves is not None:
            full_details["leaves"] = leaves
        if data_length is not None:
            full_details["data_length"] = data_length
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=False,
        )


class MerkleVerificationException(ChunkTreeException):
    """Exception raised when a caller requires a proof to exist or verify."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.MERKLE_PROOF_INVALID,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=code,
            details=full_details,
            retryable=False,
        )


class ProofEncodingException(ChunkTreeException):
    """Exception raised when a serialized proof cannot be decoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.PROOF_ENCODING_ERROR,
            details=details,
            retryable=False,
        )


class ConfigurationException(ChunkTreeException):
    """Exception raised for invalid configuration values."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if key:
            full_details["key"] = key
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
            retryable=False,
        )
