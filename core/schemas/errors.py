"""
Schemas - Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for the entitlement ledger.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the ledger."""

    # Input Validation Errors
    INVALID_ADDRESS = "INVALID_ADDRESS"
    INVALID_AMOUNT = "INVALID_AMOUNT"

    # Membership Errors
    NOT_WHITELISTED = "NOT_WHITELISTED"

    # Merkle & Commitment Errors
    INTERNAL_INCONSISTENCY = "INTERNAL_INCONSISTENCY"

    # Snapshot & Serialization Errors
    INVALID_SNAPSHOT = "INVALID_SNAPSHOT"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class LedgerError(BaseModel):
    """
    Base error model for structured error communication.

    Used by hosts (CLI, services) to report failures without
    leaking exception objects across process boundaries.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_ADDRESS],
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

    def to_exception(self) -> "LedgerException":
        """Convert this error model to a raised exception."""
        return LedgerException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class LedgerException(Exception):
    """
    Base exception for all entitlement ledger errors.

    This exception carries structured error information and can be
    converted to/from LedgerError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "LEDGER_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> LedgerError:
        """Convert this exception to a LedgerError model."""
        return LedgerError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class InvalidAddressException(LedgerException):
    """Exception raised for a malformed account identifier."""

    def __init__(
        self,
        message: str,
        address: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if address is not None:
            full_details["address"] = str(address)
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_ADDRESS,
            details=full_details,
            retryable=False,
        )


class InvalidAmountException(LedgerException):
    """Exception raised for a zero, negative, oversized or unparseable amount."""

    def __init__(
        self,
        message: str,
        amount: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if amount is not None:
            full_details["amount"] = str(amount)
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_AMOUNT,
            details=full_details,
            retryable=False,
        )


class NotWhitelistedException(LedgerException):
    """Exception raised when a proof is requested for a non-member."""

    def __init__(
        self,
        address: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["address"] = address
        super().__init__(
            message=f"Address {address} is not whitelisted",
            code=ErrorCodes.NOT_WHITELISTED,
            details=full_details,
            retryable=False,
        )


class InternalInconsistencyException(LedgerException):
    """
    Exception raised when a freshly built proof fails self-verification.

    A correct implementation never raises this; it signals a bug in tree
    construction and aborts the operation instead of returning a bad proof.
    """

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INTERNAL_INCONSISTENCY,
            details=details,
            retryable=False,
        )


class InvalidSnapshotException(LedgerException):
    """Exception raised when snapshot data is structurally unusable."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_SNAPSHOT,
            details=details,
            retryable=False,
        )


class CanonicalizationException(LedgerException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )
