"""
Stellar Client Error Model

This module provides the error handling framework for the transaction engine.
Every failure is synchronous and local to the call that produced it; nothing
here is retried.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes for the transaction engine."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Encoding errors (100-199)
    ENCODING_ERROR = 100
    INVALID_XDR = 101
    MARSHAL_ERROR = 102
    UNMARSHAL_ERROR = 103

    # Address errors (200-299)
    INVALID_ADDRESS = 200
    INVALID_CHECKSUM = 201
    INVALID_VERSION_BYTE = 202
    UNSUPPORTED_ADDRESS_KIND = 203

    # Operation errors (300-399)
    INVALID_OPERATION = 300
    INVALID_AMOUNT = 301
    INVALID_DESTINATION = 302

    # Liquidity pool errors (400-499)
    INVALID_POOL_PARAMETERS = 400
    INVALID_POOL_TYPE = 401
    INVALID_POOL_FEE = 402
    UNORDERED_ASSETS = 403

    # Builder errors (500-599)
    INVALID_TRANSACTION = 500
    FEE_OVERFLOW = 501
    TIME_BOUNDS_CONFLICT = 502
    MISSING_SOURCE = 503
    BUILDER_STATE = 504
    ACCOUNT_IN_USE = 505
    INVALID_SEQUENCE = 506

    # Signature errors (600-699)
    INVALID_KEY = 600
    INVALID_SIGNATURE = 601


class StellarError(Exception):
    """
    Base class for all engine errors.

    Carries a structured code plus optional details and the underlying cause.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize an engine error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


class AddressError(StellarError):
    """Malformed address: bad checksum, wrong version byte or unsupported variant."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_ADDRESS,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class OperationError(StellarError):
    """Invalid operation field."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_OPERATION,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class PoolParametersError(StellarError):
    """Invalid liquidity pool parameters."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_POOL_PARAMETERS,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class InvalidPoolTypeError(PoolParametersError):
    """Liquidity pool type is not recognized."""

    def __init__(self, message: str = "liquidityPoolType is invalid",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_POOL_TYPE, details, cause)


class InvalidPoolFeeError(PoolParametersError):
    """Liquidity pool fee differs from the protocol constant."""

    def __init__(self, message: str = "fee is invalid",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_POOL_FEE, details, cause)


class UnorderedAssetsError(PoolParametersError):
    """Liquidity pool assets are not in lexicographic order."""

    def __init__(self, message: str = "Assets are not in lexicographic order",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNORDERED_ASSETS, details, cause)


class BuilderError(StellarError):
    """Transaction builder errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_TRANSACTION,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class FeeOverflowError(BuilderError):
    """Total fee does not fit the wire representation."""

    def __init__(self, message: str = "Fee overflows uint32",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.FEE_OVERFLOW, details, cause)


class TimeBoundsConflictError(BuilderError):
    """Timeout conflicts with an explicitly configured max time."""

    def __init__(self, message: str = "TimeBounds.max_time has been already set - setting timeout would overwrite it.",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.TIME_BOUNDS_CONFLICT, details, cause)


class MissingSourceError(BuilderError):
    """Build attempted without a source account."""

    def __init__(self, message: str = "Source account not set",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.MISSING_SOURCE, details, cause)


class BuilderStateError(BuilderError):
    """Builder used after it was consumed by build()."""

    def __init__(self, message: str = "Transaction builder has already been built",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.BUILDER_STATE, details, cause)


class AccountInUseError(BuilderError):
    """Another builder currently holds the account."""

    def __init__(self, message: str = "Account is in use by another builder",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.ACCOUNT_IN_USE, details, cause)


class CodecError(StellarError):
    """XDR encoding/decoding errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.ENCODING_ERROR,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class MarshalError(CodecError):
    """Value cannot be written in its XDR representation."""

    def __init__(self, message: str = "Marshal error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.MARSHAL_ERROR, details, cause)


class UnmarshalError(CodecError):
    """Bytes cannot be read as the expected XDR record."""

    def __init__(self, message: str = "Unmarshal error",
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNMARSHAL_ERROR, details, cause)


class SignatureError(StellarError):
    """Invalid key material or signature."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_SIGNATURE,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


__all__ = [
    "ErrorCode",
    "StellarError",
    "AddressError",
    "OperationError",
    "PoolParametersError",
    "InvalidPoolTypeError",
    "InvalidPoolFeeError",
    "UnorderedAssetsError",
    "BuilderError",
    "FeeOverflowError",
    "TimeBoundsConflictError",
    "MissingSourceError",
    "BuilderStateError",
    "AccountInUseError",
    "CodecError",
    "MarshalError",
    "UnmarshalError",
    "SignatureError",
]
