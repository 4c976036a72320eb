"""
Transaction builder error model.

Every failure surfaced by the build, sign and encode pipeline is a
TxnBuildError subclass carrying a stable error code, optional structured
details and the underlying cause.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes grouped by pipeline concern."""

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2

    # Configuration errors (100-199)
    CONFIG_ERROR = 100
    TIMEBOUNDS_NOT_CONSTRUCTED = 101
    NETWORK_NOT_SET = 102

    # Validation errors (200-299)
    VALIDATION_ERROR = 200
    INVALID_TIMEBOUNDS = 201
    INVALID_OPERATION = 202
    INVALID_AMOUNT = 203
    INVALID_ASSET = 204
    INVALID_FEE = 205

    # Encoding errors (300-399)
    ENCODING_ERROR = 300
    INVALID_ADDRESS = 301
    INVALID_MEMO = 302
    MARSHAL_ERROR = 303
    UNMARSHAL_ERROR = 304

    # Crypto errors (400-499)
    CRYPTO_ERROR = 400
    INVALID_KEY = 401
    SIGNING_FAILED = 402

    # Sequence errors (500-599)
    SEQUENCE_ERROR = 500

    # Pipeline state errors (600-699)
    BUILD_ERROR = 600
    INVALID_STATE = 601


class TxnBuildError(Exception):
    """
    Base class for all transaction builder errors.

    Provides structured error information: a code, a message, optional
    details and the exception that caused this one.
    """

    default_code = ErrorCode.UNKNOWN

    def __init__(self, message: str, code: Optional[ErrorCode] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        """
        Initialize a builder error.

        Args:
            message: Error message
            code: Error code (defaults to the class default)
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
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

    def wrap(self, message: str, details: Optional[Dict[str, Any]] = None) -> TxnBuildError:
        """
        Re-raise-ready copy of this error with extra context prepended.

        The returned error has the same class and code, so callers that
        catch by category still see the original category.
        """
        merged = dict(self.details)
        if details:
            merged.update(details)
        return self.__class__(f"{message}: {self.message}", self.code, merged, self)


class ConfigError(TxnBuildError):
    """Missing or invalid configuration, e.g. timebounds not built by a factory."""

    default_code = ErrorCode.CONFIG_ERROR


class ValidationError(TxnBuildError):
    """Business-rule violations: timebounds ranges, operation fields, fees."""

    default_code = ErrorCode.VALIDATION_ERROR


class EncodingError(TxnBuildError):
    """Address parsing, memo limits and codec failures."""

    default_code = ErrorCode.ENCODING_ERROR


class CryptoError(TxnBuildError):
    """Hashing or signing failures."""

    default_code = ErrorCode.CRYPTO_ERROR


class SequenceError(TxnBuildError):
    """Sequence number retrieval failures reported by the source account."""

    default_code = ErrorCode.SEQUENCE_ERROR


class BuildError(TxnBuildError):
    """Pipeline failures that name the failing stage or operation."""

    default_code = ErrorCode.BUILD_ERROR


__all__ = [
    "ErrorCode",
    "TxnBuildError",
    "ConfigError",
    "ValidationError",
    "EncodingError",
    "CryptoError",
    "SequenceError",
    "BuildError",
]
