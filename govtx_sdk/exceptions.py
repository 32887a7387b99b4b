"""
Exceptions for the govtx SDK.
"""
from typing import Any, Optional


class GovTxError(Exception):
    """Base exception for all SDK errors."""
    pass


class InvalidInputError(GovTxError, ValueError):
    """Raised for malformed local input. Never sent upstream."""
    pass


class InvalidAmount(InvalidInputError):
    """Raised when an amount is not a valid non-negative decimal."""
    pass


class InvalidAddress(InvalidInputError):
    """Raised when an address is not 40 hex characters after an optional 0x."""
    pass


class MissingField(InvalidInputError):
    """Raised when a required field of a transaction intent is absent."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing required field: {field}")


class MisconfiguredError(GovTxError):
    """Raised when credentials or endpoints are missing or invalid."""
    pass


class ProviderError(GovTxError):
    """Raised when an upstream service answers with a non-2xx status."""

    def __init__(self, message: str, status: Optional[int] = None, details: Any = None):
        self.message = message
        self.status = status
        self.details = details
        super().__init__(f"{message} (status: {status})" if status is not None else message)


class TransportError(GovTxError):
    """Raised when no usable response was received (network or decode failure)."""
    pass


class MatchResolutionError(GovTxError):
    """
    Raised when resolving a proposal execution fails.

    Carries the underlying cause and the failed resolution, so callers can
    tell whether a match had already been found.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None, resolution: Any = None):
        self.cause = cause
        self.resolution = resolution
        super().__init__(message)
