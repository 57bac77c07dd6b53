"""Custom exceptions for the tellme registry client.

Every failure of a registry call is raised as a subclass of RegistryError so
callers can tell a misconfigured client apart from a registry that refused
or garbled the request.
"""

import copyreg
from typing import Any, Dict, Optional


class TellmeError(Exception):
    """Base exception for all tellme client errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        """Initialize error with context.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code (e.g., "CREDENTIALS_MISSING")
            context: Additional context about the error
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
        }

    def __reduce__(self):
        # Subclass __init__ signatures differ; rebuild from args and state.
        return copyreg.__newobj__, (self.__class__, *self.args), dict(self.__dict__)


class RegistryError(TellmeError):
    """Base exception for registry call failures."""


class CredentialsMissingError(RegistryError):
    """Raised when an administrative operation runs without login and password."""

    def __init__(self, operation: str, **kwargs):
        super().__init__(
            f"Login and password must be set to call {operation}",
            error_code="CREDENTIALS_MISSING",
            context={"operation": operation},
            **kwargs,
        )
        self.operation = operation


class EndpointURLError(RegistryError):
    """Raised when the registry base address cannot be joined with a path."""


class RegistryTransportError(RegistryError):
    """Raised when the request never got a response from the registry."""


class RegistryStatusError(RegistryError):
    """Raised when the registry answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int, **kwargs):
        super().__init__(message, **kwargs)
        self.status_code = status_code


class RegistryDecodeError(RegistryError):
    """Raised when a successful response body has an unexpected shape."""
