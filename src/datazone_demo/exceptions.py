"""Error hierarchy for the DataZone demo client.

Remote-service failures are raised by botocore as ``ClientError`` and are
deliberately left unwrapped. The classes here cover failures detected locally:

- Invalid or missing configuration
- Names that could not be resolved to DataZone identifiers
"""

from typing import Any, Dict, Optional

from botocore.exceptions import ClientError

RESOURCE_NOT_FOUND = "ResourceNotFoundException"


class DataZoneDemoError(Exception):
    """Base exception for all errors raised by this package."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize error.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code (defaults to class name in uppercase)
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self.error_code}): {self.message}"


class ConfigurationError(DataZoneDemoError):
    """Configuration is missing, unreadable or invalid."""

    def __init__(
        self,
        message: str,
        error_code: str = "CONFIGURATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)


class NotFoundError(DataZoneDemoError):
    """A name could not be resolved to a DataZone resource."""

    resource_kind = "resource"

    def __init__(
        self,
        name: str,
        error_code: str = "NOT_FOUND",
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize not-found error.

        Args:
            name: The name that failed to resolve
            error_code: Error code (default: "NOT_FOUND")
            details: Additional details
        """
        details = dict(details or {})
        details.setdefault("name", name)
        details.setdefault("resource_kind", self.resource_kind)
        super().__init__(
            f"{self.resource_kind.capitalize()} not found: {name}", error_code, details
        )
        self.name = name


class ProjectNotFoundError(NotFoundError):
    """Owning project name did not match any project in the domain."""

    resource_kind = "project"

    def __init__(self, name: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(name, "PROJECT_NOT_FOUND", details)


class AssetTypeNotFoundError(NotFoundError):
    """Asset type name does not exist in the domain."""

    resource_kind = "asset type"

    def __init__(self, name: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(name, "ASSET_TYPE_NOT_FOUND", details)


def is_not_found(error: Exception) -> bool:
    """Check whether a remote error reports a missing resource.

    Args:
        error: Exception raised by the DataZone client

    Returns:
        True if the error is a ``ResourceNotFoundException``
    """
    if not isinstance(error, ClientError):
        return False
    return error.response.get("Error", {}).get("Code") == RESOURCE_NOT_FOUND


def get_error_code(error: Exception) -> str:
    """Get error code from exception.

    Args:
        error: Exception to extract code from

    Returns:
        Error code string
    """
    if isinstance(error, DataZoneDemoError):
        return error.error_code
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code", "CLIENT_ERROR")
    return "UNKNOWN_ERROR"
