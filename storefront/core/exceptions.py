"""
Exception hierarchy.
Every custom exception derives from StorefrontError so callers can catch
the whole family at the HTTP boundary.
"""

from typing import Any, Optional


class StorefrontError(Exception):
    """
    Base exception of the project.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        base = self.message
        if self.details:
            base += f" | Details: {self.details}"
        if self.cause:
            base += f" | Caused by: {self.cause}"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Serializes the exception for structured logs."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None,
        }


# CATALOG API ERRORS

class CatalogError(StorefrontError):
    """Generic failure while talking to the catalog API."""

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if url:
            details["url"] = url
        super().__init__(message, details=details, **kwargs)
        self.url = url


class UpstreamError(CatalogError):
    """Catalog API unreachable or answered with a non-2xx status."""

    def __init__(
        self,
        message: str = "Catalog API request failed",
        *,
        status_code: Optional[int] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if status_code:
            details["status_code"] = status_code
        super().__init__(message, details=details, **kwargs)
        self.status_code = status_code


class PayloadFormatError(CatalogError):
    """Catalog API answered with a body that is not the expected shape."""

    def __init__(
        self,
        message: str = "Invalid data format received from catalog API",
        *,
        raw_data: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if raw_data:
            # Keep logs readable
            details["raw_data"] = raw_data[:200] if len(raw_data) > 200 else raw_data
        super().__init__(message, details=details, **kwargs)


# LOOKUP ERRORS

class NotFoundError(StorefrontError):
    """A requested resource (product, SKU file, table) does not exist."""

    def __init__(
        self,
        message: str = "Not found",
        *,
        resource: Optional[str] = None,
        key: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if key:
            details["key"] = key
        super().__init__(message, details=details, **kwargs)
        self.resource = resource
        self.key = key


# VENDOR DATA ERRORS

class VendorDataError(StorefrontError):
    """A vendor data file exists but cannot be read or decoded."""

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if path:
            details["path"] = path
        super().__init__(message, details=details, **kwargs)


# VALIDATION ERRORS

class ValidationError(StorefrontError):
    """Invalid input data."""

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        if value is not None:
            details["invalid_value"] = str(value)
        super().__init__(message, details=details, **kwargs)
