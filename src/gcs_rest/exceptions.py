"""Exception hierarchy for the GCS REST client.

Two families of errors exist:

* Pre-flight errors, raised before any request is sent. They signal a
  programming mistake and must not be retried.
* API errors, raised when Cloud Storage answers with a status >= 400. They
  carry the HTTP status as ``code`` and the response body as ``data``.

Exception Hierarchy:
    GCSError
    ├── GCSConfigError (required parameter missing)
    ├── GCSValidationError (malformed input caught locally)
    ├── GCSTransportError (request could not be completed)
    └── GCSApiError (HTTP status >= 400)
        ├── GCSAuthError (401)
        └── GCSNotFoundError (404)

Usage:
    from gcs_rest.exceptions import GCSApiError, GCSNotFoundError

    try:
        await client.get("my-bucket", "reports/2024.json", token)
    except GCSNotFoundError:
        ...
    except GCSApiError as e:
        logger.warning("GCS failed with %s: %s", e.code, e.data)
"""

from __future__ import annotations

from typing import Any

NOT_FOUND_MESSAGE = "Object not found"
ACCESS_DENIED_MESSAGE = "Access denied"
SERVER_ERROR_MESSAGE = "Internal Server Error"


class GCSError(Exception):
    """Base exception for the GCS REST client.

    Attributes:
        message: Human-readable error message.
        details: Additional context about the error.
        error_code: Machine-readable error code (optional).
    """

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Additional context as key-value pairs.
            error_code: Machine-readable error code.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.error_code = error_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a JSON-serializable dictionary.

        Returns:
            Dictionary with the error class, message, code and details.
        """
        result: dict[str, Any] = {
            "error": self.__class__.__name__,
            "message": self.message,
        }
        if self.error_code:
            result["code"] = self.error_code
        if self.details:
            result["details"] = self.details
        return result


class GCSConfigError(GCSError):
    """A required parameter is missing.

    Raised before any network call. Callers should treat it as a
    programming error, never as a transient failure.

    Example:
        >>> raise GCSConfigError("Parameter 'token' is required.", parameter="token")
    """

    def __init__(
        self,
        message: str,
        *,
        parameter: str | None = None,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        details = details or {}
        if parameter:
            details["parameter"] = parameter
        super().__init__(
            message, details=details, error_code=error_code or "MISSING_PARAMETER"
        )
        self.parameter = parameter


class GCSValidationError(GCSError):
    """Input rejected locally before reaching Cloud Storage."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        if value is not None:
            str_value = str(value)
            details["value"] = (
                str_value[:100] + "..." if len(str_value) > 100 else str_value
            )
        super().__init__(
            message, details=details, error_code=error_code or "VALIDATION_ERROR"
        )


class GCSTransportError(GCSError):
    """The HTTP request could not be completed (connection, timeout...)."""

    def __init__(
        self,
        message: str,
        *,
        method: str | None = None,
        url: str | None = None,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        details = details or {}
        if method:
            details["method"] = method
        if url:
            details["url"] = url
        super().__init__(
            message, details=details, error_code=error_code or "TRANSPORT_ERROR"
        )


class GCSApiError(GCSError):
    """Cloud Storage answered with an error status.

    Attributes:
        code: HTTP status code of the response.
        data: Response body (parsed JSON, text, bytes or None).
    """

    def __init__(
        self,
        message: str = SERVER_ERROR_MESSAGE,
        *,
        code: int,
        data: Any = None,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        details = details or {}
        details["status_code"] = code
        super().__init__(message, details=details, error_code=error_code or "API_ERROR")
        self.code = code
        self.data = data

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.message} (status: {self.code})"


class GCSAuthError(GCSApiError):
    """Cloud Storage rejected the bearer token (HTTP 401)."""

    def __init__(self, message: str = ACCESS_DENIED_MESSAGE, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "ACCESS_DENIED")
        super().__init__(message, **kwargs)


class GCSNotFoundError(GCSApiError):
    """Bucket or object does not exist (HTTP 404)."""

    def __init__(self, message: str = NOT_FOUND_MESSAGE, **kwargs: Any) -> None:
        kwargs.setdefault("error_code", "NOT_FOUND")
        super().__init__(message, **kwargs)


def error_for_status(status: int, data: Any = None) -> GCSApiError:
    """Build the API error matching an HTTP status.

    Only 404 and 401 get a dedicated message; every other status collapses
    into the generic server error message.

    Args:
        status: HTTP status code (>= 400).
        data: Response body to attach to the error.

    Returns:
        The exception instance, ready to be raised.
    """
    if status == 404:
        return GCSNotFoundError(code=status, data=data)
    if status == 401:
        return GCSAuthError(code=status, data=data)
    return GCSApiError(SERVER_ERROR_MESSAGE, code=status, data=data)


__all__ = [
    "ACCESS_DENIED_MESSAGE",
    "NOT_FOUND_MESSAGE",
    "SERVER_ERROR_MESSAGE",
    "GCSApiError",
    "GCSAuthError",
    "GCSConfigError",
    "GCSError",
    "GCSNotFoundError",
    "GCSTransportError",
    "GCSValidationError",
    "error_for_status",
]
