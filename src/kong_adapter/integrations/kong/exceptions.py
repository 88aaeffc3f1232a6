"""Kong Admin API exceptions and warnings."""

from __future__ import annotations

from typing import Any


class KongAPIError(Exception):
    """Base exception for Kong Admin API errors.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code from Kong (if a response was received).
        response_body: Response body from Kong (if available).
        endpoint: The API endpoint that was called.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: Any = None,
        endpoint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        self.endpoint = endpoint

    def __str__(self) -> str:
        parts = [self.message]
        if self.status_code:
            parts.append(f"(status: {self.status_code})")
        if self.endpoint:
            parts.append(f"[endpoint: {self.endpoint}]")
        return " ".join(parts)


class KongUnavailableError(KongAPIError):
    """Raised without a network call while the Kong admin endpoint is marked unavailable."""

    def __init__(self, last_message: str | None = None, endpoint: str | None = None) -> None:
        """Initialize KongUnavailableError.

        Args:
            last_message: The reason recorded when Kong was marked unavailable.
            endpoint: The API endpoint that was not called.
        """
        super().__init__(
            message=f"Kong admin end point not available: {last_message}",
            status_code=500,
            endpoint=endpoint,
        )
        self.last_message = last_message


class KongConnectionError(KongAPIError):
    """Raised when Kong could not be reached, after retries were exhausted.

    This covers refused connections, timeouts and DNS resolution failures.
    """

    def __init__(
        self,
        message: str = "Failed to connect to Kong Admin API",
        endpoint: str | None = None,
        original_error: Exception | None = None,
        attempts: int | None = None,
    ) -> None:
        super().__init__(message=message, endpoint=endpoint)
        self.original_error = original_error
        self.attempts = attempts


class KongUnexpectedStatusError(KongAPIError):
    """Raised when Kong answered with a status code other than the expected one."""

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        expected_status: int | None = None,
        response_body: Any = None,
        endpoint: str | None = None,
    ) -> None:
        """Initialize KongUnexpectedStatusError.

        Args:
            message: Human-readable error message; derived from the codes if omitted.
            status_code: Status code Kong returned.
            expected_status: Status code the verb expects.
            response_body: Parsed response body, kept for diagnostics.
            endpoint: The API endpoint that was called.
        """
        if message is None:
            message = (
                f"Kong did not return the expected status code "
                f"(got: {status_code}, expected: {expected_status})"
            )
        super().__init__(
            message=message,
            status_code=status_code,
            response_body=response_body,
            endpoint=endpoint,
        )
        self.expected_status = expected_status


class KongAuthError(KongUnexpectedStatusError):
    """Raised on 401/403 answers from the Kong Admin API."""


class KongNotFoundError(KongUnexpectedStatusError):
    """Raised when a requested Kong resource does not exist."""

    def __init__(
        self,
        message: str = "Kong resource not found",
        resource_type: str | None = None,
        resource_id: str | None = None,
        expected_status: int | None = None,
        response_body: Any = None,
        endpoint: str | None = None,
    ) -> None:
        if resource_type and resource_id:
            message = f"{resource_type} '{resource_id}' not found"
        super().__init__(
            message=message,
            status_code=404,
            expected_status=expected_status,
            response_body=response_body,
            endpoint=endpoint,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class KongValidationError(KongUnexpectedStatusError):
    """Raised when Kong rejects a payload with a 400 schema violation."""

    def __init__(
        self,
        message: str = "Invalid request data",
        validation_errors: dict[str, Any] | None = None,
        expected_status: int | None = None,
        response_body: Any = None,
        endpoint: str | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=400,
            expected_status=expected_status,
            response_body=response_body,
            endpoint=endpoint,
        )
        self.validation_errors = validation_errors or {}


class KongUnknownReferenceError(KongAPIError):
    """Raised when an entity points at another entity that cannot be found.

    Typical cases are a composite API whose service has no route, or a
    route referring to a service id that does not exist.
    """

    def __init__(
        self,
        message: str,
        resource_type: str | None = None,
        resource_id: str | None = None,
    ) -> None:
        super().__init__(message=message)
        self.resource_type = resource_type
        self.resource_id = resource_id


class TranslationAmbiguityWarning(UserWarning):
    """Several routes point at one service; only the first one is used."""
