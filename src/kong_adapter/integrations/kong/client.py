"""Kong Admin API HTTP client."""

from __future__ import annotations

import asyncio
import json
import os
import ssl
from typing import TYPE_CHECKING, Any

import httpx
import structlog
from rich.console import Console
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from kong_adapter.core.runtime import get_kong_url
from kong_adapter.integrations.kong.availability import (
    AvailabilityGate,
    get_availability_gate,
)
from kong_adapter.integrations.kong.config import KongConnectionConfig
from kong_adapter.integrations.kong.exceptions import (
    KongAPIError,
    KongAuthError,
    KongConnectionError,
    KongNotFoundError,
    KongUnavailableError,
    KongUnexpectedStatusError,
    KongValidationError,
)
from kong_adapter.integrations.kong.statistics import (
    StatisticsRecorder,
    get_statistics_recorder,
)
from kong_adapter.utils.payload import get_json

if TYPE_CHECKING:
    from kong_adapter.integrations.kong.config import KongAuthConfig

logger = structlog.get_logger()

# Status code each verb must answer with to count as success
EXPECTED_STATUS_CODES: dict[str, int] = {
    "GET": 200,
    "POST": 201,
    "PUT": 200,
    "PATCH": 200,
    "DELETE": 204,
}

_BODYLESS_METHODS = frozenset({"GET", "DELETE"})

_curl_console = Console(stderr=True, highlight=False, soft_wrap=True)


class KongAdminClient:
    """Async HTTP client for the Kong Admin API.

    Every call goes through :meth:`execute`, which records statistics,
    honours the availability gate and retries transport failures with a
    fixed delay. While a request is being retried the gate is closed, so
    concurrent calls fail fast with :class:`KongUnavailableError` instead of
    piling up on an unreachable Kong.

    Example:
        ```python
        from kong_adapter.integrations.kong import KongAdminClient, KongConnectionConfig

        connection = KongConnectionConfig(base_url="http://localhost:8001")

        async with KongAdminClient(connection) as client:
            status = await client.get_status()
        ```
    """

    def __init__(
        self,
        connection_config: KongConnectionConfig | None = None,
        auth_config: KongAuthConfig | None = None,
        *,
        debug_curl: bool | None = None,
        gate: AvailabilityGate | None = None,
        statistics: StatisticsRecorder | None = None,
    ) -> None:
        """Initialize the Kong Admin API client.

        Args:
            connection_config: Connection settings. Without a base URL the
                process-wide Kong URL (``set_kong_url``) is used.
            auth_config: Authentication settings (type, credentials).
            debug_curl: Echo every call as a curl command on stderr.
                Defaults to whether ``KONG_CURL`` is set.
            gate: Availability gate; defaults to the process-wide one.
            statistics: Statistics recorder; defaults to the process-wide one.
        """
        self.connection_config = connection_config or KongConnectionConfig()
        self.auth_config = auth_config
        self.base_url = self.connection_config.base_url or get_kong_url()
        self._max_attempts = self.connection_config.max_attempts
        self._retry_delay = self.connection_config.retry_delay_seconds
        self._gate = gate if gate is not None else get_availability_gate()
        self._statistics = statistics if statistics is not None else get_statistics_recorder()
        if debug_curl is None:
            debug_curl = bool(os.environ.get("KONG_CURL"))
        self._debug_curl = debug_curl

        client_kwargs: dict[str, Any] = {
            "base_url": self.base_url,
            "timeout": httpx.Timeout(self.connection_config.timeout_seconds),
            "verify": self.connection_config.verify_ssl,
        }

        headers: dict[str, str] = {}
        if auth_config:
            if auth_config.type == "api_key" and auth_config.api_key:
                headers[auth_config.header_name] = auth_config.api_key
                logger.debug("Kong client configured with API key auth")
            elif auth_config.type == "mtls" and auth_config.cert_path and auth_config.key_path:
                context = ssl.create_default_context(cafile=auth_config.ca_path)
                context.load_cert_chain(auth_config.cert_path, auth_config.key_path)
                client_kwargs["verify"] = context
                logger.debug("Kong client configured with mTLS auth")

        if headers:
            client_kwargs["headers"] = headers

        self._client = httpx.AsyncClient(**client_kwargs)

        logger.info(
            "Kong Admin API client initialized",
            base_url=self.base_url,
            auth_type=auth_config.type if auth_config else "none",
        )

    @property
    def gate(self) -> AvailabilityGate:
        return self._gate

    def _before_retry(self, retry_state: RetryCallState) -> None:
        """Close the gate before sleeping on a failed attempt."""
        error = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(error, KongAPIError):
            reason = error.message
        else:
            reason = str(error) if error else "unknown transport failure"
        logger.warning(
            "kong_request_failed_retrying",
            attempt=retry_state.attempt_number,
            delay_ms=self.connection_config.retry_delay_ms,
            error=reason,
        )
        self._gate.set_available(False, reason)

    def _make_retry_decorator(self) -> Any:
        """Create a retry decorator based on configuration."""
        return retry(
            retry=retry_if_exception_type(KongConnectionError),
            stop=stop_after_attempt(self._max_attempts + 1),
            wait=wait_fixed(self._retry_delay),
            before_sleep=self._before_retry,
            reraise=True,
        )

    async def _send(self, request: httpx.Request) -> httpx.Response:
        """Send one attempt, turning transport failures into KongConnectionError."""
        endpoint = request.url.path
        try:
            return await self._client.send(request)
        except httpx.TimeoutException as e:
            raise KongConnectionError(
                message=f"Kong request timed out: {e}",
                endpoint=endpoint,
                original_error=e,
            ) from e
        except httpx.TransportError as e:
            raise KongConnectionError(
                message=f"Failed to send a request to Kong: {e}",
                endpoint=endpoint,
                original_error=e,
            ) from e

    def _echo_curl(self, request: httpx.Request, body: Any) -> None:
        if not self._debug_curl:
            return
        if request.method in _BODYLESS_METHODS:
            command = f"curl -X {request.method} {request.url}"
        else:
            command = (
                f"curl -X {request.method} -d '{json.dumps(body)}' "
                f"-H 'Content-Type: application/json' {request.url}"
            )
        _curl_console.print(command, markup=False)

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        try:
            return get_json(response.content)
        except ValueError:
            return {"raw": response.text}

    def _handle_response(
        self,
        response: httpx.Response,
        endpoint: str,
        expected_status: int,
    ) -> Any:
        """Return the parsed body, or raise if the status code is not the expected one.

        Raises:
            KongAuthError: On 401/403.
            KongNotFoundError: On 404.
            KongValidationError: On 400.
            KongUnexpectedStatusError: For any other unexpected status code.
        """
        body = self._parse_body(response)
        status = response.status_code

        if status == expected_status:
            return body

        message = body.get("message") if isinstance(body, dict) else None

        if status in (401, 403):
            raise KongAuthError(
                message=message or "Authentication failed",
                status_code=status,
                expected_status=expected_status,
                response_body=body,
                endpoint=endpoint,
            )

        if status == 404:
            raise KongNotFoundError(
                message=message or "Resource not found",
                expected_status=expected_status,
                response_body=body,
                endpoint=endpoint,
            )

        if status == 400:
            fields = body.get("fields") if isinstance(body, dict) else None
            raise KongValidationError(
                message=message or "Validation failed",
                validation_errors=fields or {},
                expected_status=expected_status,
                response_body=body,
                endpoint=endpoint,
            )

        raise KongUnexpectedStatusError(
            status_code=status,
            expected_status=expected_status,
            response_body=body,
            endpoint=endpoint,
        )

    async def execute(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        expected_status: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Run one logical call against the Kong Admin API.

        Transport failures are retried transparently; the caller only ever
        sees the final outcome.

        Args:
            method: HTTP verb (GET, POST, PATCH, PUT, DELETE).
            endpoint: API endpoint relative to the base URL (e.g. "services").
            body: Request payload, sent as JSON for verbs that carry one.
            expected_status: Status code meaning success; defaults per verb.
            params: Query parameters.

        Returns:
            Parsed response body (None for empty bodies).

        Raises:
            KongUnavailableError: If Kong is marked unavailable; nothing is sent.
            KongConnectionError: If every attempt failed at the transport level.
            KongUnexpectedStatusError: If Kong answered with another status code.
        """
        method = method.upper()
        if expected_status is None:
            if method not in EXPECTED_STATUS_CODES:
                raise ValueError(f"Unsupported HTTP method: {method}")
            expected_status = EXPECTED_STATUS_CODES[method]

        url = f"/{endpoint.lstrip('/')}"
        log = logger.bind(method=method, endpoint=url)
        self._statistics.record_action(method, endpoint, body)

        if not self._gate.is_available():
            message = self._gate.get_message()
            log.warning("kong_unavailable_fail_fast", message=message)
            raise KongUnavailableError(message, endpoint=url)

        request = self._client.build_request(
            method,
            url,
            params=params,
            json=None if method in _BODYLESS_METHODS else body,
        )
        self._echo_curl(request, body)

        log.debug("Kong API request")
        try:
            response = await self._make_retry_decorator()(self._send)(request)
        except KongConnectionError as e:
            e.attempts = self._max_attempts + 1
            log.error("kong_request_giving_up", attempts=e.attempts, error=str(e))
            raise
        except asyncio.CancelledError:
            log.warning("kong_request_cancelled")
            raise
        finally:
            # Any outcome, cancellation included, reopens the gate
            self._gate.set_available(True, None)

        log.debug("Kong API response", status=response.status_code)
        try:
            return self._handle_response(response, url, expected_status)
        except KongAPIError as e:
            log.debug("kong_unexpected_status", status=e.status_code, body=e.response_body)
            raise

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        return await self.execute("GET", endpoint, params=params)

    async def post(self, endpoint: str, json: Any = None) -> Any:
        return await self.execute("POST", endpoint, body=json)

    async def put(self, endpoint: str, json: Any = None) -> Any:
        return await self.execute("PUT", endpoint, body=json)

    async def patch(self, endpoint: str, json: Any = None) -> Any:
        return await self.execute("PATCH", endpoint, body=json)

    async def delete(self, endpoint: str) -> None:
        await self.execute("DELETE", endpoint)

    async def aclose(self) -> None:
        """Close the HTTP client and release resources."""
        await self._client.aclose()
        logger.debug("Kong client closed")

    async def __aenter__(self) -> KongAdminClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    # Convenience methods for global information

    async def get_raw(self, endpoint: str) -> Any:
        """GET an arbitrary endpoint.

        Prefer a named manager method; this is for special cases only.
        """
        return await self.get(endpoint)

    async def get_info(self) -> dict[str, Any]:
        """Get Kong node information (version, hostname, plugins)."""
        result: dict[str, Any] = await self.get("")
        return result

    async def get_status(self) -> dict[str, Any]:
        """Get Kong node status including database connectivity."""
        result: dict[str, Any] = await self.get("status")
        return result

    async def check_status(self) -> dict[str, Any]:
        """Fetch the node status and store it as the gate's cluster status."""
        status = await self.get_status()
        self._gate.mark_available(True, None, status)
        return status

    async def check_connection(self) -> bool:
        """Check whether the Kong Admin API answers."""
        try:
            await self.get_status()
            return True
        except KongAPIError:
            return False
