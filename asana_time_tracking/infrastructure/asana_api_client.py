"""Asana API Client — httpx-backed RequestDispatcher with response shaping and error mapping.

Invariants:
    - Every request carries `Authorization: Bearer <token>` and `Accept: application/json`
    - Rate limits (429): retried up to max_retries, honouring Retry-After, then RateLimitError
    - Other 4xx/5xx: immediate AsanaApiError carrying status code and decoded error body
    - Transport failures (connect, timeout): AsanaApiError with status_code=0, no retry
    - FULL responses echo the request with the Authorization header redacted
    - The access token never reaches the logger

Design Decisions:
    - Wrapper over raw httpx.Client: resource facades depend only on RequestDispatcher
    - `transport` is injectable so tests run against httpx.MockTransport
"""

import copy
import logging
import math
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any

import httpx

from asana_time_tracking.config import DEFAULT_BASE_URL
from asana_time_tracking.core.domain_types import ResponseType
from asana_time_tracking.core.errors import (
    AsanaApiError,
    ErrorCategory,
    ErrorContext,
    RateLimitError,
)

logger = logging.getLogger(__name__)

_RATE_LIMITED_STATUS = 429
_REDACTED = "[REDACTED]"


class AsanaApiClient:
    """Sends authenticated requests to the Asana REST API."""

    DEFAULT_MAX_RETRIES = 3
    DEFAULT_INITIAL_BACKOFF = 1  # seconds

    def __init__(
        self,
        access_token: str,
        base_url: str = DEFAULT_BASE_URL,
        max_retries: int = DEFAULT_MAX_RETRIES,
        initial_backoff_seconds: int = DEFAULT_INITIAL_BACKOFF,
        timeout_seconds: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self._http = httpx.Client(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
            },
            timeout=timeout_seconds,
            transport=transport,
        )
        self.max_retries = max_retries
        self.initial_backoff_seconds = initial_backoff_seconds

    def __enter__(self) -> "AsanaApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Release the underlying connection pool."""
        self._http.close()

    def request(
        self,
        method: str,
        path: str,
        options: dict[str, Any] | None = None,
        response_type: ResponseType = ResponseType.DATA,
    ) -> Any:
        """Send one request, retrying only on HTTP 429.

        `options` may hold "query", "json" and "headers". The return value
        depends on `response_type` (see ResponseType).
        """
        options = options or {}
        context = ErrorContext(method=method, path=path)

        for attempt in range(self.max_retries + 1):
            logger.debug(
                "Making API request",
                extra={"method": method, "path": path, "retry_count": attempt},
            )
            response = self._send(method, path, options, context)

            if response.status_code == _RATE_LIMITED_STATUS:
                self._handle_rate_limit(response, attempt, context)
                continue

            if response.is_error:
                raise self._api_error(response, context)

            return self._shape(response, context, options, response_type)

        # Unreachable: the final attempt either returns or raises
        raise AssertionError("retry loop exited without a result")

    # ─── Transport ──────────────────────────────────────────────

    def _send(
        self, method: str, path: str, options: dict, context: ErrorContext,
    ) -> httpx.Response:
        """Perform the HTTP call, mapping transport failures to AsanaApiError."""
        try:
            return self._http.request(
                method,
                path,
                params=options.get("query") or None,
                json=options.get("json"),
                headers=options.get("headers"),
            )
        except httpx.TimeoutException as e:
            logger.error(
                f"API request timed out: {e}",
                extra={"method": method, "path": path, "error_code": "timeout"},
            )
            raise AsanaApiError(
                f"Request to Asana API timed out: {e}", 0, context=context,
                category=ErrorCategory.CONNECTION,
            ) from e
        except httpx.TransportError as e:
            logger.error(
                f"API connection failed: {e}",
                extra={"method": method, "path": path, "error_code": "connection_error"},
            )
            raise AsanaApiError(
                f"Could not connect to Asana API: {e}", 0, context=context,
                category=ErrorCategory.CONNECTION,
            ) from e

    # ─── Rate limiting ──────────────────────────────────────────

    def _handle_rate_limit(
        self, response: httpx.Response, attempt: int, context: ErrorContext,
    ) -> None:
        """Sleep before the next attempt, or raise once retries are spent."""
        retry_after = self._retry_after_seconds(response, attempt)
        if attempt >= self.max_retries:
            logger.error(
                "Rate limit exceeded, max retries exhausted",
                extra={
                    "method": context.method, "path": context.path,
                    "retry_count": attempt, "max_retries": self.max_retries,
                },
            )
            decoded = _decode_body(response)
            raise RateLimitError(
                retry_after,
                details=decoded if isinstance(decoded, dict) else None,
                context=context,
            )
        logger.warning(
            f"Rate limit exceeded, retrying in {retry_after}s",
            extra={
                "method": context.method, "path": context.path,
                "retry_count": attempt + 1, "max_retries": self.max_retries,
                "retry_after_seconds": retry_after,
            },
        )
        time.sleep(retry_after)

    def _retry_after_seconds(self, response: httpx.Response, attempt: int) -> int:
        """Retry-After as seconds or HTTP-date (minimum 1), else exponential backoff."""
        value = response.headers.get("retry-after", "").strip()
        if not value:
            return self.initial_backoff_seconds * (2 ** attempt)
        try:
            seconds = float(value)
        except ValueError:
            seconds = None
        if seconds is not None and math.isfinite(seconds):
            return max(1, int(seconds))
        try:
            when = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            when = None
        if when is not None:
            if when.tzinfo is None:
                when = when.replace(tzinfo=timezone.utc)
            delta = (when - datetime.now(timezone.utc)).total_seconds()
            return max(1, int(delta))
        return self.initial_backoff_seconds * (2 ** attempt)

    # ─── Response handling ──────────────────────────────────────

    def _api_error(self, response: httpx.Response, context: ErrorContext) -> AsanaApiError:
        decoded = _decode_body(response)
        details = decoded if isinstance(decoded, dict) else {}
        message = _error_message(response, details)
        logger.error(
            "API request failed",
            extra={
                "method": context.method, "path": context.path,
                "status_code": response.status_code, "error_code": "http_error",
            },
        )
        return AsanaApiError(message, response.status_code, details, context=context)

    def _shape(
        self,
        response: httpx.Response,
        context: ErrorContext,
        options: dict,
        response_type: ResponseType,
    ) -> Any:
        method, path = context.method, context.path
        decoded = _decode_body(response)
        if decoded is None:
            logger.error(
                "Invalid JSON response from Asana API",
                extra={"method": method, "path": path, "status_code": response.status_code},
            )
            raise AsanaApiError(
                "Invalid JSON response from Asana API.", response.status_code,
                context=context,
            )

        logger.debug(
            "API request successful",
            extra={"method": method, "path": path, "status_code": response.status_code},
        )

        if response_type == ResponseType.FULL:
            return {
                "status": response.status_code,
                "reason": response.reason_phrase,
                "headers": {
                    name: response.headers.get_list(name)
                    for name in response.headers.keys()
                },
                "body": decoded,
                "raw_body": response.text,
                "request": {
                    "method": method,
                    "uri": path,
                    "options": _sanitize_options(options),
                },
            }
        if response_type == ResponseType.NORMAL:
            return decoded
        if isinstance(decoded, dict) and "data" in decoded:
            return decoded["data"]
        return decoded


def _decode_body(response: httpx.Response) -> dict | list | None:
    """Decoded JSON object/array; {} for an empty body; None if not JSON."""
    if not response.content:
        return {}
    try:
        decoded = response.json()
    except ValueError:
        return None
    return decoded if isinstance(decoded, (dict, list)) else None


def _error_message(response: httpx.Response, details: dict) -> str:
    """Asana's first error message (+ help), prefixed with the failed request line."""
    errors = details.get("errors")
    first = errors[0] if isinstance(errors, list) and errors else None
    if isinstance(first, dict) and first.get("message"):
        request = response.request
        message = (
            f"{request.method} {request.url} resulted in a "
            f"{response.status_code} {response.reason_phrase}: {first['message']}"
        )
        if first.get("help"):
            message += f"\n{first['help']}"
        return message
    if response.text:
        return response.text
    return f"HTTP {response.status_code} {response.reason_phrase}".rstrip()


def _sanitize_options(options: dict) -> dict:
    """Copy of request options safe to hand back to callers."""
    sanitized = copy.deepcopy(options)
    headers = sanitized.get("headers")
    if isinstance(headers, dict):
        for name in headers:
            if name.lower() == "authorization":
                headers[name] = _REDACTED
    return sanitized
