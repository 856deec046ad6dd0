"""Boundary Protocol — the contract between resource facades and the HTTP layer.

Invariants:
    - Services NEVER import the concrete client; they depend on RequestDispatcher only
    - `options` keys: "query" (query string), "json" (request body), "headers" (extra headers)
    - `path` is relative to the API base URL, without a leading slash

Design Decisions:
    - Protocol over ABC: structural subtyping, any object with a matching request() fits
      (the HTTP client, a MagicMock, or an in-memory fake)
"""

from typing import Any, Protocol

from asana_time_tracking.core.domain_types import ResponseType


class RequestDispatcher(Protocol):
    """Contract for sending one API request, implemented by infrastructure."""
    def request(
        self,
        method: str,
        path: str,
        options: dict[str, Any] | None = None,
        response_type: ResponseType = ResponseType.DATA,
    ) -> Any: ...
