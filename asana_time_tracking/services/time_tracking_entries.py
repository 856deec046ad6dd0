"""Time Tracking Entries — facade over the Asana time tracking entry endpoints.

Invariants:
    - Every GID is validated before the dispatcher is called (InvalidArgumentError otherwise)
    - create requires entered_on and duration_minutes; checked locally, before any request
    - update sends only the fields it is given (Asana leaves the rest unchanged)
    - No retries, caching, or pagination traversal here; remote errors propagate as AsanaApiError
    - Default response shape is ResponseType.DATA

Endpoints:
    GET    tasks/{task_gid}/time_tracking_entries
    POST   tasks/{task_gid}/time_tracking_entries
    GET    time_tracking_entries/{gid}
    PUT    time_tracking_entries/{gid}
    DELETE time_tracking_entries/{gid}
    GET    time_tracking_entries
"""

import logging
from collections.abc import Mapping
from datetime import date
from typing import Any

from pydantic import BaseModel

from asana_time_tracking.core.dispatcher_protocol import RequestDispatcher
from asana_time_tracking.core.domain_types import (
    DATE_QUERY_PARAMS,
    ENTERED_ON,
    REQUIRED_CREATE_FIELDS,
    ResponseType,
)
from asana_time_tracking.core.errors import InvalidArgumentError
from asana_time_tracking.core.validation import (
    validate_date_format,
    validate_gid,
    validate_limit,
    validate_required_fields,
)
from asana_time_tracking.schemas.time_tracking import (
    TimeTrackingEntryCreate,
    TimeTrackingEntryUpdate,
)

logger = logging.getLogger(__name__)

_TASK_GID = "Task GID"
_ENTRY_GID = "Time Tracking Entry GID"


class TimeTrackingEntriesService:
    """CRUD access to time tracking entries through a RequestDispatcher."""

    def __init__(self, client: RequestDispatcher):
        self.client = client

    def get_time_tracking_entries_for_task(
        self,
        task_gid: str,
        options: Mapping[str, Any] | None = None,
        response_type: ResponseType = ResponseType.DATA,
    ) -> Any:
        """List entries logged on a task.

        Options: limit (1-100), offset, opt_fields, opt_pretty.
        """
        task_gid = validate_gid(task_gid, _TASK_GID)
        query = _prepare_query(options)
        return self.client.request(
            "GET",
            f"tasks/{task_gid}/time_tracking_entries",
            {"query": query},
            response_type,
        )

    def create_time_tracking_entry(
        self,
        task_gid: str,
        data: Mapping[str, Any] | TimeTrackingEntryCreate,
        options: Mapping[str, Any] | None = None,
        response_type: ResponseType = ResponseType.DATA,
    ) -> Any:
        """Log time on a task and return the new entry.

        `data` needs entered_on (YYYY-MM-DD or date) and duration_minutes;
        created_by is optional and defaults to the authenticated user.
        """
        task_gid = validate_gid(task_gid, _TASK_GID)
        payload = _prepare_data(data)
        validate_required_fields(
            payload, REQUIRED_CREATE_FIELDS, "time tracking entry creation",
        )
        _check_entered_on(payload)
        query = _prepare_query(options)

        logger.info(f"Creating time tracking entry on task {task_gid}")
        return self.client.request(
            "POST",
            f"tasks/{task_gid}/time_tracking_entries",
            {"json": {"data": payload}, "query": query},
            response_type,
        )

    def get_time_tracking_entry(
        self,
        time_tracking_entry_gid: str,
        options: Mapping[str, Any] | None = None,
        response_type: ResponseType = ResponseType.DATA,
    ) -> Any:
        time_tracking_entry_gid = validate_gid(time_tracking_entry_gid, _ENTRY_GID)
        return self.client.request(
            "GET",
            f"time_tracking_entries/{time_tracking_entry_gid}",
            {"query": _prepare_query(options)},
            response_type,
        )

    def update_time_tracking_entry(
        self,
        time_tracking_entry_gid: str,
        data: Mapping[str, Any] | TimeTrackingEntryUpdate,
        options: Mapping[str, Any] | None = None,
        response_type: ResponseType = ResponseType.DATA,
    ) -> Any:
        """Change only the fields present in `data`."""
        time_tracking_entry_gid = validate_gid(time_tracking_entry_gid, _ENTRY_GID)
        payload = _prepare_data(data)
        _check_entered_on(payload)
        query = _prepare_query(options)
        return self.client.request(
            "PUT",
            f"time_tracking_entries/{time_tracking_entry_gid}",
            {"json": {"data": payload}, "query": query},
            response_type,
        )

    def delete_time_tracking_entry(
        self,
        time_tracking_entry_gid: str,
        response_type: ResponseType = ResponseType.DATA,
    ) -> Any:
        """Permanently delete an entry. DATA shape is an empty dict."""
        time_tracking_entry_gid = validate_gid(time_tracking_entry_gid, _ENTRY_GID)
        logger.info(f"Deleting time tracking entry {time_tracking_entry_gid}")
        return self.client.request(
            "DELETE",
            f"time_tracking_entries/{time_tracking_entry_gid}",
            {},
            response_type,
        )

    def get_time_tracking_entries(
        self,
        options: Mapping[str, Any] | None = None,
        response_type: ResponseType = ResponseType.DATA,
    ) -> Any:
        """List entries across a workspace.

        Filters: workspace, start_date, end_date (YYYY-MM-DD or date).
        Pagination and display options as for a single task.
        """
        return self.client.request(
            "GET",
            "time_tracking_entries",
            {"query": _prepare_query(options)},
            response_type,
        )


# --- Helpers ------------------------------------------------------------------


def _prepare_data(data: Mapping[str, Any] | BaseModel) -> dict:
    """Request body `data` object with dates rendered as YYYY-MM-DD."""
    if isinstance(data, (TimeTrackingEntryCreate, TimeTrackingEntryUpdate)):
        return data.to_payload()
    if not isinstance(data, Mapping):
        raise InvalidArgumentError(
            "Time tracking entry data must be a mapping.", field="data",
        )
    return {key: _jsonable(value) for key, value in data.items()}


def _prepare_query(options: Mapping[str, Any] | None) -> dict:
    """Query string options; None values are dropped, not sent empty."""
    query = {
        key: _jsonable(value)
        for key, value in (options or {}).items()
        if value is not None
    }
    if "limit" in query:
        query["limit"] = _coerce_limit(query["limit"])
        validate_limit(query["limit"])
    for name in DATE_QUERY_PARAMS:
        if query.get(name) is not None:
            validate_date_format(query[name], name)
    return query


def _coerce_limit(limit: Any) -> Any:
    # Query options often arrive as strings ("50"); anything non-numeric is left for validate_limit
    if isinstance(limit, str):
        stripped = limit.strip()
        if stripped.isascii() and stripped.isdigit():
            return int(stripped)
    return limit


def _check_entered_on(payload: dict) -> None:
    value = payload.get(ENTERED_ON)
    if isinstance(value, str) and value.strip():
        validate_date_format(value, ENTERED_ON)


def _jsonable(value: Any) -> Any:
    # datetime is a date subclass; keep only the calendar day
    if isinstance(value, date):
        return value.isoformat()[:10]
    return value
