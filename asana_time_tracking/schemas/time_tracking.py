"""Time Tracking Schemas — Pydantic models for entry payloads and records.

Invariants:
    - TimeTrackingEntryCreate requires entered_on and duration_minutes (>= 1)
    - TimeTrackingEntryUpdate has no required fields; only explicitly set fields are sent
    - Response models tolerate unknown fields (opt_fields can request anything)
    - to_payload() output is JSON-ready (dates as YYYY-MM-DD strings)
"""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from asana_time_tracking.core.domain_types import ResourceType


class _Payload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def to_payload(self) -> dict:
        """Body `data` object for the API: set fields only, JSON-ready."""
        return self.model_dump(mode="json", exclude_unset=True)


class TimeTrackingEntryCreate(_Payload):
    """Fields accepted by POST /tasks/{task_gid}/time_tracking_entries."""
    entered_on: date
    duration_minutes: int = Field(ge=1)
    created_by: str | None = None


class TimeTrackingEntryUpdate(_Payload):
    """Fields accepted by PUT /time_tracking_entries/{gid}."""
    entered_on: date | None = None
    duration_minutes: int | None = Field(None, ge=1)


# --- Response records ---------------------------------------------------------

class CompactResource(BaseModel):
    """Compact record Asana embeds for a related resource."""
    model_config = ConfigDict(extra="allow")

    gid: str
    resource_type: str | None = None
    name: str | None = None


class UserCompact(CompactResource):
    resource_type: str | None = ResourceType.USER.value


class TaskCompact(CompactResource):
    resource_type: str | None = ResourceType.TASK.value


class TimeTrackingEntry(BaseModel):
    """A time tracking entry as returned by the API (compact or full)."""
    model_config = ConfigDict(extra="allow")

    gid: str
    resource_type: str = ResourceType.TIME_TRACKING_ENTRY.value
    duration_minutes: int | None = None
    entered_on: date | None = None
    created_by: UserCompact | None = None
    task: TaskCompact | None = None


class NextPage(BaseModel):
    """Pagination cursor of a list response."""
    offset: str
    path: str | None = None
    uri: str | None = None


class TimeTrackingEntryList(BaseModel):
    """Decoded body of a list call made with ResponseType.NORMAL."""
    model_config = ConfigDict(extra="allow")

    data: list[TimeTrackingEntry]
    next_page: NextPage | None = None
