"""Domain Types — response-shape selector, resource types, and API field names.

Invariants:
    - Asana GIDs are numeric strings, never ints
    - ResponseType values match the integer selectors of the Asana client family (1, 2, 3)
    - ResponseType.DATA is the default everywhere a selector is accepted
"""

from enum import Enum, IntEnum


# ─── Enums ───────────────────────────────────────────────────────

class ResponseType(IntEnum):
    """How much of an API response a call returns."""
    FULL = 1    # status, reason, headers, body, raw_body, request
    NORMAL = 2  # complete decoded JSON body (includes next_page)
    DATA = 3    # only body["data"]


class ResourceType(str, Enum):
    """Asana resource_type values seen by this package."""
    TIME_TRACKING_ENTRY = "time_tracking_entry"
    TASK = "task"
    USER = "user"


# ─── Field names ─────────────────────────────────────────────────

ENTERED_ON = "entered_on"
DURATION_MINUTES = "duration_minutes"

REQUIRED_CREATE_FIELDS = (ENTERED_ON, DURATION_MINUTES)

# Query parameters that carry a calendar day
DATE_QUERY_PARAMS = ("start_date", "end_date")

MIN_PAGE_LIMIT = 1
MAX_PAGE_LIMIT = 100
