"""Input Validation — pure checks run before any request leaves the process.

Invariants:
    - Every check raises InvalidArgumentError and never touches the network
    - A GID is valid iff it is non-empty after strip() and all digits
    - A required field is missing iff absent, None, or a blank string
    - Dates are YYYY-MM-DD strings (shape only, no calendar check)
"""

import re
from collections.abc import Iterable, Mapping

from asana_time_tracking.core.domain_types import MIN_PAGE_LIMIT, MAX_PAGE_LIMIT
from asana_time_tracking.core.errors import InvalidArgumentError

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def validate_gid(gid: str, parameter_name: str) -> str:
    """Reject empty or non-numeric GIDs; return the GID stripped of whitespace."""
    trimmed = gid.strip() if isinstance(gid, str) else ""
    if not trimmed:
        raise InvalidArgumentError(
            f"{parameter_name} must be a non-empty string.", field=parameter_name,
        )
    if not (trimmed.isascii() and trimmed.isdigit()):
        raise InvalidArgumentError(
            f"{parameter_name} must be a numeric string.", field=parameter_name,
        )
    return trimmed


def _is_missing(data: Mapping, field: str) -> bool:
    value = data.get(field)
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def validate_required_fields(
    data: Mapping, required_fields: Iterable[str], context: str,
) -> None:
    """Reject payloads missing any of `required_fields`, listing all of them."""
    missing = [f for f in required_fields if _is_missing(data, f)]
    if missing:
        raise InvalidArgumentError(
            f"Missing required field(s) for {context}: {', '.join(missing)}",
            field=missing[0],
        )


def validate_date_format(value: str, parameter_name: str) -> None:
    if not isinstance(value, str) or not _DATE_PATTERN.match(value):
        raise InvalidArgumentError(
            f"{parameter_name} must be in YYYY-MM-DD format.", field=parameter_name,
        )


def validate_limit(
    limit: int, minimum: int = MIN_PAGE_LIMIT, maximum: int = MAX_PAGE_LIMIT,
) -> None:
    """Page size must fall within [minimum, maximum]."""
    if isinstance(limit, bool) or not isinstance(limit, int) or not minimum <= limit <= maximum:
        raise InvalidArgumentError(
            f"Limit must be between {minimum} and {maximum}.", field="limit",
        )
