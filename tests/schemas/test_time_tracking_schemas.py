"""Time Tracking Schemas — payload models and response parsing."""

from datetime import date

import pytest
from pydantic import ValidationError

from asana_time_tracking.schemas.time_tracking import (
    TaskCompact,
    TimeTrackingEntry,
    TimeTrackingEntryCreate,
    TimeTrackingEntryList,
    TimeTrackingEntryUpdate,
    UserCompact,
)


def test_create_requires_date_and_duration():
    with pytest.raises(ValidationError):
        TimeTrackingEntryCreate(duration_minutes=30)
    with pytest.raises(ValidationError):
        TimeTrackingEntryCreate(entered_on="2026-02-05")


def test_create_rejects_non_positive_duration():
    with pytest.raises(ValidationError):
        TimeTrackingEntryCreate(entered_on="2026-02-05", duration_minutes=0)


def test_create_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        TimeTrackingEntryCreate(entered_on="2026-02-05", duration_minutes=5, minutes=5)


def test_create_payload_includes_created_by_only_when_set():
    plain = TimeTrackingEntryCreate(entered_on=date(2026, 2, 5), duration_minutes=60)
    assert plain.to_payload() == {"entered_on": "2026-02-05", "duration_minutes": 60}

    attributed = TimeTrackingEntryCreate(
        entered_on="2026-02-05", duration_minutes=60, created_by="42",
    )
    assert attributed.to_payload()["created_by"] == "42"


def test_update_payload_is_partial():
    assert TimeTrackingEntryUpdate().to_payload() == {}
    assert TimeTrackingEntryUpdate(duration_minutes=90).to_payload() == {"duration_minutes": 90}


def test_entry_parses_full_record_and_keeps_extra_fields():
    entry = TimeTrackingEntry.model_validate({
        "gid": "5000",
        "resource_type": "time_tracking_entry",
        "duration_minutes": 12,
        "entered_on": "2026-02-05",
        "created_by": {"gid": "42", "resource_type": "user", "name": "Greg Sanchez"},
        "task": {"gid": "1001", "resource_type": "task", "name": "Draft proposal"},
        "created_at": "2026-02-05T10:00:00.000Z",
    })
    assert entry.entered_on == date(2026, 2, 5)
    assert entry.created_by.name == "Greg Sanchez"
    assert entry.task.gid == "1001"
    assert entry.model_extra["created_at"] == "2026-02-05T10:00:00.000Z"


def test_entry_parses_compact_record():
    entry = TimeTrackingEntry.model_validate({"gid": "5000", "duration_minutes": 12})
    assert entry.resource_type == "time_tracking_entry"
    assert entry.task is None


def test_entry_references_default_their_resource_types():
    entry = TimeTrackingEntry.model_validate({
        "gid": "5000",
        "created_by": {"gid": "42"},
        "task": {"gid": "1001", "name": "Draft proposal"},
    })
    assert isinstance(entry.created_by, UserCompact)
    assert entry.created_by.resource_type == "user"
    assert isinstance(entry.task, TaskCompact)
    assert entry.task.resource_type == "task"


def test_entry_list_with_and_without_next_page():
    last = TimeTrackingEntryList.model_validate({"data": [], "next_page": None})
    assert last.next_page is None

    page = TimeTrackingEntryList.model_validate({
        "data": [{"gid": "1"}],
        "next_page": {"offset": "eyJ0", "path": "/time_tracking_entries?offset=eyJ0"},
    })
    assert page.data[0].gid == "1"
    assert page.next_page.offset == "eyJ0"
