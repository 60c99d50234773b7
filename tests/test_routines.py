"""Tests for routine value types and completion helpers."""

from datetime import date, datetime, timedelta, timezone

import pytest

from cadence.core.routines import (
    Frequency,
    NotScheduledError,
    Routine,
    ScheduleItem,
    UnknownFrequencyError,
    toggle_completion,
    validate_frequency,
    was_completed_on,
    weekday_abbrev,
)

EASTERN = timezone(timedelta(hours=-5))


@pytest.fixture
def today():
    return date(2025, 1, 15)


@pytest.fixture
def api_record():
    return {
        "id": "abc-123",
        "userId": "u1",
        "title": "Morning run",
        "time": "07:00",
        "frequency": "3x Weekly",
        "category": "Health/Wellness",
        "completed": False,
        "streak": 4,
        "measureOfSuccess": "5km",
        "scheduledDays": ["Mon", "Wed", "Fri"],
        "lastCompleted": "2025-01-13T12:05:00.000Z",
        "completionHistory": ["2025-01-13"],
        "archived": False,
        "createdAt": "2025-01-02T15:30:00.000Z",
    }


class TestRoutineFromApi:
    def test_parses_fields(self, api_record):
        routine = Routine.from_api(api_record)
        assert routine.id == "abc-123"
        assert routine.frequency == "3x Weekly"
        assert routine.scheduled_days == ["Mon", "Wed", "Fri"]
        assert routine.measure_of_success == "5km"
        assert routine.created_at == date(2025, 1, 2)
        assert routine.last_completed == datetime(2025, 1, 13, 12, 5, tzinfo=timezone.utc)
        assert routine.completion_history == ["2025-01-13"]

    def test_nulls_become_defaults(self):
        routine = Routine.from_api(
            {
                "id": 7,
                "title": "Plan week",
                "frequency": "Weekly",
                "time": None,
                "scheduledDays": None,
                "category": None,
                "createdAt": None,
                "completionHistory": None,
            }
        )
        assert routine.id == "7"
        assert routine.time is None
        assert routine.scheduled_days == []
        assert routine.category == ""
        assert routine.created_at is None
        assert routine.completion_history == []

    def test_empty_time_is_anytime(self):
        routine = Routine.from_api({"id": "1", "title": "T", "frequency": "Daily", "time": ""})
        assert routine.time is None

    def test_numeric_time_becomes_string(self):
        routine = Routine.from_api({"id": "1", "title": "T", "frequency": "Daily", "time": 900})
        assert routine.time == "900"

    def test_plain_date_created_at(self):
        routine = Routine.from_api({"id": "1", "title": "T", "frequency": "Daily", "createdAt": "2024-12-30"})
        assert routine.created_at == date(2024, 12, 30)

    def test_missing_required_field(self):
        with pytest.raises(KeyError):
            Routine.from_api({"id": "1", "title": "No frequency"})

    def test_to_api_uses_camel_case(self, api_record):
        data = Routine.from_api(api_record).to_api()
        assert data["scheduledDays"] == ["Mon", "Wed", "Fri"]
        assert data["createdAt"] == "2025-01-02"
        assert data["measureOfSuccess"] == "5km"
        assert "scheduled_days" not in data

    def test_is_known_frequency(self):
        assert Routine(id="1", title="T", frequency="Bi-weekly").is_known_frequency is True
        assert Routine(id="1", title="T", frequency="Yearly").is_known_frequency is False


class TestScheduleItem:
    def test_from_api(self):
        item = ScheduleItem.from_api(
            {"id": "s1", "time": "08:00", "activity": "Standup", "type": "Work", "orderIndex": 2}
        )
        assert item.activity == "Standup"
        assert item.order_index == 2
        assert item.to_api()["orderIndex"] == 2


class TestValidateFrequency:
    def test_known(self):
        assert validate_frequency("3x Weekly") is Frequency.THREE_TIMES_WEEKLY

    def test_unknown_raises(self):
        with pytest.raises(UnknownFrequencyError, match="Yearly"):
            validate_frequency("Yearly")

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_frequency("weekly")


class TestWeekdayAbbrev:
    def test_week(self):
        start = date(2025, 1, 13)
        names = [weekday_abbrev(start + timedelta(days=i)) for i in range(7)]
        assert names == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


class TestWasCompletedOn:
    def test_plain_date_entry(self, today):
        routine = Routine(id="1", title="T", frequency="Daily", completion_history=["2025-01-15"])
        assert was_completed_on(routine, today) is True
        assert was_completed_on(routine, today - timedelta(days=1)) is False

    def test_timestamp_prefix(self, today):
        routine = Routine(id="1", title="T", frequency="Daily", completion_history=["2025-01-15T07:10:00.000Z"])
        assert was_completed_on(routine, today) is True

    def test_timestamp_converted_to_local_day(self, today):
        # 02:00 UTC on the 16th is 21:00 on the 15th in UTC-5
        routine = Routine(id="1", title="T", frequency="Daily", completion_history=["2025-01-16T02:00:00+00:00"])
        assert was_completed_on(routine, today, tz=EASTERN) is True
        assert was_completed_on(routine, today) is False

    def test_unparseable_entries_ignored(self, today):
        routine = Routine(id="1", title="T", frequency="Daily", completion_history=["garbageTentry", "yesterday"])
        assert was_completed_on(routine, today) is False

    def test_empty_history(self, today):
        assert was_completed_on(Routine(id="1", title="T", frequency="Daily"), today) is False


class TestToggleCompletion:
    @pytest.fixture
    def now(self, today):
        return datetime(2025, 1, 15, 8, 30)

    @pytest.fixture
    def routine(self):
        return Routine(
            id="1",
            title="Journal",
            frequency="Daily",
            streak=2,
            completion_history=["2025-01-14"],
        )

    def test_mark_done(self, routine, now):
        updated = toggle_completion(routine, True, now)
        assert updated.completed is True
        assert updated.streak == 3
        assert updated.last_completed == now
        assert updated.completion_history == ["2025-01-14", "2025-01-15"]

    def test_input_not_mutated(self, routine, now):
        toggle_completion(routine, True, now)
        assert routine.streak == 2
        assert routine.completion_history == ["2025-01-14"]

    def test_already_done_is_noop(self, routine, now):
        done = toggle_completion(routine, True, now)
        assert toggle_completion(done, True, now) is done

    def test_undo(self, routine, now):
        done = toggle_completion(routine, True, now)
        undone = toggle_completion(done, False, now)
        assert undone.completed is False
        assert undone.streak == 2
        assert undone.completion_history == ["2025-01-14"]
        assert undone.last_completed == now

    def test_undo_removes_timestamp_entries(self, now):
        routine = Routine(
            id="1",
            title="T",
            frequency="Daily",
            streak=0,
            completion_history=["2025-01-15T07:00:00", "2025-01-15"],
        )
        undone = toggle_completion(routine, False, now)
        assert undone.completion_history == []
        assert undone.streak == 0

    def test_not_scheduled_raises(self, now):
        routine = Routine(id="1", title="Review", frequency="Weekly", scheduled_days=["Mon"])
        with pytest.raises(NotScheduledError, match="Review"):
            toggle_completion(routine, True, now)
