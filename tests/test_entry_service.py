import pytest
from pydantic import ValidationError

from chronos.schemas.timetables import DaySchedule, TimetableData, TimetableEntry
from chronos.services.entry_service import add_entry, delete_entry, find_day, find_entry, update_entry


def _entry(start, end, name, **kwargs):
    return TimetableEntry(time_start=start, time_end=end, subject_name=name, **kwargs)


@pytest.fixture
def data():
    return TimetableData(days=[
        DaySchedule(day="Monday", entries=[
            _entry("08:00", "09:00", "Algebra", id="m1"),
            _entry("10:00", "11:00", "Biology", id="m2"),
        ]),
        DaySchedule(day="Tuesday", entries=[
            _entry("08:00", "09:00", "Chemistry", id="t1"),
        ]),
    ])


def _starts(data, day):
    return [e.time_start for e in find_day(data, day).entries]


def test_added_entry_lands_in_start_time_order(data):
    add_entry(data, "Monday", _entry("09:00", "10:00", "Drawing"))

    assert _starts(data, "Monday") == ["08:00", "09:00", "10:00"]


def test_entry_without_subject_name_is_rejected(data):
    with pytest.raises(ValueError):
        add_entry(data, "Monday", _entry("09:00", "10:00", ""))

    assert len(find_day(data, "Monday").entries) == 2


def test_concurrent_entries_are_allowed(data):
    add_entry(data, "Monday", _entry("08:00", "09:00", "Algebra Lab", batches=["X"]))

    monday = find_day(data, "Monday").entries
    assert [e.time_start for e in monday] == ["08:00", "08:00", "10:00"]
    # stable sort keeps the existing entry first
    assert [e.subject_name for e in monday[:2]] == ["Algebra", "Algebra Lab"]


def test_update_replaces_by_id_and_resorts(data):
    moved = find_day(data, "Monday").entries[0].model_copy(
        update={"time_start": "11:00", "time_end": "12:00", "room": "LH-204"}
    )

    update_entry(data, "Monday", moved)

    monday = find_day(data, "Monday").entries
    assert [e.id for e in monday] == ["m2", "m1"]
    assert [e for e in monday if e.id == "m1"] == [moved]


def test_update_with_unknown_id_changes_nothing(data):
    before = data.model_copy(deep=True)

    update_entry(data, "Monday", _entry("12:00", "13:00", "Ghost", id="nope"))

    assert data == before


def test_delete_removes_only_that_entry(data):
    tuesday_before = find_day(data, "Tuesday").model_copy(deep=True)

    delete_entry(data, "Monday", "m1")

    assert [e.id for e in find_day(data, "Monday").entries] == ["m2"]
    assert find_day(data, "Tuesday") == tuesday_before


@pytest.mark.parametrize("mutate", [
    lambda d: add_entry(d, "Sunday", _entry("08:00", "09:00", "Algebra")),
    lambda d: update_entry(d, "Sunday", _entry("08:00", "09:00", "Algebra", id="m1")),
    lambda d: delete_entry(d, "Sunday", "m1"),
])
def test_unknown_day_is_a_no_op(data, mutate):
    before = data.model_copy(deep=True)

    mutate(data)

    assert data == before


@pytest.mark.parametrize("start,end", [("9:30", "10:30"), ("09:30", "10:3"), ("24:00", "25:00")])
def test_entry_times_must_be_zero_padded(start, end):
    with pytest.raises(ValidationError):
        _entry(start, end, "Algebra")


def test_find_entry(data):
    assert find_entry(data, "Monday", "m2").subject_name == "Biology"
    assert find_entry(data, "Monday", "t1") is None
    assert find_entry(data, "Sunday", "m1") is None
