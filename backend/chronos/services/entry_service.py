import logging
from typing import Optional

from chronos.schemas.timetables import DaySchedule, TimetableData, TimetableEntry

logger = logging.getLogger(__name__)


def find_day(data: TimetableData, day: str) -> Optional[DaySchedule]:
    return next((d for d in data.days if d.day == day), None)


def find_entry(data: TimetableData, day: str, entry_id: str) -> Optional[TimetableEntry]:
    schedule = find_day(data, day)
    if schedule is None:
        return None
    return next((e for e in schedule.entries if e.id == entry_id), None)


def _sort_entries(schedule: DaySchedule):
    # "HH:MM" is fixed width, so string order is chronological
    schedule.entries.sort(key=lambda e: e.time_start)


def add_entry(data: TimetableData, day: str, entry: TimetableEntry) -> TimetableData:
    """
        Append an entry to one day and keep the day ordered by start time.
        Overlaps are allowed; entries sharing a time range are concurrent
        sessions (e.g. parallel batches).
    """
    if not entry.time_start or not entry.time_end or not entry.subject_name:
        raise ValueError("An entry needs a start time, an end time and a subject name")

    schedule = find_day(data, day)
    if schedule is None:
        logger.warning(f"Cannot add entry: '{day}' is not part of this timetable")
        return data

    schedule.entries.append(entry)
    _sort_entries(schedule)
    return data


def update_entry(data: TimetableData, day: str, entry: TimetableEntry) -> TimetableData:
    schedule = find_day(data, day)
    if schedule is None:
        logger.warning(f"Cannot update entry: '{day}' is not part of this timetable")
        return data

    schedule.entries = [entry if e.id == entry.id else e for e in schedule.entries]
    _sort_entries(schedule)
    return data


def delete_entry(data: TimetableData, day: str, entry_id: str) -> TimetableData:
    schedule = find_day(data, day)
    if schedule is None:
        logger.warning(f"Cannot delete entry: '{day}' is not part of this timetable")
        return data

    schedule.entries = [e for e in schedule.entries if e.id != entry_id]
    return data
