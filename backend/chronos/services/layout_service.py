import logging
from typing import Dict, List, Optional

from chronos import config
from chronos.schemas.constraints import Constraints, DayTiming, TimetableBreak
from chronos.schemas.timetables import DayLayout, TimeSlot, TimetableLayout
from chronos.utils.time_utils import format_time, parse_time

logger = logging.getLogger(__name__)

LECTURE_MINUTES = 60


def calculate_time_slots(
        start_time_str: str,
        end_time_str: str,
        breaks: List[TimetableBreak]
) -> List[TimeSlot]:
    """
        Partition one day into consecutive lecture and break slots.

        Lectures are fixed 60 minute blocks; the last one is shortened to fit
        the day. A break is placed right after the lecture whose running count
        equals its after_lecture value, and is dropped when it would run past
        the end of the day.

        Args:
            start_time_str: Start of the day (format "HH:MM")
            end_time_str: End of the day (format "HH:MM")
            breaks: Break rules, in any order

        Returns:
            Ordered, gapless list of slots starting at start_time_str
    """
    start_time = parse_time(start_time_str)
    end_time = parse_time(end_time_str)

    # sorted() is stable: breaks sharing an after_lecture keep their input order
    sorted_breaks = sorted(breaks, key=lambda b: b.after_lecture)

    time_slots: List[TimeSlot] = []
    current_time = start_time
    lecture_count = 0

    while current_time < end_time:
        block = min(LECTURE_MINUTES, end_time - current_time)
        if block <= 0:
            break

        slot_start = current_time
        current_time += block
        lecture_count += 1
        time_slots.append(TimeSlot(start=format_time(slot_start), end=format_time(current_time), is_break=False))

        for br in sorted_breaks:
            if br.after_lecture != lecture_count:
                continue
            if current_time + br.duration > end_time:
                logger.debug(f"Dropping '{br.label}' after lecture {lecture_count}: it would end past {end_time_str}")
                continue

            break_start = current_time
            current_time += br.duration
            time_slots.append(TimeSlot(
                start=format_time(break_start),
                end=format_time(current_time),
                is_break=True,
                label=br.label
            ))

    return time_slots


def resolve_day_window(
        day: str,
        day_timings: Optional[Dict[str, DayTiming]],
        global_start: str,
        global_end: str
) -> DayTiming:
    """Day-specific hours when configured, otherwise the global window"""
    timing = (day_timings or {}).get(day)
    if timing is not None:
        return timing
    return DayTiming(start=global_start, end=global_end)


def generate_timetable_layout(constraints: Constraints) -> TimetableLayout:
    """
        Empty layout of every working day, in the configured order, with the
        slots each day is split into.
    """
    days = []
    for day in constraints.working_days:
        window = resolve_day_window(day, constraints.day_timings, config.DEFAULT_DAY_START, config.DEFAULT_DAY_END)
        time_slots = calculate_time_slots(window.start, window.end, constraints.breaks)
        days.append(DayLayout(day=day, start=window.start, end=window.end, time_slots=time_slots))

    return TimetableLayout(days=days)
