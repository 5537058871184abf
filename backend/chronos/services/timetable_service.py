from __future__ import annotations

import logging
import random
from typing import Callable, Dict, List, Optional

from chronos import config
from chronos.schemas.constraints import Constraints, DayTiming, TimetableBreak
from chronos.schemas.subjects import LectureType, Subject
from chronos.schemas.timetables import DaySchedule, TimeSlot, TimetableData, TimetableEntry
from chronos.services import ai_service
from chronos.services.ai_errors import INPUT_VALIDATION, NO_SUBJECTS_MESSAGE, AIScheduleError, to_ai_schedule_error
from chronos.services.layout_service import calculate_time_slots, resolve_day_window
from chronos.utils.time_utils import duration_minutes

logger = logging.getLogger(__name__)

PRACTICAL_MIN_MINUTES = 120
DEFAULT_THEORY_ROOM = "LH-101"
DEFAULT_PRACTICAL_ROOM = "Lab-A"
BREAK_PLACEHOLDER = "-"

# Used when no subjects were entered, so a quick draft is never blank
PLACEHOLDER_SUBJECTS = [
    Subject(id="placeholder-1", name="Advanced Algorithms", teacher="Dr. Smith", type=LectureType.THEORY),
    Subject(id="placeholder-2", name="Database Systems", teacher="Prof. Johnson", type=LectureType.PRACTICAL),
    Subject(id="placeholder-3", name="System Design", teacher="Dr. Brown", type=LectureType.THEORY),
    Subject(id="placeholder-4", name="Cloud Computing", teacher="Prof. Davis", type=LectureType.PRACTICAL),
]


def _subjects_for_day(day: str, subjects: List[Subject]) -> List[Subject]:
    eligible = [s for s in subjects if s.day is None or s.day == day]
    return eligible or PLACEHOLDER_SUBJECTS


def _break_entry(slot: TimeSlot) -> TimetableEntry:
    return TimetableEntry(
        time_start=slot.start,
        time_end=slot.end,
        subject_name=slot.label or "Break",
        teacher=BREAK_PLACEHOLDER,
        room=BREAK_PLACEHOLDER,
        type=LectureType.THEORY,
        batches=[],
        is_break=True,
        break_label=slot.label
    )


def _lecture_entry(slot: TimeSlot, subject: Subject) -> TimetableEntry:
    if duration_minutes(slot.start, slot.end) >= PRACTICAL_MIN_MINUTES:
        lecture_type = LectureType.PRACTICAL
    else:
        lecture_type = subject.type

    room = subject.assigned_room or (
        DEFAULT_PRACTICAL_ROOM if lecture_type == LectureType.PRACTICAL else DEFAULT_THEORY_ROOM
    )

    return TimetableEntry(
        time_start=slot.start,
        time_end=slot.end,
        subject_name=subject.name,
        teacher=subject.teacher,
        room=room,
        type=lecture_type,
        batches=list(subject.batches),
        is_break=False
    )


def fill_day(day: str, slots: List[TimeSlot], subjects: List[Subject], start_index: int) -> DaySchedule:
    """
        Walk the slots of one day, handing lecture slots to subjects in
        round-robin order starting at start_index. Break slots do not
        advance the rotation.
    """
    entries = []
    subject_idx = start_index

    for slot in slots:
        if slot.is_break:
            entries.append(_break_entry(slot))
            continue

        entries.append(_lecture_entry(slot, subjects[subject_idx % len(subjects)]))
        subject_idx += 1

    return DaySchedule(day=day, entries=entries)


def generate_draft_schedule(
        working_days: List[str],
        subjects: List[Subject],
        global_start: str,
        global_end: str,
        breaks: List[TimetableBreak],
        day_timings: Optional[Dict[str, DayTiming]] = None,
        seed: Optional[int] = None
) -> TimetableData:
    """
        Quick draft: fill every working day's slots with subjects in rotation.

        No clash detection and no weekly-hour accounting is attempted. The
        rotation of each day starts at a random subject; pass seed to make
        the result reproducible.
    """
    rng = random.Random(seed)

    days = []
    for day in working_days:
        window = resolve_day_window(day, day_timings, global_start, global_end)
        slots = calculate_time_slots(window.start, window.end, breaks)
        day_subjects = _subjects_for_day(day, subjects)
        start_index = rng.randrange(len(day_subjects))

        logger.debug(f"Drafting {day} {window.start}-{window.end}: {len(slots)} slots, rotation starts at {start_index}")
        days.append(fill_day(day, slots, day_subjects, start_index))

    return TimetableData(days=days)


def generate_timetable(
        constraints: Constraints,
        subjects: List[Subject],
        use_ai: bool = True,
        seed: Optional[int] = None,
        llm_factory: Callable = ai_service.get_llm
) -> TimetableData:
    """
        Produce a timetable through the AI service or the quick draft.

        Raises:
            AIScheduleError: the AI path was requested without subjects, or
                the remote call failed (classified by its message)
    """
    if not use_ai:
        result = generate_draft_schedule(
            constraints.working_days,
            subjects,
            config.DEFAULT_DAY_START,
            config.DEFAULT_DAY_END,
            constraints.breaks,
            constraints.day_timings,
            seed=seed
        )
        logger.info(f"Quick draft generated for {len(result.days)} day(s)")
        return result

    if not subjects:
        raise AIScheduleError(INPUT_VALIDATION, NO_SUBJECTS_MESSAGE)

    try:
        return ai_service.request_schedule(constraints, subjects, llm=llm_factory())
    except Exception as e:
        error = to_ai_schedule_error(e)
        logger.error(f"Timetable generation error ({error.kind}): {str(e)}")
        raise error from e
