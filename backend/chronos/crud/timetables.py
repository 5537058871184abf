import logging
import time
import uuid
from typing import List, Optional

from pydantic import ValidationError

from chronos.schemas.constraints import Constraints
from chronos.schemas.subjects import Subject
from chronos.schemas.timetables import SavedTimetable, SavedTimetableSummary, TimetableData
from chronos.utils.redis_client import SAVED_TIMETABLES_KEY, get_json, store_json

logger = logging.getLogger(__name__)


def _write_all(r, timetables: List[SavedTimetable]):
    store_json(r, SAVED_TIMETABLES_KEY, [t.model_dump(mode="json", by_alias=True) for t in timetables])


def get_all_timetables(r) -> List[SavedTimetable]:
    """Saved timetables, newest first. Entries that no longer parse are skipped."""
    raw = get_json(r, SAVED_TIMETABLES_KEY, default=[])
    if not isinstance(raw, list):
        logger.error(f"Expected a list under '{SAVED_TIMETABLES_KEY}', got {type(raw).__name__}")
        return []

    timetables = []
    for item in raw:
        try:
            timetables.append(SavedTimetable.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping unreadable saved timetable: {e}")
    return timetables


def get_timetable_summaries(r) -> List[SavedTimetableSummary]:
    return [
        SavedTimetableSummary(
            id=t.id,
            college_name=t.constraints.college_name or "Untitled Institution",
            department=t.constraints.department or "General Department",
            subject_count=len(t.subjects),
            timestamp=t.timestamp
        )
        for t in get_all_timetables(r)
    ]


def get_timetable(r, timetable_id: str) -> Optional[SavedTimetable]:
    return next((t for t in get_all_timetables(r) if t.id == timetable_id), None)


def save_timetable(
        r,
        data: TimetableData,
        constraints: Constraints,
        subjects: List[Subject]
) -> SavedTimetable:
    """Snapshot a timetable at the front of the archive."""
    saved = SavedTimetable(
        id=str(uuid.uuid4()),
        data=data.model_copy(deep=True),
        constraints=constraints.model_copy(deep=True),
        subjects=[s.model_copy(deep=True) for s in subjects],
        timestamp=int(time.time() * 1000)
    )
    _write_all(r, [saved] + get_all_timetables(r))
    logger.info(f"Saved timetable {saved.id} for '{constraints.college_name}'")
    return saved


def delete_timetable(r, timetable_id: str) -> bool:
    existing = get_all_timetables(r)
    remaining = [t for t in existing if t.id != timetable_id]
    if len(remaining) == len(existing):
        return False
    _write_all(r, remaining)
    return True
