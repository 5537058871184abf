import uuid
from typing import List, Optional

from pydantic import Field, field_validator

from chronos.schemas.base import CamelModel
from chronos.schemas.constraints import Constraints
from chronos.schemas.subjects import LectureType, Subject
from chronos.utils.time_utils import parse_time


class TimeSlot(CamelModel):
    start: str
    end: str
    is_break: bool = False
    label: Optional[str] = None


class TimetableEntry(CamelModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    time_start: str
    time_end: str
    subject_name: str
    teacher: str = ""
    room: str = ""
    type: LectureType = LectureType.THEORY
    batches: List[str] = Field(default_factory=list)
    is_break: bool = False
    break_label: Optional[str] = None

    @field_validator("time_start", "time_end")
    @classmethod
    def check_time(cls, value: str) -> str:
        parse_time(value)
        return value


class DaySchedule(CamelModel):
    day: str
    entries: List[TimetableEntry] = Field(default_factory=list)


class TimetableData(CamelModel):
    days: List[DaySchedule] = Field(default_factory=list)


class SavedTimetable(CamelModel):
    id: str
    data: TimetableData
    constraints: Constraints
    subjects: List[Subject]
    timestamp: int


class SavedTimetableSummary(CamelModel):
    id: str
    college_name: str
    department: str
    subject_count: int
    timestamp: int


class Workspace(CamelModel):
    id: str
    constraints: Constraints
    subjects: List[Subject] = Field(default_factory=list)
    data: TimetableData
    updated_at: int


class DayLayout(CamelModel):
    day: str
    start: str
    end: str
    time_slots: List[TimeSlot]


class TimetableLayout(CamelModel):
    days: List[DayLayout]


class GenerateRequest(CamelModel):
    constraints: Constraints
    subjects: List[Subject] = Field(default_factory=list)
    use_ai: bool = True
    seed: Optional[int] = None
