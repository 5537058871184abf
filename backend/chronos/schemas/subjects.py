import uuid
from enum import Enum
from typing import List, Literal, Optional

from pydantic import Field

from chronos.schemas.base import CamelModel


class LectureType(str, Enum):
    THEORY = "Theory"
    PRACTICAL = "Practical"


Batch = Literal["X", "Y", "P", "Q", "A", "B"]

AVAILABLE_BATCHES: List[str] = ["X", "Y", "P", "Q", "A", "B"]


class Subject(CamelModel):
    """
        One course session to be placed on the timetable.
        An empty batches list means the whole class attends.
        A subject bound to a day is only drafted on that day.
    """
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    teacher: str
    type: LectureType = LectureType.THEORY
    batches: List[Batch] = Field(default_factory=list)
    weekly_hours: int = 4
    assigned_room: Optional[str] = None
    day: Optional[str] = None
