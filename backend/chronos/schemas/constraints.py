import uuid
from typing import Dict, List, Optional

from pydantic import Field, field_validator, model_validator

from chronos.schemas.base import CamelModel
from chronos.utils.time_utils import parse_time


class TimetableBreak(CamelModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    label: str = "Break"
    duration: int = Field(gt=0)
    after_lecture: int = Field(ge=0)


class DayTiming(CamelModel):
    start: str
    end: str

    @field_validator("start", "end")
    @classmethod
    def check_time(cls, value: str) -> str:
        parse_time(value)
        return value

    @model_validator(mode="after")
    def check_order(self):
        if parse_time(self.start) >= parse_time(self.end):
            raise ValueError("Start time must be before end time")
        return self


class Constraints(CamelModel):
    college_name: str = ""
    department: str = ""
    working_days: List[str] = Field(default_factory=list)
    day_timings: Dict[str, DayTiming] = Field(default_factory=dict)
    breaks: List[TimetableBreak] = Field(default_factory=list)
    custom_rules: Optional[str] = None
