from typing import Dict, List

from chronos.schemas.constraints import Constraints, DayTiming, TimetableBreak

DEFAULT_TIMING = {"start": "08:00", "end": "17:00"}

ALL_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Undefined"]

WORKING_DAY_PRESETS: Dict[str, List[str]] = {
    "M-F": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"],
    "M-S": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"],
    "MWF": ["Monday", "Wednesday", "Friday"],
    "W-F": ["Wednesday", "Thursday", "Friday"],
}

THEORY_ROOMS = ["618", "619", "620", "LH-101", "LH-102"]
LAB_ROOMS = ["Lab 12", "Lab 13", "Lab 12-13", "Lab 8", "Lab 9", "Lab 10", "Hardware Lab"]

STANDARD_WEEK_RULES = """Standard Weekly Schedule:
1. 08:00 - 09:00: Lecture
2. 09:00 - 10:00: Lecture
3. 10:00 - 10:15: Short Break
4. 10:15 - 11:15: Lecture
5. 11:15 - 12:15: Lecture
6. 12:15 - 12:45: Lunch Break
7. 12:45 - 01:45: Lecture
8. 01:45 - 02:45: Lecture"""


class ConstraintService:
    @staticmethod
    def default_constraints() -> Constraints:
        """Settings a new timetable starts from"""
        days = WORKING_DAY_PRESETS["M-F"]
        return Constraints(
            college_name="Chronos Tech Institute",
            department="Computer Science",
            working_days=list(days),
            day_timings={day: DayTiming(start="08:00", end="14:45") for day in days},
            breaks=[
                TimetableBreak(id="1", label="Short Break", duration=15, after_lecture=2),
                TimetableBreak(id="2", label="Lunch Break", duration=30, after_lecture=4),
            ],
            custom_rules=STANDARD_WEEK_RULES
        )

    @staticmethod
    def apply_preset(constraints: Constraints, preset: str) -> Constraints:
        """Replace the working days with a preset; new days get 08:00-17:00"""
        if preset not in WORKING_DAY_PRESETS:
            raise ValueError(f"Unknown working day preset '{preset}'")

        days = list(WORKING_DAY_PRESETS[preset])
        timings = dict(constraints.day_timings)
        for day in days:
            timings.setdefault(day, DayTiming(**DEFAULT_TIMING))

        return constraints.model_copy(update={"working_days": days, "day_timings": timings})

    @staticmethod
    def toggle_day(constraints: Constraints, day: str) -> Constraints:
        """Add or remove one working day, keeping the timings of removed days"""
        timings = dict(constraints.day_timings)
        if day in constraints.working_days:
            days = [d for d in constraints.working_days if d != day]
        else:
            days = constraints.working_days + [day]
            timings.setdefault(day, DayTiming(**DEFAULT_TIMING))

        return constraints.model_copy(update={"working_days": days, "day_timings": timings})

    @staticmethod
    def new_break(constraints: Constraints) -> TimetableBreak:
        last = max((b.after_lecture for b in constraints.breaks), default=0)
        return TimetableBreak(label="New Break", duration=15, after_lecture=last + 2)
