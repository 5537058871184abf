from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException

from chronos.schemas.constraints import Constraints, TimetableBreak
from chronos.schemas.subjects import AVAILABLE_BATCHES
from chronos.services.constraint_service import (
    ALL_DAYS,
    LAB_ROOMS,
    THEORY_ROOMS,
    WORKING_DAY_PRESETS,
    ConstraintService
)

router = APIRouter(prefix="/constraints", tags=["Constraints"])


@router.get("/defaults", response_model=Constraints)
def get_default_constraints():
    return ConstraintService.default_constraints()


@router.get("/options", response_model=Dict[str, Any])
def get_form_options():
    """
        Choices offered when filling in constraints and subjects.
    """
    return {
        "days": ALL_DAYS,
        "presets": WORKING_DAY_PRESETS,
        "batches": AVAILABLE_BATCHES,
        "rooms": {"theory": THEORY_ROOMS, "practical": LAB_ROOMS},
    }


@router.post("/presets/{preset}", response_model=Constraints)
def apply_working_day_preset(preset: str, constraints: Constraints = Body(...)):
    try:
        return ConstraintService.apply_preset(constraints, preset)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/toggle-day/{day}", response_model=Constraints)
def toggle_working_day(day: str, constraints: Constraints = Body(...)):
    return ConstraintService.toggle_day(constraints, day)


@router.post("/breaks", response_model=TimetableBreak)
def create_break(constraints: Constraints = Body(...)):
    """
        Suggest the next break: 15 minutes, two lectures after the last one.
    """
    return ConstraintService.new_break(constraints)
