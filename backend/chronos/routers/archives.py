from typing import List

from fastapi import APIRouter, Depends, HTTPException

from chronos.crud import timetables as crud_timetables
from chronos.crud import workspaces as crud_workspaces
from chronos.schemas.timetables import SavedTimetable, SavedTimetableSummary, Workspace
from chronos.utils.redis_client import get_redis

router = APIRouter(prefix="/archives", tags=["Archives"])


@router.get("/", response_model=List[SavedTimetableSummary])
def list_archives(r=Depends(get_redis)):
    """
        List saved timetables, newest first.
    """
    return crud_timetables.get_timetable_summaries(r)


@router.get("/{timetable_id}", response_model=SavedTimetable)
def get_archive(timetable_id: str, r=Depends(get_redis)):
    timetable = crud_timetables.get_timetable(r, timetable_id)
    if not timetable:
        raise HTTPException(status_code=404, detail="Timetable not found")
    return timetable


@router.delete("/{timetable_id}", response_model=dict)
def delete_archive(timetable_id: str, r=Depends(get_redis)):
    if not crud_timetables.delete_timetable(r, timetable_id):
        raise HTTPException(status_code=404, detail="Timetable not found")
    return {"message": "Timetable deleted successfully"}


@router.post("/{timetable_id}/load", response_model=Workspace)
def load_archive(timetable_id: str, r=Depends(get_redis)):
    """
        Reopen a saved timetable (data, constraints and subjects) as a new workspace.
    """
    timetable = crud_timetables.get_timetable(r, timetable_id)
    if not timetable:
        raise HTTPException(status_code=404, detail="Timetable not found")
    return crud_workspaces.create_workspace(r, timetable.constraints, timetable.subjects, timetable.data)
