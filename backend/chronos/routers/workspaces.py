from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.responses import Response

from chronos.crud import timetables as crud_timetables
from chronos.crud import workspaces as crud_workspaces
from chronos.schemas.timetables import SavedTimetable, TimetableEntry, Workspace
from chronos.services import entry_service
from chronos.services.export_service import export_filename, render_timetable_png
from chronos.utils.redis_client import get_redis

router = APIRouter(prefix="/workspaces", tags=["Workspaces"])


def _load_workspace(r, workspace_id: str) -> Workspace:
    workspace = crud_workspaces.get_workspace(r, workspace_id)
    if not workspace:
        raise HTTPException(status_code=404, detail="Workspace not found")
    return workspace


def _check_day(workspace: Workspace, day: str):
    if entry_service.find_day(workspace.data, day) is None:
        raise HTTPException(status_code=404, detail=f"Day '{day}' is not part of this timetable")


def _check_entry(workspace: Workspace, day: str, entry_id: str):
    _check_day(workspace, day)
    if entry_service.find_entry(workspace.data, day, entry_id) is None:
        raise HTTPException(status_code=404, detail="Entry not found")


@router.get("/{workspace_id}", response_model=Workspace)
def get_workspace(workspace_id: str, r=Depends(get_redis)):
    return _load_workspace(r, workspace_id)


@router.delete("/{workspace_id}", response_model=dict)
def discard_workspace(workspace_id: str, r=Depends(get_redis)):
    if not crud_workspaces.delete_workspace(r, workspace_id):
        raise HTTPException(status_code=404, detail="Workspace not found")
    return {"message": "Workspace discarded"}


@router.post("/{workspace_id}/days/{day}/entries", response_model=Workspace)
def add_entry(workspace_id: str, day: str, entry: TimetableEntry = Body(...), r=Depends(get_redis)):
    """
        Add a session (or break) to one day. Entries may overlap.
    """
    workspace = _load_workspace(r, workspace_id)
    _check_day(workspace, day)
    try:
        entry_service.add_entry(workspace.data, day, entry)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return crud_workspaces.save_workspace(r, workspace)


@router.put("/{workspace_id}/days/{day}/entries/{entry_id}", response_model=Workspace)
def update_entry(workspace_id: str, day: str, entry_id: str, entry: TimetableEntry = Body(...), r=Depends(get_redis)):
    workspace = _load_workspace(r, workspace_id)
    _check_entry(workspace, day, entry_id)
    entry_service.update_entry(workspace.data, day, entry.model_copy(update={"id": entry_id}))
    return crud_workspaces.save_workspace(r, workspace)


@router.delete("/{workspace_id}/days/{day}/entries/{entry_id}", response_model=Workspace)
def delete_entry(workspace_id: str, day: str, entry_id: str, r=Depends(get_redis)):
    workspace = _load_workspace(r, workspace_id)
    _check_entry(workspace, day, entry_id)
    entry_service.delete_entry(workspace.data, day, entry_id)
    return crud_workspaces.save_workspace(r, workspace)


@router.post("/{workspace_id}/save", response_model=SavedTimetable)
def save_workspace(workspace_id: str, r=Depends(get_redis)):
    """
        Archive a snapshot of the workspace. Later edits do not change it.
    """
    workspace = _load_workspace(r, workspace_id)
    return crud_timetables.save_timetable(r, workspace.data, workspace.constraints, workspace.subjects)


@router.get("/{workspace_id}/export")
def export_workspace(workspace_id: str, show_room: bool = Query(True), r=Depends(get_redis)):
    """
        Download the timetable as a PNG image.
    """
    workspace = _load_workspace(r, workspace_id)
    image = render_timetable_png(workspace.data, title=workspace.constraints.college_name, show_room=show_room)
    filename = export_filename(workspace.constraints.college_name)
    return Response(
        content=image,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
