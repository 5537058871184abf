import logging

from fastapi import APIRouter, Body, Depends, HTTPException

from chronos.crud import workspaces as crud_workspaces
from chronos.schemas.constraints import Constraints
from chronos.schemas.timetables import GenerateRequest, TimetableLayout, Workspace
from chronos.services import ai_errors
from chronos.services.ai_service import get_llm
from chronos.services.layout_service import generate_timetable_layout
from chronos.services.timetable_service import generate_timetable
from chronos.utils.redis_client import get_redis

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/timetables", tags=["Timetables"])

AI_ERROR_STATUS = {
    ai_errors.INPUT_VALIDATION: 400,
    ai_errors.AUTH: 401,
    ai_errors.CAPACITY: 429,
    ai_errors.POLICY: 422,
    ai_errors.SERVER: 503,
    ai_errors.MALFORMED: 502,
    ai_errors.CONNECTIVITY: 503,
    ai_errors.UNKNOWN: 500,
}


def get_llm_factory():
    """Callable building the chat model; overridden in tests"""
    return get_llm


@router.post("/generate-layout", response_model=TimetableLayout)
def generate_layout(constraints: Constraints = Body(...)):
    """
        Split every working day into lecture and break slots (no subjects placed).
    """
    try:
        return generate_timetable_layout(constraints)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/generate", response_model=Workspace)
def generate_timetable_endpoint(
        request: GenerateRequest = Body(...),
        r=Depends(get_redis),
        llm_factory=Depends(get_llm_factory)
):
    """
        Generate a timetable (AI optimized or quick draft) and open it as a
        new workspace for editing.
    """
    try:
        data = generate_timetable(
            request.constraints,
            request.subjects,
            use_ai=request.use_ai,
            seed=request.seed,
            llm_factory=llm_factory
        )
        return crud_workspaces.create_workspace(r, request.constraints, request.subjects, data)
    except ai_errors.AIScheduleError as e:
        raise HTTPException(
            status_code=AI_ERROR_STATUS.get(e.kind, 500),
            detail={"kind": e.kind, "message": e.message}
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Timetable generation failed")
        raise HTTPException(
            status_code=500,
            detail=f"{type(e).__name__}: {str(e)}"
        )
