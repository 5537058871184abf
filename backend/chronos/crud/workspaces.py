import logging
import time
import uuid
from typing import List, Optional

from pydantic import ValidationError

from chronos import config
from chronos.schemas.constraints import Constraints
from chronos.schemas.subjects import Subject
from chronos.schemas.timetables import TimetableData, Workspace
from chronos.utils.redis_client import get_json, store_json, workspace_key

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def create_workspace(r, constraints: Constraints, subjects: List[Subject], data: TimetableData) -> Workspace:
    workspace = Workspace(
        id=str(uuid.uuid4()),
        constraints=constraints,
        subjects=subjects,
        data=data,
        updated_at=_now_ms()
    )
    save_workspace(r, workspace)
    return workspace


def get_workspace(r, workspace_id: str) -> Optional[Workspace]:
    raw = get_json(r, workspace_key(workspace_id))
    if raw is None:
        return None
    try:
        return Workspace.model_validate(raw)
    except ValidationError as e:
        logger.error(f"Stored workspace {workspace_id} is unreadable: {e}")
        return None


def save_workspace(r, workspace: Workspace) -> Workspace:
    workspace.updated_at = _now_ms()
    store_json(r, workspace_key(workspace.id), workspace.model_dump(mode="json", by_alias=True),
               ttl=config.WORKSPACE_TTL_SECONDS)
    return workspace


def delete_workspace(r, workspace_id: str) -> bool:
    return bool(r.delete(workspace_key(workspace_id)))
