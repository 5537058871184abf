import json
import logging
from typing import Any, Optional

import redis

from chronos import config

logger = logging.getLogger(__name__)

redis_client = redis.Redis(
    host=config.REDIS_HOST,
    port=config.REDIS_PORT,
    password=config.REDIS_PASSWORD,
    db=config.REDIS_DB,
    decode_responses=True
)

SAVED_TIMETABLES_KEY = "saved_timetables"


def get_redis():
    """Return the Redis client instance"""
    return redis_client


def workspace_key(workspace_id: str) -> str:
    """Generate the Redis key of a working timetable"""
    return f"tt:workspace:{workspace_id}"


def store_json(r, key: str, data: Any, ttl: Optional[int] = None):
    """Store a JSON-serializable value, optionally expiring after ttl seconds"""
    r.set(key, json.dumps(data, ensure_ascii=False), ex=ttl)


def get_json(r, key: str, default: Any = None) -> Any:
    """Retrieve a JSON value; unreadable contents are logged and replaced by default"""
    raw = r.get(key)
    if not raw:
        return default
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON under '{key}': {str(e)}")
        return default
