import fakeredis
import pytest
from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from chronos.main import app
from chronos.routers import timetables as timetables_router
from chronos.schemas.constraints import Constraints, DayTiming, TimetableBreak
from chronos.utils.redis_client import get_redis

AI_REPLY = """```json
{
  "days": [
    {
      "day": "Monday",
      "entries": [
        {"timeStart": "09:00", "timeEnd": "10:00", "subjectName": "Compilers", "teacher": "Dr. Rao",
         "room": "LH-102", "type": "Theory", "batches": [], "isBreak": false},
        {"timeStart": "08:00", "timeEnd": "09:00", "subjectName": "Networks", "teacher": "Dr. Iyer",
         "room": "619", "type": "Theory", "batches": [], "isBreak": false}
      ]
    }
  ]
}
```"""


@pytest.fixture
def r():
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture
def short_week():
    return Constraints(
        college_name="Chronos Tech Institute",
        department="Computer Science",
        working_days=["Monday", "Tuesday"],
        day_timings={
            "Monday": DayTiming(start="08:00", end="14:45"),
            "Tuesday": DayTiming(start="08:00", end="14:45"),
        },
        breaks=[
            TimetableBreak(id="1", label="Short Break", duration=15, after_lecture=2),
            TimetableBreak(id="2", label="Lunch Break", duration=30, after_lecture=4),
        ],
    )


@pytest.fixture
def ai_reply():
    return AI_REPLY


@pytest.fixture
def llm_state():
    """Controls what the chat model used by the API does."""
    return {"replies": [AI_REPLY], "error": None}


@pytest.fixture
def client(r, llm_state):
    def factory():
        if llm_state["error"] is not None:
            raise llm_state["error"]
        return FakeListChatModel(responses=llm_state["replies"])

    app.dependency_overrides[get_redis] = lambda: r
    app.dependency_overrides[timetables_router.get_llm_factory] = lambda: factory
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
