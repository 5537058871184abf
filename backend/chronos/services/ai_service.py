import json
import logging
import re
import uuid
from typing import Any, Dict, List, Optional

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_groq import ChatGroq
from pydantic import ValidationError

from chronos import config
from chronos.schemas.constraints import Constraints
from chronos.schemas.subjects import Subject
from chronos.schemas.timetables import TimetableData

logger = logging.getLogger(__name__)

FALLBACK_DAY_START = "08:00"
FALLBACK_DAY_END = "15:00"

SYSTEM_PROMPT = """You are a university timetable planner.
You answer with a single JSON object and nothing else, shaped as:
{
  "days": [
    {
      "day": "Monday",
      "entries": [
        {
          "timeStart": "HH:MM",
          "timeEnd": "HH:MM",
          "subjectName": "string",
          "teacher": "string",
          "room": "string",
          "type": "Theory" | "Practical",
          "batches": ["X", "Y", "P", "Q", "A", "B"],
          "isBreak": false,
          "breakLabel": "string"
        }
      ]
    }
  ]
}
timeStart, timeEnd, subjectName, room and isBreak are required on every entry.
Times are 24-hour and zero padded."""


def get_llm():
    """Chat model used for AI-optimized generation"""
    if not config.GROQ_API_KEY:
        raise ValueError("GROQ_API_KEY is not set")

    return ChatGroq(
        groq_api_key=config.GROQ_API_KEY,  # type: ignore
        model=config.GROQ_MODEL,
        temperature=config.AI_TEMPERATURE,
        timeout=config.AI_TIMEOUT_SECONDS,
        max_retries=0,
        model_kwargs={"response_format": {"type": "json_object"}},
    )


def build_schedule_prompt(constraints: Constraints, subjects: List[Subject]) -> str:
    break_lines = "\n".join(
        f"- {b.label}: {b.duration} mins after lecture {b.after_lecture}" for b in constraints.breaks
    ) or "- None"

    timing_lines = []
    for day in constraints.working_days:
        timing = constraints.day_timings.get(day)
        start = timing.start if timing else FALLBACK_DAY_START
        end = timing.end if timing else FALLBACK_DAY_END
        timing_lines.append(f"- {day}: {start} to {end}")

    inventory_blocks = []
    for day in constraints.working_days:
        day_subjects = [s for s in subjects if s.day == day]
        if not day_subjects:
            inventory_blocks.append(f"Day: {day} [Use Custom Logic]")
            continue
        lines = "\n".join(
            f"- {s.name} ({s.type.value}, {s.assigned_room or 'TBA'}, {''.join(s.batches) if s.batches else 'All'})"
            for s in day_subjects
        )
        inventory_blocks.append(f"Day: {day} INV:\n{lines}")

    return "\n".join([
        "Generate Weekly Timetable JSON.",
        f"Days: {', '.join(constraints.working_days)}.",
        f"College: {constraints.college_name}",
        "Hours:",
        "\n".join(timing_lines),
        "Breaks:",
        break_lines,
        "",
        "CUSTOM LOGIC (PRIORITY 1):",
        constraints.custom_rules or "None",
        "",
        "INVENTORY (PRIORITY 2):",
        "\n".join(inventory_blocks),
        "",
        "RULES:",
        "1. Exec Custom Logic exactly.",
        "2. Parallel batches = separate entries.",
        "3. Practical=2hr, Theory=1hr.",
        "4. Output strictly valid JSON.",
    ])


def extract_json_from_text(text: str) -> Optional[Dict[str, Any]]:
    """Decode the JSON object of a reply, with or without a markdown code fence."""
    candidates = []
    match = re.search(r"```(?:json)?(.*?)```", text, re.DOTALL)
    if match:
        candidates.append(match.group(1).strip())
    candidates.append(text.strip())

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data
    return None


def parse_schedule_response(content: Any) -> TimetableData:
    if not isinstance(content, str) or not content.strip():
        raise ValueError("AI generation returned an empty response instead of schedule JSON.")

    data = extract_json_from_text(content)
    if data is None:
        raise ValueError("AI generation failed to produce valid JSON.")

    try:
        result = TimetableData.model_validate(data)
    except ValidationError as e:
        logger.error(f"Schedule JSON did not match the expected shape: {e}")
        raise ValueError("AI generation produced JSON that does not parse into a timetable.") from e

    # entry ids are unique across the week
    seen = set()
    for schedule in result.days:
        for entry in schedule.entries:
            if entry.id in seen:
                entry.id = str(uuid.uuid4())
            seen.add(entry.id)
    return result


def request_schedule(constraints: Constraints, subjects: List[Subject], llm=None) -> TimetableData:
    """
        Ask the remote model for a full timetable.
        Blocks until the model answers; any failure propagates to the caller.
    """
    if llm is None:
        llm = get_llm()

    messages = [
        SystemMessage(content=SYSTEM_PROMPT),
        HumanMessage(content=build_schedule_prompt(constraints, subjects)),
    ]

    logger.info(f"Requesting AI timetable for {len(constraints.working_days)} day(s), {len(subjects)} subject(s)")
    response = llm.invoke(messages)
    result = parse_schedule_response(response.content)
    logger.info(f"AI timetable received with {sum(len(d.entries) for d in result.days)} entries")
    return result
