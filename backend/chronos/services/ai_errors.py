from typing import List, Tuple

INPUT_VALIDATION = "input_validation"
AUTH = "auth"
CAPACITY = "capacity"
POLICY = "policy"
SERVER = "server"
MALFORMED = "malformed"
CONNECTIVITY = "connectivity"
UNKNOWN = "unknown"

# Checked top to bottom; the first bucket with a matching fragment wins.
ERROR_RULES: List[Tuple[str, Tuple[str, ...], str]] = [
    (
        AUTH,
        ("api_key", "401", "403"),
        "Authentication failed: Your API key is invalid or lacks permission. "
        "Please verify your environment settings."
    ),
    (
        CAPACITY,
        ("quota", "429", "rate limit"),
        "System capacity reached: Too many requests at once. Please wait 60 seconds and try again."
    ),
    (
        POLICY,
        ("safety", "finish_reason_safety", "blocked"),
        "Policy restriction: The content was flagged by AI safety filters. "
        "Ensure subject names and descriptions are professional."
    ),
    (
        SERVER,
        ("overloaded", "503", "server error", "500", "timed out", "timeout"),
        "AI engine busy: The model is currently overloaded. Retrying in a few moments often resolves this."
    ),
    (
        MALFORMED,
        ("json", "parse"),
        "Formatting error: The AI generated a malformed schedule. Retrying should fix the alignment."
    ),
    (
        CONNECTIVITY,
        ("network", "fetch", "internet", "connection"),
        "Connectivity issue: Please check your internet connection and try again."
    ),
]

NO_SUBJECTS_MESSAGE = "Data input error: Please add at least one subject to generate a curriculum."


class AIScheduleError(Exception):
    """A remote generation failure, already classified and worded for the user."""

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


def classify_ai_error(err: BaseException) -> Tuple[str, str]:
    raw = str(err) or ""
    lowered = raw.lower()

    for kind, fragments, message in ERROR_RULES:
        if any(fragment in lowered for fragment in fragments):
            return kind, message

    return UNKNOWN, f"Scheduling Failure: {raw or 'An unexpected error occurred within the AI engine.'}"


def to_ai_schedule_error(err: BaseException) -> AIScheduleError:
    if isinstance(err, AIScheduleError):
        return err
    kind, message = classify_ai_error(err)
    return AIScheduleError(kind, message)
