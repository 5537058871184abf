import pytest

from chronos.services import ai_errors
from chronos.services.ai_errors import AIScheduleError, classify_ai_error, to_ai_schedule_error


@pytest.mark.parametrize("message,kind", [
    ("Error code: 401 - Invalid API Key", ai_errors.AUTH),
    ("403 Forbidden", ai_errors.AUTH),
    ("GROQ_API_KEY is not set", ai_errors.AUTH),
    ("Error code: 429 - too many requests", ai_errors.CAPACITY),
    ("You exceeded your current quota", ai_errors.CAPACITY),
    ("Rate limit reached for model", ai_errors.CAPACITY),
    ("Response blocked: FINISH_REASON_SAFETY", ai_errors.POLICY),
    ("The model is overloaded", ai_errors.SERVER),
    ("Error code: 503 - Service Unavailable", ai_errors.SERVER),
    ("Internal Server Error", ai_errors.SERVER),
    ("Request timed out.", ai_errors.SERVER),
    ("AI generation failed to produce valid JSON.", ai_errors.MALFORMED),
    ("Could not parse response", ai_errors.MALFORMED),
    ("Network is unreachable", ai_errors.CONNECTIVITY),
    ("Failed to fetch", ai_errors.CONNECTIVITY),
    ("Connection error.", ai_errors.CONNECTIVITY),
])
def test_messages_map_to_their_bucket(message, kind):
    assert classify_ai_error(RuntimeError(message))[0] == kind


def test_matching_ignores_case():
    assert classify_ai_error(RuntimeError("RATE LIMIT"))[0] == ai_errors.CAPACITY


@pytest.mark.parametrize("message,kind", [
    ("401 after 429 retries", ai_errors.AUTH),
    ("429: quota hit while the server was overloaded (503)", ai_errors.CAPACITY),
    ("blocked by safety filter, 500", ai_errors.POLICY),
    ("503 while reading JSON", ai_errors.SERVER),
    ("json parse failed after a network hiccup", ai_errors.MALFORMED),
])
def test_first_bucket_in_priority_order_wins(message, kind):
    assert classify_ai_error(RuntimeError(message))[0] == kind


def test_unknown_failures_carry_the_raw_message():
    kind, message = classify_ai_error(RuntimeError("something odd happened"))

    assert kind == ai_errors.UNKNOWN
    assert message == "Scheduling Failure: something odd happened"


def test_unknown_failure_without_message_still_reads_well():
    kind, message = classify_ai_error(RuntimeError())

    assert kind == ai_errors.UNKNOWN
    assert message.startswith("Scheduling Failure: ")
    assert len(message) > len("Scheduling Failure: ")


def test_classified_messages_are_user_facing():
    _, message = classify_ai_error(RuntimeError("Error code: 429"))

    assert "wait 60 seconds" in message


def test_already_classified_errors_pass_through():
    classified = AIScheduleError(ai_errors.INPUT_VALIDATION, "add a subject")

    assert to_ai_schedule_error(classified) is classified
    converted = to_ai_schedule_error(RuntimeError("401"))
    assert (converted.kind, str(converted)) == (ai_errors.AUTH, converted.message)
