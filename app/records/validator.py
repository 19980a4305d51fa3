"""Validates the model's final JSON payload and builds the record list."""

import json
from typing import Any

from app.records.exceptions import RecordValidationError

_RECORDS_KEY = "records"


def strip_code_fences(raw: str) -> str:
    """Remove a surrounding Markdown code fence the model may add."""
    cleaned = raw.strip()
    if not cleaned.startswith("```"):
        return cleaned
    # Only the fence lines are cut; the text between them is kept verbatim.
    _, newline, body = cleaned.partition("\n")
    if not newline:
        return ""
    head, newline, last = body.rpartition("\n")
    if newline and last.strip() == "```":
        return head
    if body.strip() == "```":
        return ""
    return body


def parse_final_payload(raw: str) -> list[dict[str, Any]]:
    """Strict-parse the complete model output into a record list.

    Raises:
        RecordValidationError: if the text is not valid JSON or does not
            hold a list of record objects.
    """
    try:
        parsed = json.loads(strip_code_fences(raw))
    except json.JSONDecodeError as exc:
        raise RecordValidationError(f"Invalid JSON response: {exc}") from exc
    return validate_records(parsed)


def validate_records(data: Any) -> list[dict[str, Any]]:
    """Validate parsed JSON and return its records.

    A missing or null ``records`` key yields an empty list.

    Raises:
        RecordValidationError: on any structural failure.
    """
    if not isinstance(data, dict):
        raise RecordValidationError("JSON response must be an object")
    raw = data.get(_RECORDS_KEY)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise RecordValidationError("'records' must be a list")
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise RecordValidationError(f"Record at index {i} must be an object")
    return raw
