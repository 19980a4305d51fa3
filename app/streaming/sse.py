"""Server-Sent-Events framing of the record stream.

Every event is one ``data: <json>`` line followed by a blank line. Three
envelope types exist::

    {"type": "content", "content": "...", "framing": "snapshot", "done": false}
    {"type": "complete", "records": [...], "done": true}
    {"type": "error", "error": "...", "stage": "parse", "done": true}

``framing`` says whether ``content`` is the full text accumulated so far
(``snapshot``) or only the new increment (``delta``). Envelopes without the
field are snapshots. An error's ``stage`` is ``parse`` when the stream
completed but its output is not valid JSON, and ``transport`` (the default)
when the upstream call itself failed.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from app.logging.logger import Log

DATA_PREFIX = "data: "
EVENT_SEPARATOR = "\n\n"


class Framing(str, Enum):
    SNAPSHOT = "snapshot"
    DELTA = "delta"


@dataclass(frozen=True)
class ContentEnvelope:
    content: str
    framing: Framing = Framing.SNAPSHOT

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "content",
            "content": self.content,
            "framing": self.framing.value,
            "done": False,
        }


@dataclass(frozen=True)
class CompleteEnvelope:
    records: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"type": "complete", "records": self.records, "done": True}


class ErrorStage(str, Enum):
    PARSE = "parse"
    TRANSPORT = "transport"


@dataclass(frozen=True)
class ErrorEnvelope:
    error: str
    stage: ErrorStage = ErrorStage.TRANSPORT

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "error",
            "error": self.error,
            "stage": self.stage.value,
            "done": True,
        }


StreamEnvelope = ContentEnvelope | CompleteEnvelope | ErrorEnvelope


def encode_event(envelope: StreamEnvelope) -> str:
    return f"{DATA_PREFIX}{json.dumps(envelope.to_dict(), ensure_ascii=False)}{EVENT_SEPARATOR}"


def decode_envelope(data: dict[str, Any]) -> StreamEnvelope:
    """Build an envelope from a decoded event payload.

    Raises:
        ValueError: if the payload type is unknown or malformed.
    """
    kind = data.get("type")
    if kind == "content":
        content = data.get("content")
        if not isinstance(content, str):
            raise ValueError("'content' must be a string")
        return ContentEnvelope(
            content=content,
            framing=Framing(data.get("framing", Framing.SNAPSHOT.value)),
        )
    if kind == "complete":
        records = data.get("records") or []
        if not isinstance(records, list):
            raise ValueError("'records' must be a list")
        return CompleteEnvelope(records=records)
    if kind == "error":
        return ErrorEnvelope(
            error=str(data.get("error") or "Streaming error"),
            stage=ErrorStage(data.get("stage", ErrorStage.TRANSPORT.value)),
        )
    raise ValueError(f"Unknown envelope type {kind!r}")


class SseDecoder:
    """Splits a text stream into envelopes, buffering incomplete events."""

    def __init__(self) -> None:
        self._pending = ""

    def feed(self, text: str) -> list[StreamEnvelope]:
        self._pending += text
        events = self._pending.split(EVENT_SEPARATOR)
        self._pending = events.pop()
        return self._decode_all(events)

    def close(self) -> list[StreamEnvelope]:
        """Decode whatever is left once the byte stream has ended."""
        tail, self._pending = self._pending, ""
        return self._decode_all([tail])

    def _decode_all(self, events: list[str]) -> list[StreamEnvelope]:
        envelopes: list[StreamEnvelope] = []
        for event in events:
            envelope = self._decode_event(event)
            if envelope is not None:
                envelopes.append(envelope)
        return envelopes

    @staticmethod
    def _decode_event(event: str) -> StreamEnvelope | None:
        line = event.strip("\r\n")
        if not line.startswith(DATA_PREFIX):
            return None
        try:
            return decode_envelope(json.loads(line[len(DATA_PREFIX):]))
        except (ValueError, AttributeError) as exc:
            Log.warning(f"Skipping malformed stream event: {exc}")
            return None
