"""One streaming parse operation: buffer, extractor and render sink."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from app.logging.logger import Log
from app.streaming.exceptions import StreamClosedError
from app.streaming.extractor import ExtractionResult, RecordExtractor
from app.streaming.sink import RenderSink


@dataclass(frozen=True)
class FinalPayload:
    """Terminal payload: the strict-parsed records, or why parsing failed."""

    records: list[dict[str, Any]] | None = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.records is not None


class SessionState(str, Enum):
    STREAMING = "streaming"
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"
    FAILED = "failed"
    CANCELLED = "cancelled"


class StreamSession:
    """Feeds transport events through the extractor into a render sink.

    Fragments are either deltas (``on_chunk``, appended to the buffer) or
    snapshots (``on_snapshot``, the full text so far, replacing the buffer).
    Each fragment triggers one extraction of the whole buffer; the resulting
    list replaces whatever the sink showed before.
    """

    def __init__(self, sink: RenderSink, extractor: RecordExtractor | None = None) -> None:
        self._sink = sink
        self._extractor = extractor or RecordExtractor()
        self._buffer = ""
        self._state = SessionState.STREAMING
        self._last_result = ExtractionResult.empty()
        self._fragments = 0

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def last_result(self) -> ExtractionResult:
        return self._last_result

    def on_chunk(self, fragment: str) -> ExtractionResult:
        self._ensure_open()
        self._buffer += fragment
        return self._refresh()

    def on_snapshot(self, content: str) -> ExtractionResult:
        self._ensure_open()
        if not content.startswith(self._buffer):
            Log.warning(
                f"Snapshot of {len(content)} chars does not extend the "
                f"{len(self._buffer)} char buffer; replacing it"
            )
        self._buffer = content
        return self._refresh()

    def on_complete(self, payload: FinalPayload) -> None:
        self._ensure_open()
        if payload.ok:
            records = payload.records or []
            self._sink.update(records)
            self._sink.mark_final()
            self._state = SessionState.COMPLETE
            Log.info(f"Stream complete: {len(records)} records")
            return
        reason = payload.error or "Failed to parse JSON"
        self._sink.mark_incomplete(reason)
        self._state = SessionState.INCOMPLETE
        Log.warning(
            f"Extraction incomplete ({reason}); keeping "
            f"{len(self._last_result.records)} approximated records"
        )

    def on_error(self, message: str) -> None:
        self._ensure_open()
        self._sink.mark_failed(message)
        self._state = SessionState.FAILED
        Log.error(f"Stream failed after {self._fragments} fragments: {message}")

    def cancel(self) -> None:
        """Stop consuming and release the buffer."""
        if self._state != SessionState.STREAMING:
            return
        self._state = SessionState.CANCELLED
        self._buffer = ""
        self._extractor.reset()

    def _refresh(self) -> ExtractionResult:
        self._fragments += 1
        result = self._extractor.extract(self._buffer)
        self._last_result = result
        if not result.is_empty:
            self._sink.update(result.records)
            Log.debug(
                f"Fragment {self._fragments}: {len(result.records)} records, "
                f"{len(self._buffer)} chars"
            )
        return result

    def _ensure_open(self) -> None:
        if self._state != SessionState.STREAMING:
            raise StreamClosedError(f"Stream is already {self._state.value}")
