"""Tests for StreamConsumer (SSE wire -> StreamSession)."""

from app.streaming.consumer import STREAM_ENDED_EARLY, StreamConsumer
from app.streaming.session import SessionState, StreamSession
from app.streaming.sink import RecordTableSink, SinkStatus
from app.streaming.sse import (
    CompleteEnvelope,
    ContentEnvelope,
    ErrorEnvelope,
    ErrorStage,
    Framing,
    encode_event,
)

TEXT = '{"records":[{"id":"1","title":"Alpha"},{"id":"2","title":"Beta"}]}'


def _snapshots(text: str, size: int) -> list[ContentEnvelope]:
    return [ContentEnvelope(content=text[:end]) for end in range(size, len(text) + size, size)]


def _make_consumer() -> tuple[StreamConsumer, RecordTableSink]:
    sink = RecordTableSink()
    return StreamConsumer(StreamSession(sink)), sink


class TestConsumeEnvelopes:
    def test_snapshot_stream_then_complete(self) -> None:
        consumer, sink = _make_consumer()
        envelopes = [*_snapshots(TEXT, 7), CompleteEnvelope(records=[{"id": "final"}])]
        session = consumer.consume(envelopes)
        assert session.state == SessionState.COMPLETE
        assert sink.records == [{"id": "final"}]

    def test_delta_stream_reassembles_buffer(self) -> None:
        consumer, sink = _make_consumer()
        deltas = [
            ContentEnvelope(content=TEXT[i:i + 5], framing=Framing.DELTA)
            for i in range(0, len(TEXT), 5)
        ]
        session = consumer.consume(deltas)
        assert session.buffer == TEXT
        assert sink.records == [{"id": "1", "title": "Alpha"}, {"id": "2", "title": "Beta"}]
        assert session.state == SessionState.FAILED

    def test_parse_error_marks_incomplete(self) -> None:
        consumer, sink = _make_consumer()
        envelopes = [
            ContentEnvelope(content='{"records":[{"a":"1"},{"b":'),
            ErrorEnvelope(error="Failed to parse JSON", stage=ErrorStage.PARSE),
        ]
        consumer.consume(envelopes)
        assert sink.status == SinkStatus.INCOMPLETE
        assert sink.records == [{"a": "1"}]

    def test_transport_error_marks_failed(self) -> None:
        consumer, sink = _make_consumer()
        consumer.consume([ErrorEnvelope(error="AI provider network error")])
        assert sink.status == SinkStatus.FAILED
        assert sink.records == []

    def test_missing_terminal_event_is_transport_error(self) -> None:
        consumer, sink = _make_consumer()
        consumer.consume([ContentEnvelope(content='{"records":[{"a":"1"},')])
        assert sink.status == SinkStatus.FAILED
        assert sink.message == STREAM_ENDED_EARLY
        assert sink.records == [{"a": "1"}]

    def test_stops_after_terminal_event(self) -> None:
        consumer, sink = _make_consumer()
        consumer.consume([
            CompleteEnvelope(records=[{"a": "1"}]),
            ContentEnvelope(content="ignored"),
        ])
        assert sink.records == [{"a": "1"}]


class TestConsumeBytes:
    def test_events_split_at_arbitrary_byte_boundaries(self) -> None:
        body = "".join(
            encode_event(e) for e in [*_snapshots(TEXT, 11), CompleteEnvelope(records=[{"x": "y"}])]
        ).encode("utf-8")
        chunks = [body[i:i + 13] for i in range(0, len(body), 13)]
        consumer, sink = _make_consumer()
        session = consumer.consume_bytes(chunks)
        assert session.state == SessionState.COMPLETE
        assert sink.records == [{"x": "y"}]

    def test_multibyte_character_split_across_chunks(self) -> None:
        content = '{"records":[{"naslov":"Varaždin"}'
        body = encode_event(ContentEnvelope(content=content)).encode("utf-8")
        split = body.index("ž".encode("utf-8")) + 1
        consumer, sink = _make_consumer()
        consumer.consume_bytes([body[:split], body[split:]])
        assert sink.records == [{"naslov": "Varaždin"}]
        assert sink.status == SinkStatus.FAILED
