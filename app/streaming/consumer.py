import codecs
from collections.abc import Iterable

from app.logging.logger import Log
from app.streaming.session import FinalPayload, SessionState, StreamSession
from app.streaming.sse import (
    CompleteEnvelope,
    ContentEnvelope,
    ErrorEnvelope,
    ErrorStage,
    Framing,
    SseDecoder,
    StreamEnvelope,
)

STREAM_ENDED_EARLY = "Stream ended before completion"


class StreamConsumer:
    """Drives a StreamSession from an SSE byte stream or decoded envelopes."""

    def __init__(self, session: StreamSession) -> None:
        self._session = session
        self._decoder = SseDecoder()
        self._utf8 = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._messages = 0

    @property
    def session(self) -> StreamSession:
        return self._session

    def consume_bytes(self, chunks: Iterable[bytes]) -> StreamSession:
        """Consume a raw SSE response body until it ends."""
        for chunk in chunks:
            for envelope in self._decoder.feed(self._utf8.decode(chunk)):
                self.dispatch(envelope)
                if self._finished:
                    return self._session
        tail = self._utf8.decode(b"", final=True)
        for envelope in self._decoder.feed(tail) + self._decoder.close():
            self.dispatch(envelope)
            if self._finished:
                return self._session
        return self._end_of_stream()

    def consume(self, envelopes: Iterable[StreamEnvelope]) -> StreamSession:
        """Consume already decoded envelopes (in-process transport)."""
        for envelope in envelopes:
            self.dispatch(envelope)
            if self._finished:
                return self._session
        return self._end_of_stream()

    def dispatch(self, envelope: StreamEnvelope) -> None:
        self._messages += 1
        if isinstance(envelope, ContentEnvelope):
            if envelope.framing is Framing.DELTA:
                self._session.on_chunk(envelope.content)
            else:
                self._session.on_snapshot(envelope.content)
            if self._messages == 1:
                Log.debug(f"First message received, content length {len(envelope.content)}")
        elif isinstance(envelope, CompleteEnvelope):
            Log.info(f"Received complete data: {len(envelope.records)} records")
            self._session.on_complete(FinalPayload(records=envelope.records))
        elif isinstance(envelope, ErrorEnvelope):
            if envelope.stage is ErrorStage.PARSE:
                self._session.on_complete(FinalPayload(error=envelope.error))
            else:
                self._session.on_error(envelope.error)

    @property
    def _finished(self) -> bool:
        return self._session.state != SessionState.STREAMING

    def _end_of_stream(self) -> StreamSession:
        Log.info(f"Stream ended after {self._messages} messages")
        if not self._finished:
            self._session.on_error(STREAM_ENDED_EARLY)
        return self._session
