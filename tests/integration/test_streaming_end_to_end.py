"""Full path: upload -> parse service SSE stream -> consumer -> render sink."""

import base64

import pytest
from fastapi.testclient import TestClient

from app.streaming.consumer import StreamConsumer
from app.streaming.session import SessionState, StreamSession
from app.streaming.sink import RecordTableSink, SinkStatus


class _RecordingSink(RecordTableSink):
    def __init__(self) -> None:
        super().__init__()
        self.history: list[list[dict[str, object]]] = []

    def update(self, records: list[dict[str, object]]) -> None:  # type: ignore[override]
        super().update(records)
        self.history.append(list(records))


@pytest.mark.integration
class TestStreamingEndToEnd:
    def test_records_grow_monotonically_then_settle(
        self, api_client: TestClient, inventory_text_bytes: bytes
    ) -> None:
        payload = {
            "file": {
                "data": base64.b64encode(inventory_text_bytes).decode("ascii"),
                "mediaType": "text/plain",
                "filename": "inventar.txt",
            }
        }
        sink = _RecordingSink()
        session = StreamSession(sink)
        with api_client.stream("POST", "/api/parse-document", json=payload) as response:
            assert response.status_code == 200
            StreamConsumer(session).consume_bytes(response.iter_bytes())

        assert session.state == SessionState.COMPLETE
        assert sink.status == SinkStatus.COMPLETE
        assert len(sink.history) > 2
        for earlier, later in zip(sink.history, sink.history[1:]):
            assert len(later) >= len(earlier)
            for index, record in enumerate(earlier):
                assert set(record) <= set(later[index])
        assert sink.history[-1] == sink.records
        assert sink.records[1]["visaID"] == "HR-DAVŽ-69"
