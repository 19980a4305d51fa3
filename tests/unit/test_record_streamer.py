"""Tests for RecordStreamer (model fragments -> stream envelopes)."""

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock, patch

from app.llm.client_base import BaseLlmClient
from app.llm.exceptions import LlmNetworkError
from app.llm.streamer import FINAL_PARSE_ERROR, RecordStreamer
from app.records.models import FIELD_KEYS
from app.streaming.sse import (
    CompleteEnvelope,
    ContentEnvelope,
    ErrorEnvelope,
    ErrorStage,
    Framing,
)


class _ScriptedClient(BaseLlmClient):
    def __init__(self, fragments: list[str], error: Exception | None = None) -> None:
        self.fragments = fragments
        self.error = error
        self.calls: list[dict[str, object]] = []

    def stream_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> Iterator[str]:
        self.calls.append(
            {
                "model": model,
                "temperature": temperature,
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
            }
        )
        yield from self.fragments
        if self.error is not None:
            raise self.error


FRAGMENTS = ['{"records":[', '{"naslov":"Fond"}', "]}"]


class TestRecordStreamer:
    def test_snapshot_framing_sends_accumulated_text(self) -> None:
        streamer = RecordStreamer(client=_ScriptedClient(FRAGMENTS), model="m")
        envelopes = list(streamer.stream("text"))
        assert envelopes[:3] == [
            ContentEnvelope(content='{"records":['),
            ContentEnvelope(content='{"records":[{"naslov":"Fond"}'),
            ContentEnvelope(content='{"records":[{"naslov":"Fond"}]}'),
        ]
        assert envelopes[3] == CompleteEnvelope(records=[{"naslov": "Fond"}])

    def test_delta_framing_sends_increments(self) -> None:
        streamer = RecordStreamer(
            client=_ScriptedClient(FRAGMENTS), model="m", framing=Framing.DELTA
        )
        envelopes = list(streamer.stream("text"))
        assert [e.content for e in envelopes[:3]] == FRAGMENTS  # type: ignore[union-attr]
        assert all(e.framing is Framing.DELTA for e in envelopes[:3])  # type: ignore[union-attr]

    def test_invalid_final_json_is_parse_error(self) -> None:
        client = _ScriptedClient(['{"records":[{"naslov":"Fond"}'])
        envelopes = list(RecordStreamer(client=client, model="m").stream("text"))
        assert envelopes[-1] == ErrorEnvelope(error=FINAL_PARSE_ERROR, stage=ErrorStage.PARSE)

    def test_fenced_final_json_is_accepted(self) -> None:
        client = _ScriptedClient(['```json\n{"records":[]}\n```'])
        envelopes = list(RecordStreamer(client=client, model="m").stream("text"))
        assert envelopes[-1] == CompleteEnvelope(records=[])

    def test_provider_error_is_transport_error(self) -> None:
        client = _ScriptedClient(
            ['{"records":['], error=LlmNetworkError("AI provider network error: reset")
        )
        envelopes = list(RecordStreamer(client=client, model="m").stream("text"))
        assert len(envelopes) == 2
        assert envelopes[-1] == ErrorEnvelope(
            error="AI provider network error: reset", stage=ErrorStage.TRANSPORT
        )

    def test_prompt_embeds_document_text(self) -> None:
        client = _ScriptedClient(['{"records":[]}'])
        list(RecordStreamer(client=client, model="m").stream("Fond HR-DAVŽ-69"))
        assert "Fond HR-DAVŽ-69" in str(client.calls[0]["user_prompt"])
        assert client.calls[0]["model"] == "m"

    def test_custom_prompt_files(self, tmp_path: Path) -> None:
        template = tmp_path / "user.txt"
        template.write_text("Doc: {document_text}")
        system = tmp_path / "system.txt"
        system.write_text("Be exact.")
        client = _ScriptedClient(['{"records":[]}'])
        streamer = RecordStreamer(
            client=client,
            model="m",
            prompt_template_path=template,
            system_prompt_path=system,
        )
        list(streamer.stream("abc"))
        assert client.calls[0]["user_prompt"] == "Doc: abc"
        assert client.calls[0]["system_prompt"] == "Be exact."

    def test_default_system_prompt_embeds_record_schema(self) -> None:
        client = _ScriptedClient(['{"records":[]}'])
        list(RecordStreamer(client=client, model="m").stream("t"))
        system_prompt = str(client.calls[0]["system_prompt"])
        assert "{record_schema}" not in system_prompt
        assert '"records"' in system_prompt
        for key in FIELD_KEYS:
            assert f'"{key}"' in system_prompt

    def test_temperature_is_clamped(self) -> None:
        client = _ScriptedClient(['{"records":[]}'])
        list(RecordStreamer(client=client, model="m", temperature=3.0).stream("t"))
        assert client.calls[0]["temperature"] == 1.0

    def test_logs_progress(self) -> None:
        client = _ScriptedClient(["x"] * 10)
        with patch("app.llm.streamer.Log") as mock_log:
            list(RecordStreamer(client=client, model="m").stream("t"))
        mock_log.info.assert_any_call("First chunk received, streaming started")
        mock_log.debug.assert_any_call("Streamed 10 chunks, 10 chars")
        mock_log.error.assert_called_once()

    def test_client_is_not_called_until_iterated(self) -> None:
        client = MagicMock(spec=BaseLlmClient)
        RecordStreamer(client=client, model="m").stream("t")
        client.stream_chat_completion.assert_not_called()
