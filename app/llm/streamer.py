"""AI-powered archival record streamer."""

from collections.abc import Iterator
from pathlib import Path

from app.llm.base import BaseRecordStreamer
from app.llm.client_base import BaseLlmClient
from app.llm.exceptions import LlmError
from app.llm.prompt_loader import load_prompt_template, load_system_prompt
from app.logging.logger import Log
from app.records.exceptions import RecordValidationError
from app.records.models import record_schema_example
from app.records.validator import parse_final_payload
from app.streaming.sse import (
    CompleteEnvelope,
    ContentEnvelope,
    ErrorEnvelope,
    ErrorStage,
    Framing,
    StreamEnvelope,
)

FINAL_PARSE_ERROR = "Failed to parse JSON"
_PROGRESS_EVERY = 10


class RecordStreamer(BaseRecordStreamer):
    """Streams archival records out of document text using an AI provider."""

    def __init__(
        self,
        *,
        client: BaseLlmClient,
        model: str,
        temperature: float = 0.0,
        framing: Framing = Framing.SNAPSHOT,
        prompt_template_path: Path | None = None,
        system_prompt_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._framing = framing
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._system_prompt = load_system_prompt(system_prompt_path).format(
            record_schema=record_schema_example(),
        )

    def stream(self, text: str) -> Iterator[StreamEnvelope]:
        prompt = self.build_prompt(text)
        Log.debug(f"Extraction prompt:\n{prompt}")
        Log.info(f"Sending streaming request to model {self._model}")

        full_content = ""
        chunk_count = 0
        try:
            for fragment in self._client.stream_chat_completion(
                model=self._model,
                temperature=self._temperature,
                system_prompt=self._system_prompt,
                user_prompt=prompt,
            ):
                full_content += fragment
                chunk_count += 1
                if chunk_count == 1:
                    Log.info("First chunk received, streaming started")
                if chunk_count % _PROGRESS_EVERY == 0:
                    Log.debug(f"Streamed {chunk_count} chunks, {len(full_content)} chars")
                yield self._content_envelope(fragment, full_content)
        except LlmError as exc:
            Log.error(f"Streaming error after {chunk_count} chunks: {exc}")
            yield ErrorEnvelope(error=str(exc), stage=ErrorStage.TRANSPORT)
            return

        Log.info(
            f"Streaming complete. Total chunks: {chunk_count}, total chars: {len(full_content)}"
        )
        yield self._final_envelope(full_content)

    def build_prompt(self, text: str) -> str:
        return self._prompt_template.format(document_text=text)

    def _content_envelope(self, fragment: str, full_content: str) -> ContentEnvelope:
        if self._framing is Framing.DELTA:
            return ContentEnvelope(content=fragment, framing=Framing.DELTA)
        return ContentEnvelope(content=full_content, framing=Framing.SNAPSHOT)

    @staticmethod
    def _final_envelope(full_content: str) -> StreamEnvelope:
        try:
            records = parse_final_payload(full_content)
        except RecordValidationError as exc:
            Log.error(f"Error parsing final JSON: {exc}")
            Log.debug(f"AI raw response:\n{full_content}")
            return ErrorEnvelope(error=FINAL_PARSE_ERROR, stage=ErrorStage.PARSE)
        Log.info(f"Records extracted: {len(records)}")
        return CompleteEnvelope(records=records)
