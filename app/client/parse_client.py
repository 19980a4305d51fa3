import base64
import mimetypes
from pathlib import Path

import httpx

from app.logging.logger import Log
from app.streaming.consumer import StreamConsumer
from app.streaming.exceptions import TransportError
from app.streaming.session import StreamSession
from app.streaming.sink import RenderSink

PARSE_DOCUMENT_PATH = "/api/parse-document"


class ParseDocumentClient:
    """Uploads a document to the parse service and consumes its record stream."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "ParseDocumentClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def parse_file(self, path: Path, sink: RenderSink) -> StreamSession:
        media_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return self.parse_bytes(path.read_bytes(), path.name, media_type, sink)

    def parse_bytes(
        self,
        data: bytes,
        filename: str,
        media_type: str,
        sink: RenderSink,
    ) -> StreamSession:
        """Stream one document through the service into ``sink``.

        A rejected request or a connection failure is reported on the
        session as a transport error and raised as TransportError.
        """
        session = StreamSession(sink)
        payload = {
            "file": {
                "data": base64.b64encode(data).decode("ascii"),
                "mediaType": media_type,
                "filename": filename,
            }
        }
        try:
            with self._client.stream("POST", PARSE_DOCUMENT_PATH, json=payload) as response:
                if response.status_code != 200:
                    message = self._error_message(response)
                    session.on_error(message)
                    raise TransportError(message)
                StreamConsumer(session).consume_bytes(response.iter_bytes())
        except httpx.HTTPError as exc:
            message = f"Parse service request failed: {exc}"
            Log.error(message)
            session.on_error(message)
            raise TransportError(message) from exc
        return session

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        response.read()
        try:
            body = response.json()
        except ValueError:
            return f"Parse service returned HTTP {response.status_code}"
        if not isinstance(body, dict):
            return f"Parse service returned HTTP {response.status_code}"
        return str(body.get("details") or body.get("error") or "Failed to parse document")
