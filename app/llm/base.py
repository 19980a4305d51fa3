from abc import ABC, abstractmethod
from collections.abc import Iterator

from app.streaming.sse import StreamEnvelope


class BaseRecordStreamer(ABC):
    """Contract for turning document text into a stream of record envelopes."""

    @abstractmethod
    def stream(self, text: str) -> Iterator[StreamEnvelope]:
        """Stream archival records extracted from plain document text.

        Args:
            text: Normalized plain text of the uploaded document.

        Yields:
            Content envelopes while the model writes, then exactly one
            complete or error envelope.
        """
