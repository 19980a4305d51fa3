import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum
from typing import Any

from app.records.csv_exporter import CsvExporter, search_records


class RenderSink(ABC):
    """Contract for consumers of the extracted record list."""

    @abstractmethod
    def update(self, records: list[dict[str, Any]]) -> None:
        """Replace the displayed records with ``records``. Last call wins."""

    def mark_final(self) -> None:
        """The last ``update`` carried the authoritative result."""

    def mark_incomplete(self, reason: str) -> None:
        """The stream finished but its output could not be strict-parsed."""

    def mark_failed(self, message: str) -> None:
        """The transport failed; already rendered records stay as they are."""


class SinkStatus(str, Enum):
    STREAMING = "streaming"
    COMPLETE = "complete"
    INCOMPLETE = "incomplete"
    FAILED = "failed"


class RecordTableSink(RenderSink):
    """In-memory table of the current snapshot, with search and CSV export."""

    def __init__(
        self,
        exporter: CsvExporter | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._exporter = exporter or CsvExporter()
        self._clock = clock
        self._started_at = clock()
        self.processing_seconds: float | None = None
        self.records: list[dict[str, Any]] = []
        self.status = SinkStatus.STREAMING
        self.message = ""
        self.update_count = 0

    def update(self, records: list[dict[str, Any]]) -> None:
        self.records = list(records)
        self.update_count += 1

    def mark_final(self) -> None:
        """Also stamps the time from sink creation to the authoritative result."""
        self.status = SinkStatus.COMPLETE
        self.processing_seconds = self._clock() - self._started_at

    def mark_incomplete(self, reason: str) -> None:
        self.status = SinkStatus.INCOMPLETE
        self.message = reason

    def mark_failed(self, message: str) -> None:
        self.status = SinkStatus.FAILED
        self.message = message

    @property
    def is_final(self) -> bool:
        return self.status == SinkStatus.COMPLETE

    def search(self, query: str) -> list[dict[str, Any]]:
        return search_records(self.records, query)

    def to_csv(self) -> str:
        return self._exporter.export(self.records)
