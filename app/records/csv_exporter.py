import csv
import io
from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from app.records.models import ARCHIVAL_FIELDS

EXPORT_FILENAME = "archival_records.csv"

R = TypeVar("R", bound=Mapping[str, Any])


class CsvExporter:
    """Writes archival records as tab-delimited, fully quoted rows."""

    def export(self, records: Iterable[Mapping[str, Any]]) -> str:
        """Return the export text: one header row, then one row per record.

        Missing fields are written as empty cells.
        """
        buf = io.StringIO()
        writer = csv.writer(
            buf,
            delimiter="\t",
            quoting=csv.QUOTE_ALL,
            lineterminator="\n",
        )
        writer.writerow([f.header for f in ARCHIVAL_FIELDS])
        for record in records:
            writer.writerow([self._cell(record.get(f.key)) for f in ARCHIVAL_FIELDS])
        return buf.getvalue()

    @staticmethod
    def _cell(value: Any) -> str:
        if value is None:
            return ""
        return str(value)


def search_records(records: Iterable[R], query: str) -> list[R]:
    """Case-insensitive substring search across all field values."""
    items = list(records)
    needle = query.strip().lower()
    if not needle:
        return items
    return [
        r for r in items
        if needle in " ".join(str(v) for v in r.values()).lower()
    ]
