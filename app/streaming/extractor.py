"""Incremental extraction of archival records from a partial JSON buffer.

The model streams a single object of the shape ``{"records": [{...}, ...]}``.
While it is streaming, the accumulated text is almost never valid JSON, so
extraction works in two tiers:

1. Fast path: strict parse of the whole buffer.
2. Degraded path: locate the ``records`` array and scan it character by
   character, splitting it into candidate object spans. Closed spans are
   strict-parsed (or reconciled when that fails); a span still open at the
   end of the buffer is reconciled as the trailing partial record.

``RecordExtractor`` remembers where the last closed span ended so that a
buffer extending the previous one is only rescanned from that offset. The
output is the same as a fresh extraction of the buffer.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from app.records.exceptions import RecordValidationError
from app.records.validator import strip_code_fences, validate_records
from app.streaming.reconciler import reconcile_partial_record
from app.streaming.scanner import StringScanner, skip_whitespace

RECORDS_KEY = "records"
_RECORDS_TOKEN = f'"{RECORDS_KEY}"'

Record = dict[str, Any]


@dataclass(frozen=True)
class ExtractionResult:
    """Best-known record list for one buffer snapshot.

    The result is Empty when no record is identifiable yet; ``array_found``
    tells whether the records array has started at all. ``partial_indices``
    lists the positions of records recovered by the reconciler rather than
    strict-parsed.
    """

    records: list[Record] = field(default_factory=list)
    array_found: bool = False
    complete: bool = False
    partial_indices: frozenset[int] = frozenset()

    @classmethod
    def empty(cls) -> ExtractionResult:
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.records


@dataclass
class _ScanCheckpoint:
    """Scan state at the end of the last closed candidate span."""

    prefix: str
    offset: int
    records: list[Record]
    partial_indices: set[int]
    array_closed: bool = False


class RecordExtractor:
    """Stateful wrapper that reuses work across growing buffers of one stream."""

    def __init__(self) -> None:
        self._checkpoint: _ScanCheckpoint | None = None

    def reset(self) -> None:
        self._checkpoint = None

    def extract(self, buffer: str) -> ExtractionResult:
        """Return the best current approximation of the record list."""
        cleaned = strip_code_fences(buffer)
        complete = _parse_complete(cleaned)
        if complete is not None:
            return complete
        return self._extract_degraded(cleaned)

    def _extract_degraded(self, buffer: str) -> ExtractionResult:
        checkpoint = self._checkpoint
        if checkpoint is None or not buffer.startswith(checkpoint.prefix):
            array_start = find_records_array(buffer)
            if array_start is None:
                self._checkpoint = None
                return ExtractionResult.empty()
            checkpoint = _ScanCheckpoint(
                prefix=buffer[:array_start],
                offset=array_start,
                records=[],
                partial_indices=set(),
            )

        records = list(checkpoint.records)
        partial_indices = set(checkpoint.partial_indices)
        if checkpoint.array_closed:
            self._checkpoint = checkpoint
            return _result(records, partial_indices)

        scanner = StringScanner()
        depth = 0
        span_start = -1
        offset = checkpoint.offset
        array_closed = False
        for index in range(checkpoint.offset, len(buffer)):
            char = buffer[index]
            if not scanner.feed(char):
                continue
            if char == "{":
                depth += 1
                if depth == 1:
                    span_start = index
            elif char == "}":
                if depth == 0:
                    continue
                depth -= 1
                if depth == 0:
                    _append_span(buffer[span_start:index + 1], records, partial_indices)
                    offset = index + 1
            elif char == "]" and depth == 0:
                array_closed = True
                offset = index + 1
                break

        self._checkpoint = _ScanCheckpoint(
            prefix=buffer[:offset],
            offset=offset,
            records=list(records),
            partial_indices=set(partial_indices),
            array_closed=array_closed,
        )

        if depth > 0 and not array_closed:
            trailing = reconcile_partial_record(buffer[span_start:])
            if trailing is not None:
                partial_indices.add(len(records))
                records.append(trailing)
        return _result(records, partial_indices)


def extract_records(buffer: str) -> ExtractionResult:
    """Stateless extraction: the same output a fresh ``RecordExtractor`` gives."""
    return RecordExtractor().extract(buffer)


def find_records_array(buffer: str) -> int | None:
    """Return the offset just past the ``[`` opening the records array.

    Returns None if the ``"records": [`` sequence has not arrived yet.
    """
    search_from = 0
    while True:
        key_start = buffer.find(_RECORDS_TOKEN, search_from)
        if key_start == -1:
            return None
        colon = skip_whitespace(buffer, key_start + len(_RECORDS_TOKEN))
        if colon >= len(buffer):
            return None
        if buffer[colon] == ":":
            bracket = skip_whitespace(buffer, colon + 1)
            if bracket >= len(buffer):
                return None
            if buffer[bracket] == "[":
                return bracket + 1
        search_from = key_start + 1


def _parse_complete(buffer: str) -> ExtractionResult | None:
    try:
        parsed = json.loads(buffer)
    except json.JSONDecodeError:
        return None
    if not isinstance(parsed, dict) or not isinstance(parsed.get(RECORDS_KEY), list):
        return None
    # Same acceptance rule as the terminal parse; anything else is scanned.
    try:
        records = validate_records(parsed)
    except RecordValidationError:
        return None
    return ExtractionResult(records=records, array_found=True, complete=True)


def _append_span(span: str, records: list[Record], partial_indices: set[int]) -> None:
    try:
        parsed = json.loads(span)
    except json.JSONDecodeError:
        parsed = None
    if isinstance(parsed, dict):
        records.append(parsed)
        return
    recovered = reconcile_partial_record(span)
    if recovered is not None:
        partial_indices.add(len(records))
        records.append(recovered)


def _result(records: list[Record], partial_indices: set[int]) -> ExtractionResult:
    return ExtractionResult(
        records=records,
        array_found=True,
        partial_indices=frozenset(partial_indices),
    )
