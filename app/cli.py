"""Command line entry point: parse one document and print or export its records.

Usage:
  python -m app.cli inventory.pdf
  python -m app.cli inventory.docx --server http://localhost:8000 --output records.csv
"""

import argparse
import mimetypes
import sys
from pathlib import Path

from app.client.parse_client import ParseDocumentClient
from app.config.settings import Settings
from app.documents.exceptions import TextExtractionError
from app.documents.models import UploadedDocument
from app.logging.logger import Log
from app.processor.exceptions import ProcessorError
from app.processor.processor import build_processor
from app.streaming.consumer import StreamConsumer
from app.streaming.exceptions import TransportError
from app.streaming.session import StreamSession
from app.streaming.sink import RecordTableSink, SinkStatus


def parse_local(path: Path, settings: Settings, sink: RecordTableSink) -> StreamSession:
    """Run the whole pipeline in-process and feed its envelopes to ``sink``."""
    media_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    document = UploadedDocument(filename=path.name, media_type=media_type, data=path.read_bytes())
    processor = build_processor(settings)
    session = StreamSession(sink)
    return StreamConsumer(session).consume(processor.process(document))


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Extract archival records from an inventory document")
    ap.add_argument("file", type=Path, help="PDF, DOC, DOCX or TXT document")
    ap.add_argument("--server", help="Base URL of a running parse service; parse in-process if omitted")
    ap.add_argument("--output", type=Path, help="Write the tab-delimited CSV export here")
    args = ap.parse_args(argv)

    settings = Settings()
    Log.configure(settings.log_level, stream=sys.stderr)

    sink = RecordTableSink()
    try:
        if args.server:
            with ParseDocumentClient(args.server) as client:
                client.parse_file(args.file, sink)
        else:
            parse_local(args.file, settings, sink)
    except (TextExtractionError, ProcessorError, TransportError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if sink.status == SinkStatus.INCOMPLETE:
        print(f"warning: extraction incomplete ({sink.message})", file=sys.stderr)
    elif sink.status == SinkStatus.FAILED:
        print(f"error: {sink.message}", file=sys.stderr)
    if sink.processing_seconds is not None:
        print(f"Processed in {sink.processing_seconds:.1f}s", file=sys.stderr)

    csv_text = sink.to_csv()
    if args.output:
        args.output.write_text(csv_text, encoding="utf-8")
        print(f"Wrote {len(sink.records)} records to {args.output}")
    else:
        sys.stdout.write(csv_text)
    return 0 if sink.status != SinkStatus.FAILED else 1


if __name__ == "__main__":
    sys.exit(main())
