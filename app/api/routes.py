from collections.abc import Iterator

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response, StreamingResponse

from app.api.schemas import ExportCsvRequest, ParseDocumentRequest
from app.documents.exceptions import TextExtractionError
from app.documents.models import UploadedDocument
from app.logging.logger import Log
from app.processor.exceptions import ProcessorError
from app.processor.processor import Processor
from app.records.csv_exporter import EXPORT_FILENAME, CsvExporter
from app.streaming.sse import ErrorEnvelope, StreamEnvelope, encode_event

router = APIRouter()

_SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/api/parse-document", response_model=None)
def parse_document(body: ParseDocumentRequest, request: Request) -> Response:
    if body.file is None or not body.file.data:
        return JSONResponse({"error": "No file provided"}, status_code=400)

    processor: Processor = request.app.state.processor
    try:
        document = UploadedDocument.from_base64(
            body.file.data,
            media_type=body.file.media_type,
            filename=body.file.filename,
        )
        envelopes = processor.process(document)
    except (TextExtractionError, ProcessorError) as exc:
        Log.warning(f"Rejected document {body.file.filename}: {exc}")
        return JSONResponse({"error": str(exc)}, status_code=400)
    except Exception as exc:
        Log.error(f"Error parsing document {body.file.filename}: {exc}")
        return JSONResponse(
            {"error": "Failed to parse document", "details": str(exc)},
            status_code=500,
        )

    return StreamingResponse(
        _event_stream(envelopes),
        media_type="text/event-stream",
        headers=_SSE_HEADERS,
    )


@router.post("/api/export-csv")
def export_csv(body: ExportCsvRequest) -> Response:
    content = CsvExporter().export(body.records)
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


def _event_stream(envelopes: Iterator[StreamEnvelope]) -> Iterator[str]:
    try:
        for envelope in envelopes:
            yield encode_event(envelope)
    except Exception as exc:
        Log.error(f"Streaming error: {exc}")
        yield encode_event(ErrorEnvelope(error=str(exc) or "Unknown error"))
