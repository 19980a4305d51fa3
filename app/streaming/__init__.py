from app.streaming.extractor import ExtractionResult, RecordExtractor, extract_records
from app.streaming.reconciler import reconcile_partial_record
from app.streaming.session import FinalPayload, StreamSession
from app.streaming.sink import RecordTableSink, RenderSink

__all__ = [
    "ExtractionResult",
    "FinalPayload",
    "RecordExtractor",
    "RecordTableSink",
    "RenderSink",
    "StreamSession",
    "extract_records",
    "reconcile_partial_record",
]
