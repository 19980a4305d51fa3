from app.llm.base import BaseRecordStreamer
from app.llm.factory import RecordStreamerFactory
from app.llm.streamer import RecordStreamer

__all__ = ["BaseRecordStreamer", "RecordStreamer", "RecordStreamerFactory"]
