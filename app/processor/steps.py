import re

from app.documents.factory import DocumentTextExtractor
from app.logging.logger import Log
from app.processor.exceptions import DocumentTooShortError, InvalidUploadError
from app.processor.pipeline import PipelineContext, PipelineStep

_WHITESPACE_RUN = re.compile(r"\s+")


class ExtractTextStep(PipelineStep):
    def __init__(self, text_extractor: DocumentTextExtractor) -> None:
        self._text_extractor = text_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.document.data:
            raise InvalidUploadError("No file provided")
        Log.info(f"Extracting text from: {context.document.filename}")
        context.extracted_text = self._text_extractor.extract(context.document)
        return context


class NormalizeTextStep(PipelineStep):
    """Collapses whitespace runs and rejects documents that are too short."""

    def __init__(self, min_length: int) -> None:
        self._min_length = min_length

    def run(self, context: PipelineContext) -> PipelineContext:
        context.text = _WHITESPACE_RUN.sub(" ", context.extracted_text).strip()
        if len(context.text) < self._min_length:
            raise DocumentTooShortError("Document appears empty or too short.")
        Log.info(f"Extracted text length: {len(context.text)}")
        return context
