from collections.abc import Iterator

from app.config.settings import Settings
from app.documents.factory import TextExtractorFactory
from app.documents.models import UploadedDocument
from app.llm.base import BaseRecordStreamer
from app.llm.factory import RecordStreamerFactory
from app.logging.logger import Log
from app.processor.pipeline import PipelineContext, PipelineStep
from app.processor.steps import ExtractTextStep, NormalizeTextStep
from app.streaming.sse import StreamEnvelope


class Processor:
    """Orchestrates one document parse.

    Pipeline: extract text -> normalize -> stream records from the model.
    The preparation steps run eagerly so that unsupported or empty documents
    fail before any model call is made.
    """

    def __init__(self, steps: list[PipelineStep], streamer: BaseRecordStreamer) -> None:
        self._steps = steps
        self._streamer = streamer

    def prepare(self, document: UploadedDocument) -> PipelineContext:
        """Run the preparation steps.

        Raises:
            TextExtractionError: if the document cannot be converted to text.
            ProcessorError: if the upload is empty or its text too short.
        """
        context = PipelineContext(document=document)
        for step in self._steps:
            context = step.run(context)
        return context

    def stream(self, context: PipelineContext) -> Iterator[StreamEnvelope]:
        Log.info(f"Streaming records for {context.document.filename}")
        yield from self._streamer.stream(context.text)

    def process(self, document: UploadedDocument) -> Iterator[StreamEnvelope]:
        """Prepare eagerly, then return the lazy envelope stream."""
        context = self.prepare(document)
        return self.stream(context)


def build_processor(settings: Settings) -> Processor:
    """Build a Processor with all required adapters."""
    text_extractor = TextExtractorFactory.create(settings)
    streamer = RecordStreamerFactory.create(settings)
    steps: list[PipelineStep] = [
        ExtractTextStep(text_extractor=text_extractor),
        NormalizeTextStep(min_length=settings.min_text_length),
    ]
    return Processor(steps=steps, streamer=streamer)
