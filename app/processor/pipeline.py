from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.documents.models import UploadedDocument


@dataclass(slots=True)
class PipelineContext:
    document: UploadedDocument
    extracted_text: str = ""
    text: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
