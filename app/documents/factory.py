from typing import ClassVar

from app.config.settings import Settings
from app.documents.base import BaseTextExtractor
from app.documents.docx_adapter import DocxAdapter
from app.documents.exceptions import UnsupportedDocumentError
from app.documents.models import UploadedDocument
from app.documents.pdfplumber_adapter import PdfPlumberAdapter
from app.documents.plain_text_adapter import PlainTextAdapter
from app.documents.pymupdf_adapter import PyMuPdfAdapter

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOC_MEDIA_TYPE = "application/msword"
TEXT_MEDIA_TYPE = "text/plain"


class DocumentTextExtractor:
    """Routes a document to the adapter for its media type or file extension."""

    def __init__(self, pdf_extractor: BaseTextExtractor) -> None:
        plain_text = PlainTextAdapter()
        # Checked in order; the first matching rule wins.
        self._routes: list[tuple[str, str, BaseTextExtractor]] = [
            (TEXT_MEDIA_TYPE, "txt", plain_text),
            (PDF_MEDIA_TYPE, "pdf", pdf_extractor),
            (DOCX_MEDIA_TYPE, "docx", DocxAdapter()),
            (DOC_MEDIA_TYPE, "doc", plain_text),
        ]

    def extract(self, document: UploadedDocument) -> str:
        """Extract plain text from the document.

        Raises:
            UnsupportedDocumentError: if no adapter handles the document.
            TextExtractionError: if the selected adapter fails.
        """
        return self.adapter_for(document).extract(document.data)

    def adapter_for(self, document: UploadedDocument) -> BaseTextExtractor:
        media_type = document.media_type.lower()
        for route_media_type, extension, adapter in self._routes:
            if media_type == route_media_type or document.extension == extension:
                return adapter
        raise UnsupportedDocumentError(f"Unsupported file type: {document.media_type}")


class TextExtractorFactory:
    """Creates the document text extractor based on settings."""

    PDF_ADAPTERS: ClassVar[dict[str, type[BaseTextExtractor]]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> DocumentTextExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.PDF_ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ADAPTERS)}"
            )
        return DocumentTextExtractor(pdf_extractor=adapter_cls())
