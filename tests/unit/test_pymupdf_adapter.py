import pytest

from app.documents.exceptions import TextExtractionError
from app.documents.pymupdf_adapter import PyMuPdfAdapter


class TestPyMuPdfAdapter:
    def test_extract_returns_text(self, sample_pdf_bytes: bytes) -> None:
        assert "Hello PDF World" in PyMuPdfAdapter().extract(sample_pdf_bytes)

    def test_extract_multi_page_in_order(self, multi_page_pdf_bytes: bytes) -> None:
        result = PyMuPdfAdapter().extract(multi_page_pdf_bytes)
        assert result.index("Page one content") < result.index("Page two content")

    def test_extract_raises_on_invalid_bytes(self) -> None:
        with pytest.raises(TextExtractionError):
            PyMuPdfAdapter().extract(b"not a pdf")
