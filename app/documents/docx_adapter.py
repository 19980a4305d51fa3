import io

import docx

from app.documents.base import BaseTextExtractor
from app.documents.exceptions import TextExtractionError


class DocxAdapter(BaseTextExtractor):
    """Extracts paragraph and table text from DOCX using python-docx."""

    def extract(self, data: bytes) -> str:
        try:
            document = docx.Document(io.BytesIO(data))
            lines = [p.text for p in document.paragraphs]
            for table in document.tables:
                for row in table.rows:
                    lines.append("\t".join(cell.text for cell in row.cells))
            return "\n".join(lines).strip()
        except Exception as exc:
            raise TextExtractionError(f"python-docx extraction failed: {exc}") from exc
