import base64
import binascii
from dataclasses import dataclass

from app.documents.exceptions import TextExtractionError


@dataclass(frozen=True)
class UploadedDocument:
    """A document received for parsing."""

    filename: str
    media_type: str
    data: bytes

    @property
    def extension(self) -> str:
        _, dot, ext = self.filename.rpartition(".")
        return ext.lower() if dot else ""

    @classmethod
    def from_base64(cls, data: str, media_type: str, filename: str) -> "UploadedDocument":
        """Build a document from base64 content, with or without a data URL prefix.

        Raises:
            TextExtractionError: if the content is not valid base64.
        """
        _, comma, payload = data.partition(",")
        encoded = payload if comma else data
        try:
            raw = base64.b64decode(encoded, validate=False)
        except (binascii.Error, ValueError) as exc:
            raise TextExtractionError(f"Invalid base64 file content: {exc}") from exc
        return cls(filename=filename, media_type=media_type, data=raw)
