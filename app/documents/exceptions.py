class TextExtractionError(Exception):
    """Raised when text cannot be extracted from a document."""


class UnsupportedDocumentError(TextExtractionError):
    """Raised when no adapter handles the document's media type or extension."""
