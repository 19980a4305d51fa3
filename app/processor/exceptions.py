class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class InvalidUploadError(ProcessorError):
    """Raised when an upload carries no file content."""


class DocumentTooShortError(ProcessorError):
    """Raised when extracted text is below the minimum length for parsing."""
