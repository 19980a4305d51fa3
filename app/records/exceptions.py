class RecordValidationError(Exception):
    """Raised when the model's final payload does not hold a valid record list."""
