class LlmError(Exception):
    """Raised when the language model call fails."""


class LlmNetworkError(LlmError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
