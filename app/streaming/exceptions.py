class StreamError(Exception):
    """Base exception for streaming record extraction."""


class StreamClosedError(StreamError):
    """Raised when a fragment or terminal event arrives after the stream ended."""


class TransportError(StreamError):
    """Raised when the upstream service fails before the stream completes."""
