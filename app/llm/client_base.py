from abc import ABC, abstractmethod
from collections.abc import Iterator


class BaseLlmClient(ABC):
    """Contract for provider-specific streaming chat clients."""

    @abstractmethod
    def stream_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> Iterator[str]:
        """Yield the response text as it is generated, one fragment at a time."""
