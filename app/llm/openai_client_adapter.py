from collections.abc import Iterator

import httpx
import openai

from app.llm.client_base import BaseLlmClient
from app.llm.exceptions import LlmError, LlmNetworkError


class OpenAIClientAdapter(BaseLlmClient):
    """Streaming AI client adapter built on the OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        default_headers: dict[str, str] | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            default_headers=default_headers,
        )

    def stream_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> Iterator[str]:
        try:
            stream = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                stream=True,
            )
            for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise LlmNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise LlmNetworkError(f"AI provider API error: {exc}") from exc
        except httpx.HTTPError as exc:
            raise LlmError(f"AI provider stream failed: {exc}") from exc
