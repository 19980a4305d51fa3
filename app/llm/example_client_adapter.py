"""Example streaming client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseLlmClient and register the provider in RecordStreamerFactory.
"""

import json
from collections.abc import Iterator
from typing import ClassVar

from app.llm.client_base import BaseLlmClient


class ExampleClientAdapter(BaseLlmClient):
    """Example adapter that streams a fixed valid records JSON.

    No network calls. The response is cut into small fragments so local
    development and tests see the same partial JSON a real model produces.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "records": [
            {
                "identifikator": "HR-DAVŽ-69",
                "naslov": "Primjer fonda",
                "razina": "Fond",
                "vrijemeOd": "1900",
                "vrijemeDo": "1945",
                "kolicina": "19 knjiga",
            },
            {
                "identifikator": "HR-DAVŽ-69-1",
                "naslov": "Primjer serije",
                "razina": "serija",
                "visaID": "HR-DAVŽ-69",
                "brojTehnickeJedinice": "kut. br. 2",
            },
        ]
    }

    def __init__(self, chunk_size: int = 8) -> None:
        self._chunk_size = max(1, chunk_size)

    def stream_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> Iterator[str]:
        _ = model, temperature, system_prompt, user_prompt
        text = json.dumps(self.DEFAULT_RESPONSE, ensure_ascii=False)
        for start in range(0, len(text), self._chunk_size):
            yield text[start:start + self._chunk_size]
