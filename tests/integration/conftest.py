from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from app.api.app import create_app
from app.config.settings import Settings


@pytest.fixture()
def test_settings() -> Settings:
    return Settings(llm_provider="example", min_text_length=5, stream_framing="snapshot")


@pytest.fixture()
def api_client(test_settings: Settings) -> Generator[TestClient, None, None]:
    with TestClient(create_app(test_settings)) as client:
        yield client
