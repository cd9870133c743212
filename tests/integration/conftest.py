import pytest
from fastapi.testclient import TestClient

from fine_appeal.api.app import create_app
from fine_appeal.config.settings import Settings


@pytest.fixture()
def example_settings() -> Settings:
    return Settings(inference_provider="example", inference_api_key="")


@pytest.fixture()
def api_client(example_settings: Settings) -> TestClient:
    return TestClient(create_app(example_settings))
