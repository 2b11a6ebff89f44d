import pytest
from fastapi.testclient import TestClient

from api import app
from routers.split.base import get_split_client
from support import FakeSplitter

SPLIT_ENV_VARS = ["PDF_SPLITTER_URL", "PDF_SPLITTER_TIMEOUT", "SPLIT_PROPAGATE_ERROR_STATUS"]

@pytest.fixture(autouse=True)
def clean_split_env(monkeypatch):
    """Run every test against the default configuration"""
    for name in SPLIT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)

@pytest.fixture(scope="function")
def splitter():
    """A fresh fake splitting service for each test"""
    return FakeSplitter()

@pytest.fixture(scope="function")
def client(splitter):
    """TestClient whose outbound calls go to the fake splitter"""
    async def split_client_override():
        async with splitter.client() as split_client:
            yield split_client

    app.dependency_overrides[get_split_client] = split_client_override
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
