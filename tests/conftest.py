import pytest
from fastapi.testclient import TestClient

from chatdesk.core.config import Settings
from chatdesk.storage.memory import MemStorage
from chatdesk_web.main import create_app


@pytest.fixture
def storage():
    return MemStorage()


@pytest.fixture
def client(storage) -> TestClient:
    return TestClient(create_app(Settings(), storage=storage))
