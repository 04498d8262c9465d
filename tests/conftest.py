import pytest
from fastapi.testclient import TestClient

from growth_os.config import get_settings
from growth_os.main import app


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def settings():
    return get_settings()
