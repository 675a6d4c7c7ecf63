import os
import sys
import pytest
from fastapi.testclient import TestClient

# Ensure the backend package root is on sys.path so tests can import `main` reliably
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from config import Settings
from main import create_app


@pytest.fixture(scope="session")
def settings():
    return Settings(port=0, host="127.0.0.1", log_level="warning")


@pytest.fixture(scope="session")
def client(settings):
    """Test client for the FastAPI app."""
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def details_disabled(monkeypatch):
    monkeypatch.delenv("FEATURE_HEALTH_DETAILS", raising=False)


@pytest.fixture
def details_enabled(monkeypatch):
    monkeypatch.setenv("FEATURE_HEALTH_DETAILS", "enabled")
