from contextlib import contextmanager

import httpx
import pytest
from fastapi.testclient import TestClient

from app import create_app
from core.config import Config


class RecordingLogger:
    """RequestLogger that keeps calls in memory instead of drawing a dashboard."""

    def __init__(self):
        self.requests = []
        self.errors = []

    def log_request(self, method, url, status, content_type, *, elapsed):
        self.requests.append((method, url, status, content_type))

    def log_error(self, url, status, message):
        self.errors.append((url, status, message))


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def make_client(config, logger):
    """Build a TestClient whose upstream calls go to ``handler``."""

    @contextmanager
    def _make(handler):
        app = create_app(config, logger, transport=httpx.MockTransport(handler))
        with TestClient(app) as client:
            yield client

    return _make
