# Put the project root on sys.path so tests beside the modules can use
# top-level imports like `from core.router import ...`.
import os
import sys

import httpx
import pytest
from fastapi.testclient import TestClient

ROOT = os.path.dirname(__file__)
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from app import create_app  # noqa: E402
from core.config import Config  # noqa: E402


class RecordingLogger:
    """RequestLogger that keeps every call for assertions."""

    def __init__(self):
        self.forwards = []
        self.responses = []
        self.errors = []

    def log_forward(self, route, method, url):
        self.forwards.append((route, method, url))

    def log_response(self, route, status):
        self.responses.append((route, status))

    def log_error(self, route, status, message):
        self.errors.append((route, status, message))


class Upstream:
    """Mock upstream recording outbound requests and replaying a canned reply."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.content = b'{"ok": true}'
        self.headers = {"content-type": "application/json"}
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, content=self.content, headers=self.headers)


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def client(config, recording_logger, upstream):
    app = create_app(config, recording_logger, transport=httpx.MockTransport(upstream))
    with TestClient(app) as test_client:
        yield test_client
