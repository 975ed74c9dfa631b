"""Pytest configuration and fixtures for testing."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from tabiplan.api.errors import GatewayError
from tabiplan.api.llm import SuggestionGateway
from tabiplan.api.services.suggestion_service import SuggestionService
from tabiplan.api.workspace import WorkspaceManager
from tabiplan.app import create_app


class StubGateway(SuggestionGateway):
    """Gateway that answers from a canned reply and records requests."""

    def __init__(self, reply="- 10:00 美術館", error=None):
        self.reply = reply
        self.error = error
        self.requests = []
        self.release = threading.Event()
        self.release.set()

    def invoke(self, request):
        self.requests.append(request)
        self.release.wait(timeout=5)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def gateway():
    return StubGateway()


@pytest.fixture
def failing_gateway():
    return StubGateway(error=GatewayError("401 invalid api key"))


@pytest.fixture
def workspace_config():
    return {
        "session_timeout_seconds": 60,
        "cleanup_interval_seconds": 60,
        "suggestion_workers": 1,
    }


@pytest.fixture
def workspaces(workspace_config):
    return WorkspaceManager(workspace_config, start_cleanup=False)


@pytest.fixture
def suggestions(gateway):
    executor = ThreadPoolExecutor(max_workers=1)
    service = SuggestionService(gateway, executor=executor)
    yield service
    gateway.release.set()
    service.shutdown()


@pytest.fixture
def app(gateway, workspaces, suggestions):
    app = create_app(gateway=gateway, workspaces=workspaces, suggestions=suggestions)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
