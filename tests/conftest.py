import os
from typing import Any, List, Optional

import pytest

from assistant_widget.config.settings import ChatSettings, WidgetSettings
from assistant_widget.core.models import Viewport
from assistant_widget.services.chat_client import ChatReply, ChatServiceError
from assistant_widget.storage.kv import MemoryStore


class StubClient:
    """Chat client double: returns ``answer`` or raises ``error``."""

    def __init__(self, answer: str = "hi", context: Any = None, error: Optional[Exception] = None):
        self.answer = answer
        self.context = context
        self.error = error
        self.calls: List[dict] = []

    def ask(self, question, session_id, user_id=None):
        self.calls.append({"question": question, "session_id": session_id, "user_id": user_id})
        if self.error is not None:
            raise self.error
        return ChatReply(answer=self.answer, context=self.context)


class DeferredRunner:
    """Holds jobs until ``finish_all`` so tests can observe the pending state."""

    def __init__(self):
        self.jobs = []

    def __call__(self, job, on_done):
        self.jobs.append((job, on_done))

    def finish_all(self):
        while self.jobs:
            job, on_done = self.jobs.pop(0)
            on_done(job())


def sync_runner(job, on_done):
    on_done(job())


class BrokenStore:
    def get(self, key):
        raise OSError("storage unavailable")

    def set(self, key, value):
        raise OSError("storage unavailable")


@pytest.fixture()
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture()
def widget_settings() -> WidgetSettings:
    return WidgetSettings()


@pytest.fixture()
def chat_settings() -> ChatSettings:
    return ChatSettings()


@pytest.fixture()
def viewport() -> Viewport:
    return Viewport(width=1280, height=800)


@pytest.fixture()
def stub_client() -> StubClient:
    return StubClient()


@pytest.fixture()
def failing_client() -> StubClient:
    return StubClient(error=ChatServiceError("Chat service returned HTTP 500", status_code=500))


@pytest.fixture()
def deferred_runner() -> DeferredRunner:
    return DeferredRunner()


@pytest.fixture(scope="session")
def qt_app():
    QtWidgets = pytest.importorskip("PyQt6.QtWidgets")
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    return QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
