"""
Global fixtures live here

This tells pytest how to prepare a Runtime for tests. Nothing here talks to a
real translation backend.
"""
import pytest
from pathlib import Path

from sql2dsql.core.errors import TranslationError
from sql2dsql.core.runtime import BACKEND_URL_ENV, build_runtime, Runtime

COMPACT_REPLY = "[{a 1, b 2} {a 1, b 2}]"

class FakeClient:
    """Stands in for TranslationClient; records what it was asked."""

    def __init__(self, reply: str = COMPACT_REPLY, error: str | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[str] = []
        self.closed = False

    def translate(self, source: str) -> str:
        self.calls.append(source)
        if self.error is not None:
            raise TranslationError(self.error)
        return self.reply

    def close(self) -> None:
        self.closed = True

@pytest.fixture
def settings_dir(tmp_path: Path) -> Path:
    """Temporary settings directory."""
    return tmp_path / "settings"

@pytest.fixture
def test_runtime(settings_dir: Path, monkeypatch) -> Runtime:
    """
    Creates a temporary Runtime for testing, with a fake translation client
    """
    monkeypatch.delenv(BACKEND_URL_ENV, raising=False)
    rt = build_runtime(settings_dir=settings_dir, verbose=False)
    rt.client = FakeClient()
    # return the runtime to the test
    yield rt

@pytest.fixture
def fake_client(test_runtime: Runtime) -> FakeClient:
    """The fake client installed on test_runtime."""
    return test_runtime.client
