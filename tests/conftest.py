from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pageflows.core.logger as core_logger


class RecordingSession:
    """Fake session that records capability calls in order."""

    def __init__(self, name: str = "session") -> None:
        self.name = name
        self.calls: list[tuple] = []

    def navigate(self, url):
        self.calls.append(("navigate", url))

    def fill(self, field, value):
        self.calls.append(("fill", field, value))

    def click(self, target):
        self.calls.append(("click", target))

    def submit(self):
        self.calls.append(("submit",))

    def assert_text(self, text):
        self.calls.append(("assert_text", text))


@pytest.fixture(autouse=True)
def _isolated_workdir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Keep logs and screenshots out of the project workspace."""

    monkeypatch.setenv("PAGEFLOWS_ROOT", str(tmp_path / "root"))
    for key in ("PAGEFLOWS_BASE_URL", "PAGEFLOWS_HEADLESS", "PAGEFLOWS_TIMEOUT_MS"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("PAGEFLOWS_LOG_LEVEL", raising=False)
    core_logger.reset_logger()
    yield
    core_logger.reset_logger()


@pytest.fixture
def session() -> RecordingSession:
    return RecordingSession()


@pytest.fixture
def make_session():
    return RecordingSession
