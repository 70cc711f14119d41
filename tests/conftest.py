import pytest

from core.exceptions import ResolutionError
from ui import log_utils


class RecordingLogger:
    """RequestLogger that keeps every event in memory."""

    def __init__(self):
        self.forwards: list[tuple[str, str]] = []
        self.retries: list[tuple[str, int, str, float]] = []
        self.outcomes: list[tuple[str, str, list, int]] = []
        self.warnings: list[tuple[str, str]] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_forward(self, method, url):
        self.forwards.append((method, url))

    def log_retry(self, url, attempt, error, delay):
        self.retries.append((url, attempt, error, delay))

    def log_outcome(self, method, path, outcomes, status):
        self.outcomes.append((method, path, outcomes, status))

    def log_warning(self, route, message):
        self.warnings.append((route, message))

    def log_error(self, route, status, message):
        self.errors.append((route, status, message))


class StubResolver:
    """Resolver returning a fixed address list, or failing."""

    def __init__(self, addresses=None, error: Exception | None = None):
        self.addresses = list(addresses or [])
        self.error = error
        self.calls: list[str] = []

    async def resolve(self, hostname):
        self.calls.append(hostname)
        if self.error:
            raise ResolutionError(str(self.error), hostname) from self.error
        return list(self.addresses)


class RecordingSleep:
    """Fake asyncio.sleep that records delays instead of waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, delay):
        self.delays.append(delay)


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def fake_sleep():
    return RecordingSleep()


@pytest.fixture
def stub_resolver():
    return StubResolver


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path, monkeypatch):
    """Keep rolling log output out of the working directory."""
    monkeypatch.setattr(log_utils, "LOG_ROOT", tmp_path / "logs")
    monkeypatch.setattr(log_utils, "CLI_LOG_FILE", tmp_path / "logs" / "proxy.log")
    return tmp_path / "logs"
