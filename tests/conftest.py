import pytest
from fastapi.testclient import TestClient

from htmx_sse.config import Settings
from htmx_sse.core.models import ChannelClosed
from htmx_sse.core.registry import ChannelRegistry
from htmx_sse.main import create_app
from htmx_sse.services.job_runner import JobRunner
from htmx_sse.services.notifier import FragmentRenderer


class RecordingChannel:
    def __init__(self, name="chan"):
        self.name = name
        self.messages = []

    def send(self, message):
        self.messages.append(message)

    def __repr__(self):
        return f"RecordingChannel({self.name!r})"


class FailingChannel(RecordingChannel):
    """Accepts ``fail_at - 1`` messages, then behaves like a dropped connection."""

    def __init__(self, name="broken", fail_at=1):
        super().__init__(name)
        self.fail_at = fail_at
        self.attempts = 0

    def send(self, message):
        self.attempts += 1
        if self.attempts >= self.fail_at:
            raise ChannelClosed("client went away")
        super().send(message)


class ScriptedRandom:
    """Stand-in for random.Random: replays ``draws`` then keeps returning ``then``."""

    def __init__(self, draws, then=None):
        self.draws = list(draws)
        self.then = then
        self.calls = []

    def randrange(self, stop):
        self.calls.append(stop)
        if self.draws:
            value = self.draws.pop(0)
        elif self.then is not None:
            value = self.then
        else:
            raise AssertionError("ran out of scripted draws")
        assert 0 <= value < stop
        return value


def no_sleep(_seconds):
    pass


@pytest.fixture
def registry():
    return ChannelRegistry()


@pytest.fixture
def renderer():
    return FragmentRenderer()


@pytest.fixture
def fast_runner():
    return JobRunner(interval=0, sleep=no_sleep, rng=ScriptedRandom([], then=9))


@pytest.fixture
def settings():
    s = Settings()
    s.ALLOWED_ORIGINS = []
    s.SSE_PING_SECONDS = 15
    return s


@pytest.fixture
def app(settings, registry, fast_runner):
    return create_app(settings=settings, registry=registry, job_runner=fast_runner)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
