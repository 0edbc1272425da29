import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import uuid
import pytest
from sanic_testing import TestManager

from poll_chat.config import Settings
from poll_chat.server.factory import create_app
from poll_chat.server.service import ChatService
from poll_chat.server.stores import ChatState


class FakeClock:
    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def state(clock):
    return ChatState(clock=clock)


@pytest.fixture
def service(state):
    return ChatService(state)


@pytest.fixture
def app(state):
    name = f"test-{uuid.uuid4().hex[:8]}"
    app = create_app(Settings(sweep_interval=60, max_idle=900), name=name, state=state)
    TestManager(app)
    return app


@pytest.fixture
def test_client(app):
    return app.test_client
