import os
import random
import sys
import time

import pytest

# Ensure the backend root (containing the `wordwiz` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from wordwiz.config import Config
from wordwiz.game.scheduler import RoundScheduler
from wordwiz.game.service import RoomDirectory
from wordwiz.server import create_app


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    SOCKETIO_ASYNC_MODE = 'threading'
    TRUST_PROXY_HEADERS = False
    START_LEAD_IN_SEC = 0
    ROUND_REVEAL_SEC = 0
    MID_SUMMARY_SEC = 0
    TIMER_CHOICES = (1, 10, 20, 30)
    WORD_CHECK_MODE = 'client'
    # No network in tests
    DICTIONARY_API_URL = ''


class ManualTasks:
    """Stands in for SocketIO.start_background_task / sleep: nothing runs until asked."""

    def __init__(self):
        self.pending = []
        self.slept = []

    def start(self, fn, *args, **kwargs):
        self.pending.append((fn, args, kwargs))

    def sleep(self, seconds):
        self.slept.append(seconds)

    def run_pending(self):
        tasks, self.pending = self.pending, []
        for fn, args, kwargs in tasks:
            fn(*args, **kwargs)
        return len(tasks)


class EmitRecorder:
    def __init__(self):
        self.calls = []

    def __call__(self, event, data=None, **kwargs):
        self.calls.append((event, data, kwargs))

    def named(self, event):
        return [(data, kwargs) for name, data, kwargs in self.calls if name == event]

    def names(self):
        return [name for name, _, _ in self.calls]

    def clear(self):
        self.calls = []


@pytest.fixture()
def directory():
    return RoomDirectory(rng=random.Random(42))


@pytest.fixture()
def tasks():
    return ManualTasks()


@pytest.fixture()
def emitted():
    return EmitRecorder()


@pytest.fixture()
def scheduler(directory, tasks, emitted):
    return RoundScheduler(
        directory,
        emit=emitted,
        start_task=tasks.start,
        sleep=tasks.sleep,
        settings={
            'START_LEAD_IN_SEC': 3,
            'ROUND_REVEAL_SEC': 3,
            'MID_SUMMARY_SEC': 8,
            'MID_GAME_ROUND': 5,
        },
        clock=lambda: 1_000_000,
        rng=random.Random(7),
    )


@pytest.fixture()
def app_and_socketio():
    return create_app(TestConfig)


@pytest.fixture()
def flask_app(app_and_socketio):
    return app_and_socketio[0]


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(app_and_socketio):
    flask_app, socketio = app_and_socketio
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _make
    for c in clients:
        try:
            if c.is_connected():
                c.disconnect()
        except Exception:
            pass


@pytest.fixture()
def wait_for():
    """Poll a Socket.IO test client until an event shows up (timers run in threads)."""

    backlog = {}

    def _wait(sio_client, event, timeout=3.0):
        queue = backlog.setdefault(id(sio_client), [])
        seen = []
        deadline = time.time() + timeout
        while True:
            queue.extend(sio_client.get_received())
            while queue:
                pkt = queue.pop(0)
                seen.append(pkt['name'])
                if pkt['name'] == event:
                    return pkt['args'][0] if pkt['args'] else None
            if time.time() >= deadline:
                raise AssertionError(f"{event} not received; got {seen}")
            time.sleep(0.05)

    def _drain(sio_client):
        queue = backlog.setdefault(id(sio_client), [])
        queue.extend(sio_client.get_received())
        names = [pkt['name'] for pkt in queue]
        queue.clear()
        return names

    _wait.drain = _drain
    return _wait
