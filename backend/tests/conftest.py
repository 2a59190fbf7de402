import os
import random
import sys
from datetime import datetime, timedelta, timezone

import pytest

# Ensure the backend root (containing the `reaction_game` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from reaction_game import create_app, db, socketio
from reaction_game.services.game import install_controller


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CUE_DELAY_MIN_MS = 1000
    CUE_DELAY_MAX_MS = 5000
    RANKING_SIZE = 10
    RANKINGS_STORAGE_KEY = 'reactionGameRankings'
    CORS_ORIGINS = ['http://localhost:5173']


class FakeClock:
    """Monotonic millisecond clock the test advances by hand."""

    def __init__(self, start_ms=10_000):
        self.ms = start_ms

    def __call__(self):
        return self.ms

    def advance(self, ms):
        self.ms += ms


class FakeNow:
    def __init__(self):
        self.value = datetime(2026, 10, 19, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        self.value += timedelta(seconds=1)
        return self.value


class ManualTimer:
    """Cue timer that only fires when the test says so."""

    def __init__(self):
        self.pending = None
        self.scheduled = []
        self.cancelled = 0

    def schedule(self, delay_ms, callback, *args):
        self.pending = (delay_ms, callback, args)
        self.scheduled.append(delay_ms)

    def cancel(self):
        if self.pending is not None:
            self.cancelled += 1
        self.pending = None

    def fire(self):
        assert self.pending is not None, 'no cue scheduled'
        _delay, callback, args = self.pending
        self.pending = None
        return callback(*args)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def timer():
    return ManualTimer()


@pytest.fixture()
def flask_app(clock, timer):
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import reaction_game.models  # noqa: F401
        db.create_all()
        install_controller(application, timer=timer, clock=clock, now=FakeNow(), rng=random.Random(1234))
        yield application
        application.extensions['reaction_game'].close()
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def controller(flask_app):
    return flask_app.extensions['reaction_game']


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    if test_client.is_connected('/ws'):
        test_client.disconnect(namespace='/ws')
