import os
import random
import sys
import pytest

# Ensure the backend root (containing the `bingo` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from bingo import create_app, get_room, socketio
from bingo.room import RoomStateMachine

NAMESPACE = '/ws'


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = ['http://localhost:5173']
    SOCKETIO_NAMESPACE = NAMESPACE
    ROOM_ID = 'TEST-ROOM'
    DEFAULT_LETTER = None
    RANDOM_SEED = 1234
    LOG_LEVEL = 'DEBUG'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def room_machine(flask_app):
    return get_room(flask_app)


@pytest.fixture()
def connect(flask_app):
    """Factory for Socket.IO test clients on the bingo namespace."""
    clients = []

    def _connect():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace=NAMESPACE,
        )
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected(NAMESPACE):
                test_client.disconnect(namespace=NAMESPACE)
        except Exception:
            pass


@pytest.fixture()
def machine():
    """A standalone state machine with deterministic randomness and ids."""
    counter = {'id': 0, 'secret': 0}

    def next_id():
        counter['id'] += 1
        return f"id-{counter['id']}"

    def next_secret():
        counter['secret'] += 1
        return f"secret-{counter['secret']}"

    return RoomStateMachine(
        room_id='UNIT-ROOM',
        rng=random.Random(42),
        id_factory=next_id,
        secret_factory=next_secret,
    )
