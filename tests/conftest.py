import os
import random
import sys
import tempfile

import pytest

# Keep test logs out of the working tree
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='tinywords-logs-'))

# Ensure the project root (containing the `tinywords` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from tinywords import create_app
from tinywords.config import TestingConfig
from tinywords.models.game import Puzzle
from tinywords.services.dictionary_service import WordValidityChecker
from tinywords.services.game_service import GameService, set_game_service
from tinywords.services.stats_service import MemoryStore, StatsLedger
from tinywords.services.word_source import build_hints

from fakes import FakeDictionaryClient, FixedClock


@pytest.fixture()
def dictionary_client():
    return FakeDictionaryClient()


@pytest.fixture()
def checker(dictionary_client):
    return WordValidityChecker(client=dictionary_client)


@pytest.fixture()
def clock():
    return FixedClock()


@pytest.fixture()
def ledger(clock):
    return StatsLedger(MemoryStore(), clock=clock)


@pytest.fixture()
def apple():
    return Puzzle(word='APPLE', hints=tuple(build_hints('APPLE')))


@pytest.fixture()
def game_service(dictionary_client, clock):
    service = GameService(catalog=None, dictionary_client=dictionary_client,
                          clock=clock, rng=random.Random(7))
    set_game_service(service)
    yield service
    set_game_service(None)


@pytest.fixture()
def flask_app(game_service):
    app, _ = create_app(TestingConfig)
    yield app


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(game_service):
    app, socketio = create_app(TestingConfig)
    test_client = socketio.test_client(app, flask_test_client=app.test_client())
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()
