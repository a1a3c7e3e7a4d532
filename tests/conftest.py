import os
import sys
import pytest

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure the project root (containing `core` and `services`) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from database import Base, Settings
from core.game_data_store import SqlGameDataStore
from core.scoreboard_manager import ScoreboardManager
from services.naming_service import normalize_roster
import models  # noqa: F401


class FakeDataStore:
    """In-memory stand-in for the persistence gateway."""

    def __init__(self, names=None, state=None):
        self.names = list(names) if names is not None else []
        self.state = state
        self.save_count = 0
        self.clear_count = 0

    def load_player_names(self):
        return normalize_roster(self.names)

    def save_player_names(self, names):
        self.names = list(names[:6])

    def load_game_state(self):
        return self.state

    def save_game_state(self, state):
        self.state = state
        self.save_count += 1

    def clear_game_data(self):
        self.state = None
        self.clear_count += 1


class ManualTimer:
    """threading.Timer look-alike that only fires when the test says so."""

    def __init__(self, interval, function, args=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if not self.cancelled:
            self.function(*self.args)


class ManualTimerFactory:
    def __init__(self):
        self.timers = []

    def __call__(self, interval, function, args=None):
        timer = ManualTimer(interval, function, args)
        self.timers.append(timer)
        return timer

    @property
    def latest(self):
        return self.timers[-1]


@pytest.fixture()
def test_settings():
    return Settings(database_url='sqlite://', autosave_debounce_ms=500, default_player_count=4)


@pytest.fixture()
def make_data_store():
    return FakeDataStore


@pytest.fixture()
def data_store():
    return FakeDataStore()


@pytest.fixture()
def timer_factory():
    return ManualTimerFactory()


@pytest.fixture()
def make_scoreboard(test_settings, timer_factory):
    def _make(store):
        return ScoreboardManager(store, settings=test_settings, timer_factory=timer_factory)
    return _make


@pytest.fixture()
def scoreboard(make_scoreboard, data_store):
    return make_scoreboard(data_store)


@pytest.fixture()
def session_factory():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def sql_store(session_factory):
    return SqlGameDataStore(session_factory)
