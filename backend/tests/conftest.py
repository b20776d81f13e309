import os
import random
import sys
import pytest

# Ensure the backend root (containing the `molegame` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from molegame import create_app, socketio
from molegame.games import get_game
from molegame.models import GameState
from molegame.services.games.controller import GameController
from molegame.services.games.scheduler import ManualScheduler
from molegame.view import BaseView


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    RANDOM_SEED = 1234
    ROUND_DURATION_SEC = 30
    BOARD_SIZE = 12
    MAX_MOLES = 3
    TICK_INTERVAL_SEC = 1.0
    CONTROLLER_DEBOUNCE_MS = 0


class RecordingView(BaseView):
    """Collects presentation calls as (name, args) tuples."""

    def __init__(self):
        super().__init__()
        self.calls = []

    def named(self, name):
        return [args for call, args in self.calls if call == name]

    def render_board(self, holes):
        self._build_handles(holes)
        self.calls.append(('render_board', ([h.to_dict() for h in holes],)))

    def update_hole(self, hole_id, has_mole):
        self.calls.append(('update_hole', (hole_id, has_mole)))

    def update_score(self, score):
        self.calls.append(('update_score', (score,)))

    def update_timer(self, seconds):
        self.calls.append(('update_timer', (seconds,)))

    def reset_board(self):
        self.calls.append(('reset_board', ()))

    def notify_round_over(self, score):
        self.calls.append(('notify_round_over', (score,)))


@pytest.fixture()
def state():
    s = GameState(rng=random.Random(7))
    s.init_holes()
    return s


@pytest.fixture()
def view():
    return RecordingView()


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def controller(view, scheduler):
    c = GameController(GameState(rng=random.Random(7)), view, scheduler, tick_interval=1.0)
    c.init()
    return c


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application
        get_game(application).controller.stop_game()


@pytest.fixture()
def game(flask_app):
    return get_game(flask_app)


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def runner(flask_app):
    return flask_app.test_cli_runner()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
