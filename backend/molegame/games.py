from dataclasses import dataclass
import random

from molegame.models import GameState
from molegame.services.games.controller import GameController
from molegame.services.games.scheduler import ManualScheduler, SocketIOScheduler
from molegame.view import SocketIOView

EXTENSION_KEY = 'molegame'


@dataclass
class Game:
    state: GameState
    view: object
    scheduler: object
    controller: GameController

    def snapshot(self):
        payload = self.state.to_dict()
        payload['tick_interval'] = self.controller.tick_interval
        return payload


def build_game(app, socketio, view=None, scheduler=None, rng=None) -> Game:
    """Construct state, view, scheduler and controller once and wire them together."""
    cfg = app.config
    if scheduler is None:
        if cfg.get('TESTING') and not cfg.get('ENABLE_SCHEDULER_IN_TESTS'):
            scheduler = ManualScheduler()
        else:
            scheduler = SocketIOScheduler(socketio, logger=app.logger)
    if view is None:
        view = SocketIOView(socketio)
    if rng is None and cfg.get('RANDOM_SEED') is not None:
        rng = random.Random(cfg['RANDOM_SEED'])

    state = GameState(
        board_size=int(cfg.get('BOARD_SIZE', 12)),
        round_duration=int(cfg.get('ROUND_DURATION_SEC', 30)),
        max_moles=int(cfg.get('MAX_MOLES', 3)),
        rng=rng,
    )
    controller = GameController(
        state,
        view,
        scheduler,
        tick_interval=float(cfg.get('TICK_INTERVAL_SEC', 1.0)),
        logger=app.logger,
    )
    controller.init()
    return Game(state=state, view=view, scheduler=scheduler, controller=controller)


def get_game(app) -> Game:
    return app.extensions[EXTENSION_KEY]
