import logging
import threading
from typing import Optional

from molegame.models import GameState


class GameController:
    """Round lifecycle and game rules.

    Owns the two periodic ticks (mole spawn and countdown), mutates the
    GameState and pushes the resulting changes to the view. All entry
    points share one re-entrant lock, so callbacks coming from scheduler
    threads and from input handlers never interleave.
    """

    def __init__(self, state: GameState, view, scheduler, tick_interval: float = 1.0,
                 logger: Optional[logging.Logger] = None):
        self.state = state
        self.view = view
        self.scheduler = scheduler
        self.tick_interval = tick_interval
        self.logger = logger or logging.getLogger(__name__)
        self.spawn_tick = None
        self.timer_tick = None
        self.rounds_ended = 0
        self.moles_spawned = 0
        self._tick_generation = 0
        self._lock = threading.RLock()

    def init(self) -> None:
        with self._lock:
            self.state.init_holes()
            self.view.render_board(self.state.holes)

            self.view.bind_start_click(self.handle_start_click)
            self.view.bind_hole_click(self.handle_hole_click)

            self.view.update_score(self.state.score)
            self.view.update_timer(self.state.timer)

    def handle_hole_click(self, hole_id) -> bool:
        with self._lock:
            self.logger.debug(f"[hole-click] id={hole_id} active={self.state.is_game_active}")
            if not self.state.is_game_active or not self.state.has_mole(hole_id):
                self.logger.debug(f"[hole-miss] id={hole_id}")
                return False

            self.state.remove_mole(hole_id)
            self.view.update_hole(hole_id, False)

            self.state.increment_score()
            self.view.update_score(self.state.score)
            self.logger.debug(f"[hole-hit] id={hole_id} score={self.state.score}")
            return True

    def handle_start_click(self) -> None:
        with self._lock:
            self.stop_game()

            self.state.reset_score()
            self.state.reset_timer()
            self.state.init_holes()
            self.state.set_active(True)
            self.moles_spawned = 0

            self.view.update_score(self.state.score)
            self.view.update_timer(self.state.timer)
            self.view.reset_board()

            self.start_game()
            self.logger.info(
                f"[round-start] duration={self.state.round_duration} board={self.state.board_size} "
                f"max_moles={self.state.max_moles}"
            )

    def start_game(self) -> None:
        with self._lock:
            self.clear_ticks()
            # spawn first so same-instant firings run spawn before countdown
            generation = self._tick_generation
            self.spawn_tick = self.scheduler.every(
                self.tick_interval, self._guarded(generation, self.generate_mole), name='spawn')
            self.timer_tick = self.scheduler.every(
                self.tick_interval, self._guarded(generation, self.update_timer), name='timer')
            self.logger.info(f"[tick-set] spawn,timer interval={self.tick_interval}s")

    def _guarded(self, generation: int, callback):
        """Wrap a tick callback so firings from an earlier pair of ticks do nothing.

        A worker may pass its own cancelled check and then wait on the lock
        while a restart runs; the generation is re-checked once the lock is held.
        """
        def _fire():
            with self._lock:
                if generation != self._tick_generation:
                    self.logger.debug(f"[tick-stale] generation={generation}")
                    return None
                return callback()
        _fire.__name__ = callback.__name__
        return _fire

    def generate_mole(self) -> Optional[int]:
        with self._lock:
            if not self.state.is_game_active or not self.state.can_add_mole():
                return None

            hole_id = self.state.random_empty_hole()
            if hole_id is None or not self.state.add_mole(hole_id):
                return None
            self.moles_spawned += 1
            self.view.update_hole(hole_id, True)
            self.logger.debug(f"[mole-spawn] id={hole_id} active_moles={self.state.active_mole_count}")
            return hole_id

    def update_timer(self) -> Optional[int]:
        with self._lock:
            if not self.state.is_game_active:
                return None

            time_left = self.state.decrement_timer()
            self.view.update_timer(time_left)

            if self.state.is_game_over():
                self.end_game()
            return time_left

    def end_game(self) -> None:
        with self._lock:
            self.state.set_active(False)
            self.clear_ticks()
            self.rounds_ended += 1
            self.logger.info(f"[round-end] score={self.state.score}")
            self.view.notify_round_over(self.state.score)

    def stop_game(self) -> None:
        with self._lock:
            if self.state.is_game_active:
                self.logger.info(f"[round-stop] timer={self.state.timer} score={self.state.score}")
            self.state.set_active(False)
            self.clear_ticks()

    def clear_ticks(self) -> None:
        with self._lock:
            for tick in (self.spawn_tick, self.timer_tick):
                if tick is not None and not tick.cancelled:
                    tick.cancel()
                    self.logger.info(f"[tick-cancel] name={tick.name}")
            self.spawn_tick = None
            self.timer_tick = None
            self._tick_generation += 1
