"""Presentation boundary.

The controller talks to a view through ``render_board``, ``update_hole``,
``update_score``, ``update_timer``, ``reset_board`` and
``notify_round_over``. Input arrives through the handlers registered with
``bind_start_click`` and ``bind_hole_click``; transports call
``dispatch_start`` and ``dispatch_hole_click`` to invoke them.
"""

from typing import Callable, Dict, Optional

ROUND_OVER_MESSAGE = 'Time is up !!!'


def score_message(score: int) -> str:
    return f"Let's Go, your total score is {score}"


class BaseView:
    def __init__(self):
        self._start_handler: Optional[Callable[[], object]] = None
        self._hole_handler: Optional[Callable[[int], object]] = None
        # hole id -> display handle, rebuilt on every full render
        self._handles: Dict[int, str] = {}

    def bind_start_click(self, handler):
        self._start_handler = handler

    def bind_hole_click(self, handler):
        self._hole_handler = handler

    def dispatch_start(self):
        if self._start_handler is None:
            return None
        return self._start_handler()

    def dispatch_hole_click(self, hole_id):
        if self._hole_handler is None:
            return False
        return self._hole_handler(hole_id)

    def handle_for(self, hole_id) -> Optional[str]:
        return self._handles.get(hole_id)

    def _build_handles(self, holes):
        self._handles = {hole.id: f"hole-{hole.id}" for hole in holes}

    def render_board(self, holes):
        raise NotImplementedError

    def update_hole(self, hole_id, has_mole):
        raise NotImplementedError

    def update_score(self, score):
        raise NotImplementedError

    def update_timer(self, seconds):
        raise NotImplementedError

    def reset_board(self):
        raise NotImplementedError

    def notify_round_over(self, score):
        raise NotImplementedError


class SocketIOView(BaseView):
    """Broadcasts every presentation call to browser clients on a namespace."""

    def __init__(self, socketio, namespace='/ws'):
        super().__init__()
        self.socketio = socketio
        self.namespace = namespace

    def _emit(self, event, payload):
        self.socketio.emit(event, payload, namespace=self.namespace)

    def render_board(self, holes):
        self._build_handles(holes)
        self._emit('board_rendered', {
            'holes': [dict(hole.to_dict(), handle=self._handles[hole.id]) for hole in holes],
        })

    def update_hole(self, hole_id, has_mole):
        handle = self.handle_for(hole_id)
        if handle is None:
            return
        self._emit('hole_updated', {'id': hole_id, 'handle': handle, 'has_mole': bool(has_mole)})

    def update_score(self, score):
        self._emit('score_updated', {'score': score, 'message': score_message(score)})

    def update_timer(self, seconds):
        self._emit('timer_updated', {'seconds': seconds})

    def reset_board(self):
        self._emit('board_reset', {})

    def notify_round_over(self, score):
        # socketio.emit only queues the packet; the next round can start right away
        self._emit('round_over', {'score': score, 'message': ROUND_OVER_MESSAGE})


class LoggingView(BaseView):
    """Headless view that writes presentation calls to a logger."""

    def __init__(self, logger):
        super().__init__()
        self.logger = logger

    def render_board(self, holes):
        self._build_handles(holes)
        self.logger.info(f"[view] board holes={len(holes)}")

    def update_hole(self, hole_id, has_mole):
        handle = self.handle_for(hole_id)
        if handle is None:
            return
        self.logger.info(f"[view] hole {handle} has_mole={has_mole}")

    def update_score(self, score):
        self.logger.info(f"[view] {score_message(score)}")

    def update_timer(self, seconds):
        self.logger.info(f"[view] timer={seconds}")

    def reset_board(self):
        self.logger.info("[view] board reset")

    def notify_round_over(self, score):
        self.logger.info(f"[view] {ROUND_OVER_MESSAGE} score={score}")
