from typing import Callable, List, Optional


class PeriodicTick:
    """Handle for one periodic callback. Cancelling it stops future firings."""

    def __init__(self, name: str, interval: float, callback: Callable[[], object]):
        self.name = name
        self.interval = interval
        self.callback = callback
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True

    def __repr__(self):
        state = 'cancelled' if self._cancelled else 'live'
        return f"<PeriodicTick {self.name} every={self.interval}s {state}>"


class SocketIOScheduler:
    """Runs each periodic tick as a Socket.IO background task.

    The task sleeps with ``socketio.sleep`` so it cooperates with whichever
    async mode the server picked (threading, eventlet or gevent).
    """

    def __init__(self, socketio, logger=None):
        self.socketio = socketio
        self.logger = logger
        self._ticks: List[PeriodicTick] = []

    @property
    def live_ticks(self) -> List[PeriodicTick]:
        self._ticks = [t for t in self._ticks if not t.cancelled]
        return list(self._ticks)

    def every(self, interval: float, callback: Callable[[], object], name: Optional[str] = None) -> PeriodicTick:
        tick = PeriodicTick(name or getattr(callback, '__name__', 'tick'), interval, callback)
        # drop cancelled handles
        self._ticks = [t for t in self._ticks if not t.cancelled]
        self._ticks.append(tick)

        def _worker(handle: PeriodicTick):
            while not handle.cancelled:
                self.socketio.sleep(handle.interval)
                if handle.cancelled:
                    break
                handle.callback()
            if self.logger:
                self.logger.debug(f"[tick-exit] name={handle.name}")

        self.socketio.start_background_task(_worker, tick)
        return tick


class ManualScheduler:
    """Deterministic scheduler driven by an explicit clock.

    Nothing fires until ``advance`` is called. Ticks due at the same instant
    fire in the order they were registered.
    """

    def __init__(self):
        self.now = 0.0
        self._seq = 0
        # [next_due, seq, tick]
        self._entries: List[list] = []

    @property
    def live_ticks(self) -> List[PeriodicTick]:
        return [entry[2] for entry in self._entries if not entry[2].cancelled]

    def every(self, interval: float, callback: Callable[[], object], name: Optional[str] = None) -> PeriodicTick:
        if interval <= 0:
            raise ValueError('interval must be positive')
        tick = PeriodicTick(name or getattr(callback, '__name__', 'tick'), interval, callback)
        self._entries.append([self.now + interval, self._seq, tick])
        self._seq += 1
        return tick

    def advance(self, seconds: float) -> int:
        """Move the clock forward, firing every tick that falls due. Returns the number of firings."""
        target = self.now + seconds
        fired = 0
        while True:
            self._entries = [e for e in self._entries if not e[2].cancelled]
            due = [e for e in self._entries if e[0] <= target]
            if not due:
                break
            entry = min(due, key=lambda e: (e[0], e[1]))
            self.now = entry[0]
            entry[0] += entry[2].interval
            entry[2].callback()
            fired += 1
        self.now = target
        return fired
