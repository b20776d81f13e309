import random
from dataclasses import dataclass
from typing import List, Optional

ROUND_DURATION_SEC = 30
BOARD_SIZE = 12
MAX_MOLES = 3


@dataclass
class Hole:
    id: int
    has_mole: bool = False

    def to_dict(self):
        return {
            'id': self.id,
            'has_mole': self.has_mole,
        }


class GameState:
    """Authoritative state of the current round.

    Created once per application and mutated in place. A new round clears
    the board and resets score/timer instead of building a new instance.
    Every mutator is total: invalid requests are no-ops that report False.
    """

    def __init__(self, board_size: int = BOARD_SIZE, round_duration: int = ROUND_DURATION_SEC,
                 max_moles: int = MAX_MOLES, rng: Optional[random.Random] = None):
        self.board_size = board_size
        self.round_duration = round_duration
        self.max_moles = max_moles
        self.holes: List[Hole] = []
        self.score = 0
        self.timer = round_duration
        self.is_game_active = False
        self._active_mole_count = 0
        self._rng = rng or random.Random()

    @property
    def active_mole_count(self) -> int:
        return self._active_mole_count

    def init_holes(self) -> None:
        self.holes = [Hole(id=i) for i in range(self.board_size)]
        self._active_mole_count = 0

    def _in_range(self, hole_id) -> bool:
        # bool is an int subclass but never a valid hole id
        if not isinstance(hole_id, int) or isinstance(hole_id, bool):
            return False
        return 0 <= hole_id < len(self.holes)

    def has_mole(self, hole_id) -> bool:
        return self._in_range(hole_id) and self.holes[hole_id].has_mole

    def random_empty_hole(self) -> Optional[int]:
        """Return a uniformly chosen empty hole id, or None when the board is full."""
        empty = [hole.id for hole in self.holes if not hole.has_mole]
        if not empty:
            return None
        return self._rng.choice(empty)

    def add_mole(self, hole_id) -> bool:
        if not self._in_range(hole_id) or self.holes[hole_id].has_mole:
            return False
        self.holes[hole_id].has_mole = True
        self._active_mole_count += 1
        return True

    def remove_mole(self, hole_id) -> bool:
        if not self._in_range(hole_id) or not self.holes[hole_id].has_mole:
            return False
        self.holes[hole_id].has_mole = False
        self._active_mole_count -= 1
        return True

    def increment_score(self) -> None:
        self.score += 1

    def reset_score(self) -> None:
        self.score = 0

    def decrement_timer(self) -> int:
        if self.timer > 0:
            self.timer -= 1
        return self.timer

    def reset_timer(self) -> None:
        self.timer = self.round_duration

    def is_game_over(self) -> bool:
        return self.timer <= 0

    def set_active(self, active: bool) -> None:
        self.is_game_active = bool(active)

    def can_add_mole(self) -> bool:
        return self._active_mole_count < self.max_moles

    def to_dict(self):
        return {
            'holes': [hole.to_dict() for hole in self.holes],
            'score': self.score,
            'timer': self.timer,
            'is_game_active': self.is_game_active,
            'active_mole_count': self._active_mole_count,
            'max_moles': self.max_moles,
            'round_duration': self.round_duration,
            'board_size': self.board_size,
        }
