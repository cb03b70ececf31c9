from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config import Config


class Cause(str, Enum):
    DESTROYED = "destroyed"   # Lives shot down to zero
    CRASHED = "crashed"       # Flew into the ground or a building


@dataclass(frozen=True)
class GameResult:
    """Final pair handed to the leaderboard layer when the game ends."""
    score: int
    wave: int
    cause: Cause


class GameState:
    """
    Score/lives/wave bookkeeping and the one-way Playing -> GameOver transition.

    Once terminal the state freezes: every mutator becomes a no-op, so a
    component that runs late in a tick cannot change the final result.
    """

    def __init__(self):
        self.cfg = Config
        self.score = 0
        self.lives = self.cfg.MAX_LIVES
        self.wave = 1
        self.pending = 0          # Enemies promised by the wave director and not yet resolved
        self.cause: Optional[Cause] = None
        self.result: Optional[GameResult] = None

    @property
    def terminal(self):
        return self.cause is not None

    def add_score(self, points):
        if self.terminal:
            return
        self.score += max(0, int(points))

    def damage(self, amount):
        """Subtract lives; ends the game as DESTROYED when they run out."""
        if self.terminal:
            return
        self.lives = max(0, min(self.cfg.MAX_LIVES, self.lives - amount))
        if self.lives <= 0:
            self.end(Cause.DESTROYED)

    def heal(self, amount):
        if self.terminal:
            return
        self.lives = min(self.cfg.MAX_LIVES, self.lives + amount)

    def crash(self):
        if self.terminal:
            return
        self.lives = 0
        self.end(Cause.CRASHED)

    def advance_wave(self):
        if self.terminal:
            return
        self.wave += 1

    def add_pending(self, n=1):
        if self.terminal:
            return
        self.pending += n

    def resolve_pending(self, n=1):
        if self.terminal:
            return
        self.pending = max(0, self.pending - n)

    def end(self, cause):
        """Enter GameOver. Idempotent: only the first call has any effect."""
        if self.terminal:
            return None
        self.cause = Cause(cause)
        self.result = GameResult(score=self.score, wave=self.wave, cause=self.cause)
        return self.result
