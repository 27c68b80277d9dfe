"""
Scoring System
==============

Tracks score and catch/miss counts for a session.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoreEvent:
    """Record of a catch."""
    points: int
    total: int
    milestone_reached: bool = False  # True when this catch crossed a speed milestone

    def __repr__(self) -> str:
        if self.milestone_reached:
            return f"ScoreEvent(+{self.points}, total={self.total}, milestone)"
        return f"ScoreEvent(+{self.points}, total={self.total})"


class ScoreTracker:
    """
    Tracks game score.

    Score only ever grows during a session; the only way back to zero is
    `reset()`.
    """

    POINTS_PER_CATCH = 1

    def __init__(self, milestone_every: int = 10):
        self._milestone_every = milestone_every
        self._score: int = 0
        self._catches: int = 0
        self._misses: int = 0

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    @property
    def catches(self) -> int:
        return self._catches

    @property
    def misses(self) -> int:
        return self._misses

    def apply_catch(self) -> ScoreEvent:
        """Award points for a catch and return the event."""
        before = self._score // self._milestone_every
        self._score += self.POINTS_PER_CATCH
        self._catches += 1
        after = self._score // self._milestone_every
        return ScoreEvent(
            points=self.POINTS_PER_CATCH,
            total=self._score,
            milestone_reached=after > before
        )

    def record_miss(self) -> None:
        self._misses += 1

    def reset(self) -> None:
        """Reset score to zero."""
        self._score = 0
        self._catches = 0
        self._misses = 0
