"""
Value records for the league engines.

These are plain in-memory structures with no database dependency. The
SQLAlchemy models convert themselves into these records (see ``to_record``)
before anything is handed to the handicap or prediction scoring engines.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class GameScore:
    """A single game bowled (or not yet bowled) by a bowler in a week."""

    bowler_id: int
    week_id: int
    game_number: int  # 1, 2 or 3
    score: Optional[int] = None  # None until the game is entered


@dataclass(frozen=True)
class WeeklySeries:
    """A bowler's games for one week, ordered by game number."""

    bowler_id: int
    week_id: int
    week_number: int
    game_scores: Tuple[int, ...] = ()

    @property
    def series_total(self) -> int:
        return sum(self.game_scores)

    @property
    def games_entered(self) -> int:
        return len(self.game_scores)


@dataclass(frozen=True)
class SeriesTotals:
    scratch: int
    with_handicap: int


@dataclass(frozen=True)
class BowlerStats:
    """All-time statistics for a bowler."""

    bowler_id: int
    total_games: int = 0
    average: float = 0.0
    handicap: int = 0
    high_game: int = 0
    low_game: int = 0
    total_pins: int = 0


@dataclass(frozen=True)
class PredictionInput:
    """A prediction reduced to what the scoring engine needs."""

    predictor_id: int
    target_id: int
    predicted: int
    week_id: Optional[int] = None
    week_number: Optional[int] = None
    game_number: Optional[int] = None  # None for series-total predictions


@dataclass(frozen=True)
class ActualScore:
    bowler_id: int
    value: int


@dataclass(frozen=True)
class PredictionResult:
    """A prediction paired with its outcome.

    ``actual_score``, ``difference`` and ``points`` are all None until the
    target's score is known. A resolved miss has ``points == 0``.
    """

    predictor_id: int
    target_id: int
    predicted_score: int
    actual_score: Optional[int] = None
    difference: Optional[int] = None
    points: Optional[int] = None
    week_id: Optional[int] = None
    week_number: Optional[int] = None
    game_number: Optional[int] = None

    @property
    def is_resolved(self) -> bool:
        return self.points is not None


@dataclass(frozen=True)
class LeaderboardEntry:
    bowler_id: int
    total_points: int
    avg_difference: float
    predictions_count: int


@dataclass(frozen=True)
class WeeklyWinner:
    week_number: int
    bowler_id: int
    points: int


@dataclass(frozen=True)
class HandicapPoint:
    """Cumulative average and handicap after a given week."""

    week_number: int
    average: float
    handicap: int
