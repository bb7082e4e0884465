"""
Handicap Engine for the bowling league

League handicap formula: 90% of (220 - average), applied to every game bowled.

Example:
    - Bowler average: 180
    - Handicap = (220 - 180) * 0.9 = 36
    - Handicap score for a 175 game = 175 + 36 = 211

All functions here are pure. Score validation happens before these are
called (see league/forms/scores.py).
"""

import math
from typing import Sequence

from league.utils.records import SeriesTotals

HANDICAP_BASE = 220
HANDICAP_PERCENTAGE = 0.9


def round_half_up(value):
    """Round to the nearest integer, .5 going up (49.5 -> 50).

    Python's built-in round() uses banker's rounding (round(49.5) == 50 but
    round(48.5) == 48), so it is not used for handicaps.
    """
    return int(math.floor(value + 0.5))


def calculate_average(scores: Sequence[int]) -> float:
    """Mean of the given scores, 0 when there are none. Not rounded."""
    if not scores:
        return 0
    return sum(scores) / len(scores)


def calculate_handicap(average: float) -> int:
    """Handicap for an average; 0 once the average reaches the base."""
    if average >= HANDICAP_BASE:
        return 0
    return round_half_up((HANDICAP_BASE - average) * HANDICAP_PERCENTAGE)


def calculate_handicap_score(scratch_score: int, handicap: int) -> int:
    """Handicap score for a single game."""
    return scratch_score + handicap


def calculate_series_with_handicap(
    game_scores: Sequence[int], handicap: int
) -> SeriesTotals:
    """
    Scratch and handicap totals for a series.

    The handicap is added once per game bowled, so a two-game partial
    series gets twice the handicap, not three times.

    Args:
        game_scores: Scores of the games actually bowled
        handicap: Per-game handicap

    Returns:
        SeriesTotals(scratch, with_handicap)
    """
    scratch = sum(game_scores)
    return SeriesTotals(
        scratch=scratch, with_handicap=scratch + handicap * len(game_scores)
    )
