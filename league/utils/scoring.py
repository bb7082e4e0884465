"""
Prediction Scoring Engine for the bowling league

This module turns (predicted, actual) pairs into points and aggregates
resolved results into leaderboards. Everything here works on in-memory
records; fetching rows is the job of league/services/league_service.py.
"""

from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Sequence

from league.utils.records import (
    ActualScore,
    LeaderboardEntry,
    PredictionInput,
    PredictionResult,
    WeeklySeries,
    WeeklyWinner,
)

# (max difference, points), checked in order; first match wins
POINTS_TIERS = (
    (0, 10),
    (10, 7),
    (25, 5),
    (50, 3),
    (75, 1),
)


def calculate_prediction_points(difference: int) -> int:
    """
    Points for a prediction that missed by ``difference`` pins.

    Returns:
        10 for an exact prediction
        7 within 10 pins
        5 within 25 pins
        3 within 50 pins
        1 within 75 pins
        0 for anything further off
    """
    for max_difference, points in POINTS_TIERS:
        if difference <= max_difference:
            return points
    return 0


def resolve_results(
    predictions: Iterable[PredictionInput], actuals: Iterable[ActualScore]
) -> List[PredictionResult]:
    """
    Pair each prediction with its target's actual score.

    A prediction whose target has no actual yet stays unresolved: its
    difference and points are None rather than 0.
    """
    actual_by_bowler: Dict[int, int] = {}
    for actual in actuals:
        # first actual recorded for a bowler wins
        actual_by_bowler.setdefault(actual.bowler_id, actual.value)

    results = []
    for prediction in predictions:
        actual = actual_by_bowler.get(prediction.target_id)
        difference = (
            abs(prediction.predicted - actual) if actual is not None else None
        )
        results.append(
            PredictionResult(
                predictor_id=prediction.predictor_id,
                target_id=prediction.target_id,
                predicted_score=prediction.predicted,
                actual_score=actual,
                difference=difference,
                points=(
                    calculate_prediction_points(difference)
                    if difference is not None
                    else None
                ),
                week_id=prediction.week_id,
                week_number=prediction.week_number,
                game_number=prediction.game_number,
            )
        )
    return results


def resolve_series_results(
    series_predictions: Iterable[PredictionInput],
    weekly_series: Sequence[WeeklySeries],
) -> List[PredictionResult]:
    """
    Resolve legacy series-total predictions.

    Deprecated: per-game predictions replaced these. The actual for each
    target is its series total for the prediction's week, and the result
    carries ``game_number=None``.
    """
    by_week: Dict[Optional[int], List[PredictionInput]] = OrderedDict()
    for prediction in series_predictions:
        by_week.setdefault(prediction.week_id, []).append(prediction)

    results = []
    for week_id, predictions in by_week.items():
        actuals = [
            ActualScore(bowler_id=series.bowler_id, value=series.series_total)
            for series in weekly_series
            if series.week_id == week_id and series.games_entered > 0
        ]
        results.extend(resolve_results(predictions, actuals))
    return results


def calculate_leaderboard(
    results: Iterable[PredictionResult],
) -> List[LeaderboardEntry]:
    """
    Aggregate resolved results into a leaderboard.

    Unresolved results are skipped, so a bowler whose predictions are all
    still pending does not appear at all. Sorted by total points (descending),
    then by average difference (ascending).
    """
    grouped: Dict[int, dict] = OrderedDict()
    for result in results:
        if result.points is None:
            continue

        data = grouped.setdefault(
            result.predictor_id, {"points": 0, "differences": [], "count": 0}
        )
        data["points"] += result.points
        if result.difference is not None:
            data["differences"].append(result.difference)
        data["count"] += 1

    leaderboard = [
        LeaderboardEntry(
            bowler_id=bowler_id,
            total_points=data["points"],
            avg_difference=(
                sum(data["differences"]) / len(data["differences"])
                if data["differences"]
                else 0
            ),
            predictions_count=data["count"],
        )
        for bowler_id, data in grouped.items()
    ]

    leaderboard.sort(key=lambda entry: (-entry.total_points, entry.avg_difference))
    return leaderboard


def calculate_weekly_leaderboard(
    results: Iterable[PredictionResult], week_id: int
) -> List[LeaderboardEntry]:
    """Leaderboard restricted to the results of a single week."""
    return calculate_leaderboard(r for r in results if r.week_id == week_id)


def calculate_weekly_winners(
    results: Iterable[PredictionResult],
) -> List[WeeklyWinner]:
    """Top predictor of every week that has resolved results, newest first."""
    by_week: Dict[int, List[PredictionResult]] = {}
    for result in results:
        if result.week_number is None:
            continue
        by_week.setdefault(result.week_number, []).append(result)

    winners = []
    for week_number, week_results in by_week.items():
        leaderboard = calculate_leaderboard(week_results)
        if not leaderboard:
            continue
        top = leaderboard[0]
        winners.append(
            WeeklyWinner(
                week_number=week_number,
                bowler_id=top.bowler_id,
                points=top.total_points,
            )
        )

    winners.sort(key=lambda w: w.week_number, reverse=True)
    return winners
