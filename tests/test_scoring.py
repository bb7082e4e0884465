from league.utils.records import (
    ActualScore,
    PredictionInput,
    PredictionResult,
    WeeklySeries,
)
from league.utils.scoring import (
    calculate_leaderboard,
    calculate_prediction_points,
    calculate_weekly_leaderboard,
    calculate_weekly_winners,
    resolve_results,
    resolve_series_results,
)


def _result(predictor_id, difference, week_id=1, week_number=1, target_id=99):
    if difference is None:
        return PredictionResult(
            predictor_id=predictor_id,
            target_id=target_id,
            predicted_score=180,
            week_id=week_id,
            week_number=week_number,
            game_number=1,
        )
    return PredictionResult(
        predictor_id=predictor_id,
        target_id=target_id,
        predicted_score=180,
        actual_score=180 + difference,
        difference=difference,
        points=calculate_prediction_points(difference),
        week_id=week_id,
        week_number=week_number,
        game_number=1,
    )


def test_points_tier_boundaries():
    expected = {0: 10, 1: 7, 10: 7, 11: 5, 25: 5, 26: 3, 50: 3, 51: 1, 75: 1, 76: 0}
    for difference, points in expected.items():
        assert calculate_prediction_points(difference) == points, difference


def test_points_never_increase_with_difference():
    points = [calculate_prediction_points(d) for d in range(0, 301)]
    assert all(a >= b for a, b in zip(points, points[1:]))
    assert points[-1] == 0


def test_resolve_results_scores_absolute_difference():
    predictions = [
        PredictionInput(predictor_id=1, target_id=2, predicted=180),
        PredictionInput(predictor_id=3, target_id=2, predicted=170),
    ]
    over, under = resolve_results(predictions, [ActualScore(bowler_id=2, value=175)])

    assert over.difference == 5 and over.points == 7
    assert under.difference == 5 and under.points == 7
    assert over.actual_score == 175


def test_resolve_results_leaves_missing_actuals_unresolved():
    (result,) = resolve_results(
        [PredictionInput(predictor_id=1, target_id=2, predicted=180)], []
    )

    assert result.actual_score is None
    assert result.difference is None
    assert result.points is None
    assert not result.is_resolved


def test_resolved_miss_scores_zero_not_none():
    (result,) = resolve_results(
        [PredictionInput(predictor_id=1, target_id=2, predicted=280)],
        [ActualScore(bowler_id=2, value=100)],
    )
    assert result.points == 0
    assert result.is_resolved


def test_resolve_results_uses_first_actual_for_a_bowler():
    (result,) = resolve_results(
        [PredictionInput(predictor_id=1, target_id=2, predicted=200)],
        [ActualScore(bowler_id=2, value=200), ActualScore(bowler_id=2, value=100)],
    )
    assert result.actual_score == 200
    assert result.points == 10


def test_resolve_results_keeps_prediction_context():
    (result,) = resolve_results(
        [
            PredictionInput(
                predictor_id=1,
                target_id=2,
                predicted=200,
                week_id=7,
                week_number=3,
                game_number=2,
            )
        ],
        [ActualScore(bowler_id=2, value=190)],
    )
    assert (result.week_id, result.week_number, result.game_number) == (7, 3, 2)


def test_leaderboard_skips_unresolved_predictors():
    leaderboard = calculate_leaderboard([_result(1, 5), _result(2, None)])
    assert [entry.bowler_id for entry in leaderboard] == [1]


def test_leaderboard_tie_broken_by_lower_average_difference():
    # Both have 7 points; B (2) missed by less on average
    leaderboard = calculate_leaderboard([_result(1, 10), _result(2, 5)])

    assert [entry.bowler_id for entry in leaderboard] == [2, 1]
    assert leaderboard[0].total_points == leaderboard[1].total_points == 7


def test_leaderboard_sorted_by_points():
    leaderboard = calculate_leaderboard(
        [_result(1, 60), _result(2, 0), _result(2, 30), _result(3, 8)]
    )
    assert [(e.bowler_id, e.total_points) for e in leaderboard] == [
        (2, 13),
        (3, 7),
        (1, 1),
    ]


def test_leaderboard_average_difference_uses_resolved_results_only():
    (entry,) = calculate_leaderboard([_result(1, 4), _result(1, None)])
    assert entry.predictions_count == 1
    assert entry.avg_difference == 4


def test_leaderboard_totals_match_regrouped_results():
    results = [
        _result(1, 0),
        _result(1, 12),
        _result(2, 40),
        _result(3, None),
        _result(2, 3, week_id=2, week_number=2),
    ]
    totals = {}
    for r in results:
        if r.points is not None:
            totals[r.predictor_id] = totals.get(r.predictor_id, 0) + r.points

    leaderboard = calculate_leaderboard(results)
    assert {e.bowler_id: e.total_points for e in leaderboard} == totals


def test_weekly_leaderboard_filters_by_week():
    results = [_result(1, 0, week_id=1), _result(2, 0, week_id=2)]
    leaderboard = calculate_weekly_leaderboard(results, 2)
    assert [entry.bowler_id for entry in leaderboard] == [2]


def test_weekly_winners_newest_first():
    results = [
        _result(1, 0, week_id=10, week_number=1),
        _result(2, 30, week_id=10, week_number=1),
        _result(2, 0, week_id=11, week_number=2),
        _result(1, 60, week_id=11, week_number=2),
        _result(3, None, week_id=12, week_number=3),
    ]
    winners = calculate_weekly_winners(results)

    assert [(w.week_number, w.bowler_id, w.points) for w in winners] == [
        (2, 2, 10),
        (1, 1, 10),
    ]


def test_series_predictions_resolve_against_series_totals():
    series = [WeeklySeries(bowler_id=2, week_id=5, week_number=1, game_scores=(150, 180))]
    predictions = [
        PredictionInput(predictor_id=1, target_id=2, predicted=340, week_id=5),
        PredictionInput(predictor_id=1, target_id=3, predicted=500, week_id=5),
    ]
    resolved, pending = resolve_series_results(predictions, series)

    assert resolved.actual_score == 330
    assert resolved.difference == 10
    assert resolved.points == 7
    assert resolved.game_number is None
    assert pending.points is None


def test_series_predictions_only_match_their_week():
    series = [WeeklySeries(bowler_id=2, week_id=6, week_number=2, game_scores=(200,))]
    (result,) = resolve_series_results(
        [PredictionInput(predictor_id=1, target_id=2, predicted=200, week_id=5)],
        series,
    )
    assert result.points is None
