from league.utils.records import BowlerStats, GameScore, WeeklySeries
from league.utils.stats import (
    build_all_bowler_stats,
    build_bowler_stats,
    build_weekly_series,
    handicap_trend,
    high_series,
    team_summary,
)


def test_weekly_series_orders_games_and_skips_blank_scores():
    games = [
        GameScore(bowler_id=1, week_id=10, game_number=2, score=180),
        GameScore(bowler_id=1, week_id=10, game_number=3, score=None),
        GameScore(bowler_id=1, week_id=10, game_number=1, score=150),
    ]
    (series,) = build_weekly_series(games, {10: 1})

    assert series.game_scores == (150, 180)
    assert series.series_total == 330
    assert series.games_entered == 2
    assert series.week_number == 1


def test_weekly_series_records_are_hashable():
    games = [GameScore(bowler_id=1, week_id=10, game_number=1, score=200)]
    first = build_weekly_series(games, {10: 1})[0]
    second = build_weekly_series(games, {10: 1})[0]

    assert isinstance(first.game_scores, tuple)
    assert len({first, second}) == 1


def test_bowler_with_no_games_is_not_given_maximum_handicap():
    stats = build_bowler_stats(4, [])
    assert stats.average == 0
    assert stats.handicap == 0


def test_weekly_series_sorted_by_week_then_bowler():
    games = [
        GameScore(bowler_id=2, week_id=11, game_number=1, score=100),
        GameScore(bowler_id=2, week_id=10, game_number=1, score=110),
        GameScore(bowler_id=1, week_id=10, game_number=1, score=120),
    ]
    series = build_weekly_series(games, {10: 1, 11: 2})
    assert [(s.week_number, s.bowler_id) for s in series] == [(1, 1), (1, 2), (2, 2)]


def test_weekly_series_skips_unknown_weeks():
    games = [GameScore(bowler_id=1, week_id=99, game_number=1, score=200)]
    assert build_weekly_series(games, {10: 1}) == []


def test_bowler_with_no_games_gets_zeroed_stats():
    assert build_bowler_stats(4, []) == BowlerStats(bowler_id=4)
    assert build_bowler_stats(4, []).handicap == 0


def test_bowler_stats():
    stats = build_bowler_stats(1, [150, 180])

    assert stats.total_games == 2
    assert stats.average == 165
    assert stats.handicap == 50
    assert stats.high_game == 180
    assert stats.low_game == 150
    assert stats.total_pins == 330


def test_all_bowler_stats_ignores_blank_scores():
    games = [
        GameScore(bowler_id=1, week_id=10, game_number=1, score=200),
        GameScore(bowler_id=1, week_id=10, game_number=2, score=None),
        GameScore(bowler_id=2, week_id=10, game_number=1, score=None),
    ]
    first, second = build_all_bowler_stats(games)

    assert first.total_games == 1 and first.average == 200
    assert second == BowlerStats(bowler_id=2)


def test_handicap_trend_is_cumulative():
    series = [
        WeeklySeries(bowler_id=1, week_id=11, week_number=2, game_scores=(140, 140, 140)),
        WeeklySeries(bowler_id=1, week_id=10, week_number=1, game_scores=(200, 200, 200)),
    ]
    (week_one, week_two) = handicap_trend(series)[1]

    assert (week_one.week_number, week_one.average, week_one.handicap) == (1, 200, 18)
    assert (week_two.week_number, week_two.average, week_two.handicap) == (2, 170, 45)


def test_high_series():
    series = [
        WeeklySeries(bowler_id=1, week_id=10, week_number=1, game_scores=(150, 150)),
        WeeklySeries(bowler_id=1, week_id=11, week_number=2, game_scores=(200, 210)),
        WeeklySeries(bowler_id=2, week_id=10, week_number=1, game_scores=(100,)),
    ]
    assert high_series(series) == {1: 410, 2: 100}


def test_team_summary():
    stats = [
        build_bowler_stats(1, [150, 180]),
        build_bowler_stats(2, [200, 200]),
        BowlerStats(bowler_id=3),
    ]
    summary = team_summary(stats)

    assert summary["team_average"] == 182.5
    assert summary["team_high_game"] == 200
    assert summary["total_games"] == 4
    assert summary["total_pins"] == 730


def test_team_summary_without_games():
    assert team_summary([BowlerStats(bowler_id=1)]) == {
        "team_average": 0,
        "team_high_game": 0,
        "total_games": 0,
        "total_pins": 0,
    }
