"""
Derived bowler statistics built on the handicap engine.

Weekly series, all-time bowler stats, handicap trends and team summaries are
recomputed from GameScore records on every call; nothing here is cached.
"""

from collections import OrderedDict
from typing import Dict, Iterable, List, Mapping, Sequence

from league.utils.handicap import calculate_average, calculate_handicap
from league.utils.records import BowlerStats, GameScore, HandicapPoint, WeeklySeries


def build_weekly_series(
    game_scores: Iterable[GameScore], week_numbers: Mapping[int, int]
) -> List[WeeklySeries]:
    """
    Group game scores into one series per (bowler, week).

    Games without a score are left out, so ``games_entered`` counts only
    games actually bowled. Weeks missing from ``week_numbers`` are treated
    as unknown and skipped.

    Args:
        game_scores: GameScore records, any order
        week_numbers: Mapping of week_id to week_number

    Returns:
        WeeklySeries ordered by week number, then bowler id
    """
    grouped: Dict[tuple, List[GameScore]] = OrderedDict()
    for game in game_scores:
        if game.score is None or game.week_id not in week_numbers:
            continue
        grouped.setdefault((game.bowler_id, game.week_id), []).append(game)

    series = [
        WeeklySeries(
            bowler_id=bowler_id,
            week_id=week_id,
            week_number=week_numbers[week_id],
            game_scores=tuple(
                g.score for g in sorted(games, key=lambda g: g.game_number)
            ),
        )
        for (bowler_id, week_id), games in grouped.items()
    ]
    series.sort(key=lambda s: (s.week_number, s.bowler_id))
    return series


def build_bowler_stats(bowler_id: int, scores: Sequence[int]) -> BowlerStats:
    """All-time stats from every score a bowler has entered."""
    if not scores:
        # Deliberately 0, not calculate_handicap(0) == 198: a bowler with no
        # games has no established average to handicap from
        return BowlerStats(bowler_id=bowler_id)

    average = calculate_average(scores)
    return BowlerStats(
        bowler_id=bowler_id,
        total_games=len(scores),
        average=average,
        handicap=calculate_handicap(average),
        high_game=max(scores),
        low_game=min(scores),
        total_pins=sum(scores),
    )


def build_all_bowler_stats(game_scores: Iterable[GameScore]) -> List[BowlerStats]:
    """Stats for every bowler that appears in ``game_scores``."""
    scores_by_bowler: Dict[int, List[int]] = OrderedDict()
    for game in game_scores:
        scores = scores_by_bowler.setdefault(game.bowler_id, [])
        if game.score is not None:
            scores.append(game.score)

    return [
        build_bowler_stats(bowler_id, scores)
        for bowler_id, scores in scores_by_bowler.items()
    ]


def handicap_trend(series: Iterable[WeeklySeries]) -> Dict[int, List[HandicapPoint]]:
    """
    Cumulative average and handicap for each bowler after each week.

    Each point uses every game up to and including that week, which is how
    the league's handicap evolves over the season.
    """
    by_bowler: Dict[int, List[WeeklySeries]] = OrderedDict()
    for s in series:
        by_bowler.setdefault(s.bowler_id, []).append(s)

    trend = {}
    for bowler_id, bowler_series in by_bowler.items():
        all_scores: List[int] = []
        points = []
        for s in sorted(bowler_series, key=lambda s: s.week_number):
            all_scores.extend(s.game_scores)
            average = calculate_average(all_scores)
            points.append(
                HandicapPoint(
                    week_number=s.week_number,
                    average=average,
                    handicap=calculate_handicap(average),
                )
            )
        trend[bowler_id] = points
    return trend


def high_series(series: Iterable[WeeklySeries]) -> Dict[int, int]:
    """Best series total per bowler."""
    best: Dict[int, int] = {}
    for s in series:
        if s.series_total > best.get(s.bowler_id, -1):
            best[s.bowler_id] = s.series_total
    return best


def team_summary(stats: Sequence[BowlerStats]) -> dict:
    """Team-wide numbers from individual bowler stats."""
    bowled = [s for s in stats if s.total_games > 0]
    if not bowled:
        return {
            "team_average": 0,
            "team_high_game": 0,
            "total_games": 0,
            "total_pins": 0,
        }

    return {
        "team_average": sum(s.average for s in bowled) / len(bowled),
        "team_high_game": max(s.high_game for s in bowled),
        "total_games": sum(s.total_games for s in bowled),
        "total_pins": sum(s.total_pins for s in bowled),
    }
