"""
League data service

Sits between the API/CLI and the database. Reads rows, turns them into
records and hands them to the handicap and prediction scoring engines.
Writes are natural-key batch upserts: the whole batch is validated first
and then written in one transaction, so a rejected batch changes nothing.
"""

from collections import OrderedDict

from sqlalchemy.exc import SQLAlchemyError

from league import db
from league.exceptions import (
    MissingDataError,
    ScoreValidationError,
    StorageError,
    WeekLockedError,
)
from league.forms import validate_batch
from league.forms.predictions import PredictionForm, SeriesPredictionForm
from league.forms.scores import GameScoreForm
from league.models import Bowler, Game, Prediction, SeriesPrediction, Week
from league.utils.cache_utils import invalidate_league_cache
from league.utils.logging_config import get_logger
from league.utils.performance import timer
from league.utils.records import ActualScore
from league.utils.scoring import (
    calculate_leaderboard,
    calculate_weekly_leaderboard,
    calculate_weekly_winners,
    resolve_results,
    resolve_series_results,
)
from league.utils.stats import (
    build_all_bowler_stats,
    build_bowler_stats,
    build_weekly_series,
    handicap_trend,
    high_series,
    team_summary,
)

logger = get_logger(__name__)


# Lookups


def get_bowler(bowler_id):
    bowler = db.session.get(Bowler, bowler_id)
    if not bowler:
        raise MissingDataError("bowler", bowler_id)
    return bowler


def get_week(week_id):
    week = db.session.get(Week, week_id)
    if not week:
        raise MissingDataError("week", week_id)
    return week


def list_bowlers(active_only=False):
    query = Bowler.query
    if active_only:
        query = query.filter_by(is_active=True)
    return query.order_by(Bowler.name).all()


def list_weeks():
    return Week.query.order_by(Week.week_number).all()


def _week_numbers():
    return dict(db.session.query(Week.id, Week.week_number).all())


# Bowler and week management


def create_bowler(data):
    bowler = Bowler.create_bowler(**data)
    _commit("create bowler")
    logger.info(f"Created bowler {bowler.name} (id={bowler.id})")
    return bowler


def update_bowler(bowler_id, data):
    bowler = get_bowler(bowler_id)
    bowler.update(**data)
    _commit("update bowler")
    return bowler


def create_week(week_number=None, bowling_date=None):
    if week_number and Week.query.filter_by(week_number=week_number).first():
        raise ScoreValidationError(
            [
                {
                    "field": "week_number",
                    "value": week_number,
                    "message": f"Week {week_number} already exists",
                }
            ]
        )
    week = Week.create_week(week_number, bowling_date)
    _commit("create week")
    logger.info(f"Created week {week.week_number}")
    return week


def set_week_status(week_id, action):
    """
    Move a week through its lifecycle.

    Args:
        week_id: Week ID
        action: One of "lock", "unlock", "complete", "reopen"
    """
    week = get_week(week_id)

    if action == "lock":
        week.lock_predictions()
    elif action == "unlock":
        if not week.unlock_predictions():
            raise WeekLockedError(week.week_number, "complete")
    elif action == "complete":
        week.mark_complete()
    elif action == "reopen":
        week.reopen()
    else:
        raise ValueError(f"Unknown week action: {action}")

    _commit(f"{action} week")
    logger.info(f"Week {week.week_number} is now {week.status}")
    return week


# Game scores


def get_games(week_id=None, bowler_id=None):
    query = Game.query
    if week_id is not None:
        query = query.filter_by(week_id=week_id)
    if bowler_id is not None:
        query = query.filter_by(bowler_id=bowler_id)
    return query.order_by(Game.week_id, Game.bowler_id, Game.game_number).all()


def upsert_games(rows):
    """
    Insert or update game scores keyed by (week, bowler, game number).

    Raises:
        ScoreValidationError: if any score in the batch is invalid
        MissingDataError: if a week or bowler does not exist
        WeekLockedError: if a week is already complete
        StorageError: if the database rejects the batch
    """
    cleaned = validate_batch(GameScoreForm, rows)
    weeks = _require_weeks(r["week_id"] for r in cleaned)
    _require_bowlers(r["bowler_id"] for r in cleaned)

    for week in weeks.values():
        if not week.accepts_scores:
            raise WeekLockedError(week.week_number, "complete")

    games = _upsert(Game, cleaned, "upsert games")
    logger.info(f"Saved {len(games)} game score(s)")
    return games


def delete_game(week_id, bowler_id, game_number):
    """Remove a single game; returns False if there was nothing to remove"""
    game = Game.query.filter_by(
        week_id=week_id, bowler_id=bowler_id, game_number=game_number
    ).first()
    if not game:
        return False

    week = get_week(week_id)
    if not week.accepts_scores:
        raise WeekLockedError(week.week_number, "complete")

    db.session.delete(game)
    _commit("delete game")
    logger.info(
        f"Deleted game {game_number} for bowler {bowler_id} in week {week.week_number}"
    )
    return True


# Predictions


def get_predictions(week_id=None, predictor_id=None):
    query = Prediction.query
    if week_id is not None:
        query = query.filter_by(week_id=week_id)
    if predictor_id is not None:
        query = query.filter_by(predictor_id=predictor_id)
    return query.order_by(
        Prediction.week_id, Prediction.target_id, Prediction.game_number
    ).all()


def upsert_predictions(rows):
    """Insert or update per-game predictions; same guarantees as upsert_games"""
    cleaned = validate_batch(PredictionForm, rows)
    _check_prediction_targets(cleaned)

    predictions = _upsert(Prediction, cleaned, "upsert predictions")
    logger.info(f"Saved {len(predictions)} prediction(s)")
    return predictions


def upsert_series_predictions(rows):
    """Deprecated series-total prediction entry"""
    cleaned = validate_batch(SeriesPredictionForm, rows)
    _check_prediction_targets(cleaned)

    predictions = _upsert(SeriesPrediction, cleaned, "upsert series predictions")
    logger.info(f"Saved {len(predictions)} series prediction(s)")
    return predictions


def _check_prediction_targets(cleaned):
    weeks = _require_weeks(r["week_id"] for r in cleaned)
    _require_bowlers(r["predictor_id"] for r in cleaned)
    _require_bowlers(r["target_id"] for r in cleaned)

    for week in weeks.values():
        if not week.accepts_predictions:
            raise WeekLockedError(week.week_number, "locked for predictions")


# Derived stats


@timer
def get_weekly_series(week_id=None, bowler_id=None):
    games = [g.to_record() for g in get_games(week_id=week_id, bowler_id=bowler_id)]
    return build_weekly_series(games, _week_numbers())


@timer
def get_bowler_stats(bowler_id=None):
    """
    All-time stats per bowler.

    With ``bowler_id`` the result has exactly one entry; a bowler with no
    games (or an unknown id) gets zeroed stats rather than an error.
    """
    if bowler_id is not None:
        scores = [
            g.score for g in get_games(bowler_id=bowler_id) if g.score is not None
        ]
        return [build_bowler_stats(bowler_id, scores)]

    return build_all_bowler_stats(g.to_record() for g in get_games())


def get_team_summary():
    return team_summary(get_bowler_stats())


def get_personal_bests():
    stats = get_bowler_stats()
    best_series = high_series(get_weekly_series())
    return [
        {
            "bowler_id": s.bowler_id,
            "high_game": s.high_game,
            "high_series": best_series.get(s.bowler_id, 0),
            "average": s.average,
        }
        for s in stats
        if s.total_games > 0
    ]


def get_handicap_trend(bowler_id=None):
    return handicap_trend(get_weekly_series(bowler_id=bowler_id))


# Prediction results and leaderboards


@timer
def get_prediction_results(week_id=None, predictor_id=None):
    """
    Resolve per-game and legacy series predictions against actual scores.

    Per-game predictions are compared with the target's score for the same
    week and game; series predictions with the target's series total.
    """
    games_by_slot = OrderedDict()
    for game in get_games(week_id=week_id):
        if game.score is None:
            continue
        games_by_slot.setdefault((game.week_id, game.game_number), []).append(
            ActualScore(bowler_id=game.bowler_id, value=game.score)
        )

    predictions_by_slot = OrderedDict()
    for prediction in get_predictions(week_id=week_id, predictor_id=predictor_id):
        predictions_by_slot.setdefault(
            (prediction.week_id, prediction.game_number), []
        ).append(prediction.to_input())

    results = []
    for slot, inputs in predictions_by_slot.items():
        results.extend(resolve_results(inputs, games_by_slot.get(slot, [])))

    series_query = SeriesPrediction.query
    if week_id is not None:
        series_query = series_query.filter_by(week_id=week_id)
    if predictor_id is not None:
        series_query = series_query.filter_by(predictor_id=predictor_id)
    series_inputs = [p.to_input() for p in series_query.all()]
    if series_inputs:
        results.extend(
            resolve_series_results(series_inputs, get_weekly_series(week_id=week_id))
        )

    results.sort(
        key=lambda r: (
            r.week_number or 0,
            r.predictor_id,
            r.target_id,
            r.game_number or 0,
        )
    )
    return results


def get_leaderboard():
    return calculate_leaderboard(get_prediction_results())


def get_weekly_leaderboard(week_id):
    get_week(week_id)
    return calculate_weekly_leaderboard(get_prediction_results(week_id=week_id), week_id)


def get_weekly_winners():
    return calculate_weekly_winners(get_prediction_results())


def find_leaderboard_position(leaderboard, bowler_id):
    """1-based rank of a bowler on a leaderboard, or None if not on it"""
    for position, entry in enumerate(leaderboard, start=1):
        if entry.bowler_id == bowler_id:
            return position
    return None


# Storage helpers


def _require_weeks(week_ids):
    weeks = {}
    for week_id in set(week_ids):
        weeks[week_id] = get_week(week_id)
    return weeks


def _require_bowlers(bowler_ids):
    for bowler_id in set(bowler_ids):
        get_bowler(bowler_id)


def _upsert(model, rows, operation):
    """
    Write rows keyed by ``model.natural_key`` in one transaction.

    Later rows in the batch win over earlier rows with the same key.
    """
    latest = OrderedDict()
    for row in rows:
        latest[model.natural_key(row)] = row

    saved = []
    try:
        for row in latest.values():
            key_fields = dict(zip(model.NATURAL_KEY, model.natural_key(row)))
            instance = model.query.filter_by(**key_fields).first()
            if instance is None:
                instance = model(**row)
                db.session.add(instance)
            else:
                for name, value in row.items():
                    setattr(instance, name, value)
            saved.append(instance)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"{operation} failed, batch rolled back: {e}")
        raise StorageError(operation, str(e)) from e

    invalidate_league_cache(operation)
    return saved


def _commit(operation):
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"{operation} failed: {e}")
        raise StorageError(operation, str(e)) from e
    invalidate_league_cache(operation)
