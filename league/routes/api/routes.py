from flask import abort, jsonify, request

from league import limiter
from league.forms import validate_batch
from league.forms.league import BowlerForm, WeekForm
from league.routes.api import bp
from league.services import league_service
from league.utils.cache_utils import cached_route
from league.utils.serialization import camelize, snakeify

WEEK_ACTIONS = ("lock", "unlock", "complete", "reopen")


def _json_body():
    """Request body with camelCase keys converted to snake_case"""
    data = request.get_json(silent=True)
    if data is None:
        abort(400)
    return snakeify(data)


def _json_rows():
    """Request body as a list of rows; a single object counts as one row"""
    data = _json_body()
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list) or not data:
        abort(400)
    return data


def _json_object():
    data = _json_body()
    if not isinstance(data, dict):
        abort(400)
    return data


# Bowlers


@bp.route("/bowlers")
def bowlers():
    """List bowlers"""
    active_only = request.args.get("active", "false").lower() == "true"
    return jsonify(
        camelize([b.to_dict() for b in league_service.list_bowlers(active_only)])
    )


@bp.route("/bowlers", methods=["POST"])
@limiter.limit("30 per minute")
def create_bowler():
    (data,) = validate_batch(BowlerForm, [_json_object()])
    bowler = league_service.create_bowler(data)
    return jsonify(camelize(bowler.to_dict())), 201


@bp.route("/bowlers/<int:bowler_id>", methods=["PATCH"])
def update_bowler(bowler_id):
    """Partial update; only the fields present in the body change"""
    bowler = league_service.get_bowler(bowler_id)
    changes = _json_object()
    row = {"name": bowler.name}
    row.update(changes)
    (cleaned,) = validate_batch(BowlerForm, [row])
    data = {k: v for k, v in cleaned.items() if k in changes}
    bowler = league_service.update_bowler(bowler_id, data)
    return jsonify(camelize(bowler.to_dict()))


# Weeks


@bp.route("/weeks")
def weeks():
    """List weeks in order"""
    return jsonify(camelize([w.to_dict() for w in league_service.list_weeks()]))


@bp.route("/weeks", methods=["POST"])
def create_week():
    (data,) = validate_batch(WeekForm, [_json_object()])
    week = league_service.create_week(**data)
    return jsonify(camelize(week.to_dict())), 201


@bp.route("/weeks/<int:week_id>/<action>", methods=["POST"])
def week_action(week_id, action):
    """Lock, unlock, complete or reopen a week"""
    if action not in WEEK_ACTIONS:
        abort(404)
    week = league_service.set_week_status(week_id, action)
    return jsonify(camelize(week.to_dict()))


# Game scores


@bp.route("/games")
def games():
    """Raw game scores, optionally filtered by week and bowler"""
    week_id = request.args.get("weekId", type=int)
    bowler_id = request.args.get("bowlerId", type=int)
    return jsonify(
        camelize(
            [g.to_dict() for g in league_service.get_games(week_id, bowler_id)]
        )
    )


@bp.route("/games", methods=["PUT"])
def upsert_games():
    """Batch upsert of game scores; all rows are saved or none are"""
    saved = league_service.upsert_games(_json_rows())
    return jsonify(camelize([g.to_dict() for g in saved]))


@bp.route(
    "/games/<int:week_id>/<int:bowler_id>/<int:game_number>", methods=["DELETE"]
)
def delete_game(week_id, bowler_id, game_number):
    if not league_service.delete_game(week_id, bowler_id, game_number):
        abort(404)
    return jsonify(
        camelize(
            {"week_id": week_id, "bowler_id": bowler_id, "game_number": game_number}
        )
    )


# Stats


@bp.route("/series")
@cached_route(timeout=300, key_prefix="series")
def weekly_series():
    week_id = request.args.get("weekId", type=int)
    bowler_id = request.args.get("bowlerId", type=int)
    return camelize(league_service.get_weekly_series(week_id, bowler_id))


@bp.route("/stats")
@cached_route(timeout=300, key_prefix="bowler_stats")
def bowler_stats():
    """Stats for every bowler, or just the selected one"""
    bowler_id = request.args.get("bowlerId", type=int)
    return camelize(league_service.get_bowler_stats(bowler_id))


@bp.route("/stats/team")
@cached_route(timeout=300, key_prefix="team_stats")
def team_stats():
    return camelize(league_service.get_team_summary())


@bp.route("/stats/personal-bests")
@cached_route(timeout=300, key_prefix="personal_bests")
def personal_bests():
    return camelize(league_service.get_personal_bests())


@bp.route("/stats/handicap-trend")
@cached_route(timeout=300, key_prefix="handicap_trend")
def handicap_trend():
    bowler_id = request.args.get("bowlerId", type=int)
    return camelize(league_service.get_handicap_trend(bowler_id))


# Predictions


@bp.route("/predictions")
def predictions():
    week_id = request.args.get("weekId", type=int)
    predictor_id = request.args.get("predictorId", type=int)
    return jsonify(
        camelize(
            [
                p.to_dict()
                for p in league_service.get_predictions(week_id, predictor_id)
            ]
        )
    )


@bp.route("/predictions", methods=["PUT"])
def upsert_predictions():
    """Batch upsert of per-game predictions"""
    saved = league_service.upsert_predictions(_json_rows())
    return jsonify(camelize([p.to_dict() for p in saved]))


@bp.route("/predictions/series", methods=["PUT"])
def upsert_series_predictions():
    """Deprecated: batch upsert of series-total predictions"""
    saved = league_service.upsert_series_predictions(_json_rows())
    return jsonify(camelize([p.to_dict() for p in saved]))


@bp.route("/predictions/results")
@cached_route(timeout=300, key_prefix="prediction_results")
def prediction_results():
    week_id = request.args.get("weekId", type=int)
    predictor_id = request.args.get("predictorId", type=int)
    return camelize(league_service.get_prediction_results(week_id, predictor_id))


# Leaderboards


@bp.route("/leaderboard")
@cached_route(timeout=300, key_prefix="leaderboard")
def leaderboard():
    """All-time prediction leaderboard; ``bowlerId`` adds that bowler's rank"""
    entries = league_service.get_leaderboard()
    bowler_id = request.args.get("bowlerId", type=int)
    return camelize(
        {
            "entries": entries,
            "selected_position": (
                league_service.find_leaderboard_position(entries, bowler_id)
                if bowler_id is not None
                else None
            ),
        }
    )


@bp.route("/leaderboard/weekly/<int:week_id>")
@cached_route(timeout=300, key_prefix="weekly_leaderboard")
def weekly_leaderboard(week_id):
    return camelize(league_service.get_weekly_leaderboard(week_id))


@bp.route("/leaderboard/winners")
@cached_route(timeout=300, key_prefix="weekly_winners")
def weekly_winners():
    return camelize(league_service.get_weekly_winners())
