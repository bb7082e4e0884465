from league.utils.records import LeaderboardEntry, WeeklySeries
from league.utils.serialization import camelize, snakeify, to_camel, to_snake


def test_name_translation():
    assert to_camel("bowler_id") == "bowlerId"
    assert to_camel("avg_difference") == "avgDifference"
    assert to_camel("score") == "score"
    assert to_snake("predictedScore") == "predicted_score"
    assert to_snake("weekId") == "week_id"


def test_camelize_records_includes_derived_totals():
    series = WeeklySeries(bowler_id=1, week_id=2, week_number=3, game_scores=(150, 180))

    assert camelize(series) == {
        "bowlerId": 1,
        "weekId": 2,
        "weekNumber": 3,
        "gameScores": [150, 180],
        "seriesTotal": 330,
        "gamesEntered": 2,
    }


def test_camelize_nested_values():
    data = {
        "entries": [LeaderboardEntry(1, 17, 4.5, 3)],
        "selected_position": None,
    }
    assert camelize(data) == {
        "entries": [
            {
                "bowlerId": 1,
                "totalPoints": 17,
                "avgDifference": 4.5,
                "predictionsCount": 3,
            }
        ],
        "selectedPosition": None,
    }


def test_snakeify_payload():
    payload = [{"weekId": 1, "bowlerId": 2, "gameNumber": 1, "score": None}]
    assert snakeify(payload) == [
        {"week_id": 1, "bowler_id": 2, "game_number": 1, "score": None}
    ]
