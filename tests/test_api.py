def _game_rows(week_id, bowler_id, scores):
    return [
        {"weekId": week_id, "bowlerId": bowler_id, "gameNumber": n, "score": s}
        for n, s in enumerate(scores, start=1)
    ]


def test_create_and_list_bowlers(client):
    res = client.post("/api/bowlers", json={"name": "Alice", "avatarColor": "#3b82f6"})
    assert res.status_code == 201
    bowler = res.get_json()
    assert bowler["name"] == "Alice"
    assert bowler["avatarColor"] == "#3b82f6"
    assert bowler["hasPin"] is False
    assert "pinCode" not in bowler

    res = client.get("/api/bowlers")
    assert [b["name"] for b in res.get_json()] == ["Alice"]


def test_create_bowler_validation_error(client):
    res = client.post("/api/bowlers", json={"name": "Alice", "pinCode": "12"})
    assert res.status_code == 400
    body = res.get_json()
    assert body["error"]
    assert body["details"][0]["field"] == "pin_code"


def test_update_bowler_changes_only_given_fields(client, roster):
    res = client.patch(f"/api/bowlers/{roster['bob']}", json={"nickname": "Bobby"})
    assert res.status_code == 200
    body = res.get_json()
    assert body["nickname"] == "Bobby"
    assert body["name"] == "Bob"


def test_update_unknown_bowler(client, roster):
    res = client.patch("/api/bowlers/999", json={"nickname": "Ghost"})
    assert res.status_code == 404
    assert res.get_json()["error"] == "Bowler not found"


def test_create_week(client):
    res = client.post("/api/weeks", json={"weekNumber": 3, "bowlingDate": "2024-01-24"})
    assert res.status_code == 201
    week = res.get_json()
    assert week["weekNumber"] == 3
    assert week["bowlingDate"] == "2024-01-24"
    assert week["status"] == "open"

    res = client.post("/api/weeks", json={})
    assert res.get_json()["weekNumber"] == 4


def test_week_actions(client, roster):
    res = client.post(f"/api/weeks/{roster['week']}/lock")
    assert res.get_json()["status"] == "locked"

    res = client.post(f"/api/weeks/{roster['week']}/complete")
    assert res.get_json()["status"] == "complete"

    res = client.post(f"/api/weeks/{roster['week']}/unlock")
    assert res.status_code == 409

    res = client.post(f"/api/weeks/{roster['week']}/explode")
    assert res.status_code == 404


def test_score_entry_updates_stats(client, roster):
    res = client.put(
        "/api/games", json=_game_rows(roster["week"], roster["alice"], [150, 180, None])
    )
    assert res.status_code == 200
    assert len(res.get_json()) == 3

    (stats,) = client.get(f"/api/stats?bowlerId={roster['alice']}").get_json()
    assert stats["average"] == 165
    assert stats["handicap"] == 50
    assert stats["totalGames"] == 2

    (series,) = client.get(f"/api/series?weekId={roster['week']}").get_json()
    assert series["seriesTotal"] == 330
    assert series["gamesEntered"] == 2


def test_invalid_score_batch_is_rejected_whole(client, roster):
    rows = _game_rows(roster["week"], roster["alice"], [150, 301])
    res = client.put("/api/games", json=rows)

    assert res.status_code == 400
    (problem,) = res.get_json()["details"]
    assert problem["field"] == "score"
    assert problem["gameNumber"] == 2
    assert client.get("/api/games").get_json() == []


def test_writes_refresh_cached_stats(client, roster):
    client.put("/api/games", json=_game_rows(roster["week"], roster["alice"], [200]))
    first = client.get("/api/stats/team").get_json()
    assert first["teamHighGame"] == 200

    client.put("/api/games", json=_game_rows(roster["week"], roster["bob"], [250]))
    second = client.get("/api/stats/team").get_json()
    assert second["teamHighGame"] == 250
    assert second["totalGames"] == 2


def test_delete_game(client, roster):
    client.put("/api/games", json=_game_rows(roster["week"], roster["alice"], [200]))

    url = f"/api/games/{roster['week']}/{roster['alice']}/1"
    assert client.delete(url).status_code == 200
    assert client.delete(url).status_code == 404


def test_predictions_rejected_once_week_locked(client, roster):
    row = {
        "weekId": roster["week"],
        "predictorId": roster["alice"],
        "targetId": roster["bob"],
        "gameNumber": 1,
        "predictedScore": 180,
    }
    assert client.put("/api/predictions", json=[row]).status_code == 200

    client.post(f"/api/weeks/{roster['week']}/lock")
    res = client.put("/api/predictions", json=[row])
    assert res.status_code == 409
    assert "locked" in res.get_json()["error"]


def test_self_prediction_rejected(client, roster):
    row = {
        "weekId": roster["week"],
        "predictorId": roster["alice"],
        "targetId": roster["alice"],
        "gameNumber": 1,
        "predictedScore": 180,
    }
    assert client.put("/api/predictions", json=row).status_code == 400


def test_leaderboard_with_selected_bowler(client, roster):
    client.put(
        "/api/predictions",
        json=[
            {
                "weekId": roster["week"],
                "predictorId": roster["alice"],
                "targetId": roster["bob"],
                "gameNumber": 1,
                "predictedScore": 180,
            },
            {
                "weekId": roster["week"],
                "predictorId": roster["carol"],
                "targetId": roster["bob"],
                "gameNumber": 1,
                "predictedScore": 200,
            },
        ],
    )
    client.put("/api/games", json=_game_rows(roster["week"], roster["bob"], [185]))

    body = client.get(f"/api/leaderboard?bowlerId={roster['alice']}").get_json()
    assert [e["bowlerId"] for e in body["entries"]] == [roster["alice"], roster["carol"]]
    assert body["entries"][0]["totalPoints"] == 7
    assert body["selectedPosition"] == 1

    results = client.get(
        f"/api/predictions/results?predictorId={roster['carol']}"
    ).get_json()
    assert [(r["actualScore"], r["difference"], r["points"]) for r in results] == [
        (185, 15, 5)
    ]

    winners = client.get("/api/leaderboard/winners").get_json()
    assert winners == [{"weekNumber": 1, "bowlerId": roster["alice"], "points": 7}]


def test_weekly_leaderboard_unknown_week(client, roster):
    assert client.get("/api/leaderboard/weekly/999").status_code == 404


def test_series_prediction_endpoint(client, roster):
    res = client.put(
        "/api/predictions/series",
        json={
            "weekId": roster["week"],
            "predictorId": roster["carol"],
            "targetId": roster["alice"],
            "predictedSeries": 901,
        },
    )
    assert res.status_code == 400


def test_bad_json_body(client, roster):
    res = client.put("/api/games", data="not json", content_type="application/json")
    assert res.status_code == 400
    assert res.get_json() == {"error": "Bad request"}


def test_bowler_names_are_stored_as_given(client):
    res = client.post("/api/bowlers", json={"name": "Tom & Jerry", "nickname": "<T&J>"})
    assert res.status_code == 201
    bowler = res.get_json()
    assert bowler["name"] == "Tom & Jerry"
    assert bowler["nickname"] == "<T&J>"

    res = client.patch(f"/api/bowlers/{bowler['id']}", json={"name": bowler["name"]})
    assert res.get_json()["name"] == "Tom & Jerry"
    assert client.get("/api/bowlers").get_json()[0]["name"] == "Tom & Jerry"


def test_deactivated_bowler_leaves_active_list(client, roster):
    res = client.patch(f"/api/bowlers/{roster['bob']}", json={"isActive": False})
    assert res.status_code == 200
    assert res.get_json()["isActive"] is False

    active = client.get("/api/bowlers?active=true").get_json()
    assert [b["name"] for b in active] == ["Alice", "Carol"]
    assert len(client.get("/api/bowlers").get_json()) == 3

    res = client.patch(f"/api/bowlers/{roster['bob']}", json={"nickname": "B"})
    assert res.get_json()["isActive"] is False

    res = client.patch(f"/api/bowlers/{roster['bob']}", json={"isActive": True})
    assert res.get_json()["isActive"] is True


def test_create_inactive_bowler(client):
    res = client.post("/api/bowlers", json={"name": "Dana", "isActive": False})
    assert res.get_json()["isActive"] is False
    assert client.get("/api/bowlers?active=true").get_json() == []
