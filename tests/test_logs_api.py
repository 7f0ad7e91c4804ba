from fitlog.api.v1 import logs as logs_routes
from fitlog.models import MealComponent

DAY = {
    "date": "2026-03-05",
    "sleep": {"total_mins": 420, "deep_mins": 63, "rem_mins": 90},
    "nutrition": {
        "meals": [
            {
                "meal_type": "dinner",
                "name": "Stir fry",
                "calories": 700,
                "components": [{"name": "Beef", "weight_g": 150}, {"name": "Noodles", "weight_g": 200}],
            }
        ]
    },
    "workouts": [{"type": "run", "duration_mins": 40, "active_calories": 420}],
    "supplements": [{"name": "Magnesium", "dose_mg": 400, "taken_at": "21:00"}],
}


def _import(client, auth, data=DAY):
    return client.post("/v1/import/daily", json=data, headers=auth).json()


def test_empty_day_returns_shell(client, auth):
    resp = client.get("/v1/logs/2026-01-01", headers=auth)
    assert resp.status_code == 200
    assert resp.json() == {"date": "2026-01-01", "meals": [], "workouts": [], "supplements": []}


def test_bad_date_is_400(client, auth):
    assert client.get("/v1/logs/someday", headers=auth).status_code == 400


def test_log_includes_children(client, auth):
    _import(client, auth)
    log = client.get("/v1/logs/2026-03-05", headers=auth).json()

    assert [c["name"] for c in log["meals"][0]["components"]] == ["Beef", "Noodles"]
    assert log["sleep"]["deepSleepPct"] == 15
    assert log["workouts"][0]["activeCalories"] == 420
    assert log["supplements"][0]["takenAt"] == "21:00"
    assert log["activityRings"] is None


def test_upsert_and_update_log(client, auth):
    created = client.post("/v1/logs", json={"date": "2026-03-06", "weightKg": 81.2, "notes": "rest"}, headers=auth)
    assert created.status_code == 200
    log_id = created.json()["id"]

    again = client.post("/v1/logs", json={"date": "2026-03-06", "wakeTime": "06:00"}, headers=auth).json()
    assert again["id"] == log_id
    assert again["wakeTime"] == "06:00"
    assert again["weightKg"] == 81.2
    assert again["notes"] == "rest"

    updated = client.put(f"/v1/logs/{log_id}", json={"sleepTime": "22:00"}, headers=auth).json()
    assert updated["sleepTime"] == "22:00"
    assert updated["wakeTime"] == "06:00"
    assert updated["weightKg"] == 81.2
    assert updated["notes"] == "rest"

    cleared = client.put(f"/v1/logs/{log_id}", json={"notes": None, "weightKg": 80.9}, headers=auth).json()
    assert cleared["notes"] is None
    assert cleared["weightKg"] == 80.9


def test_concurrent_upsert_updates_existing_row(client, auth, monkeypatch):
    first = client.post("/v1/logs", json={"date": "2026-03-07", "notes": "early"}, headers=auth).json()

    real_find = logs_routes.find_daily_log
    calls = {"n": 0}

    def stale_find(session, uid, d):
        # the first lookup misses the row the other request just committed
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return real_find(session, uid, d)

    monkeypatch.setattr(logs_routes, "find_daily_log", stale_find)

    resp = client.post("/v1/logs", json={"date": "2026-03-07", "weightKg": 79.5}, headers=auth)
    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == first["id"]
    assert body["weightKg"] == 79.5
    assert body["notes"] == "early"


def test_upsert_requires_date(client, auth):
    assert client.post("/v1/logs", json={"weightKg": 80}, headers=auth).status_code == 400


def test_other_users_log_is_hidden(client, auth, other_auth):
    log_id = _import(client, auth)["logId"]
    assert client.put(f"/v1/logs/{log_id}", json={"notes": "x"}, headers=other_auth).status_code == 404
    assert client.get("/v1/logs/2026-03-05", headers=other_auth).json()["meals"] == []


def test_meal_create_and_replace_components(client, auth, db):
    log_id = _import(client, auth)["logId"]

    resp = client.post(
        "/v1/meals",
        json={
            "dailyLogId": log_id,
            "mealType": "snack",
            "name": "Yoghurt",
            "calories": 0,
            "proteinG": 12,
            "components": [{"name": "Yoghurt", "weightG": 170}],
        },
        headers=auth,
    )
    assert resp.status_code == 201
    meal = resp.json()
    assert meal["calories"] is None
    assert meal["proteinG"] == 12
    assert len(meal["components"]) == 1

    replaced = client.put(
        f"/v1/meals/{meal['id']}",
        json={"components": [{"name": "Greek yoghurt", "weightG": 150}, {"name": "Honey", "weightG": 10}]},
        headers=auth,
    ).json()
    assert [c["name"] for c in replaced["components"]] == ["Greek yoghurt", "Honey"]
    assert replaced["name"] == "Yoghurt"
    assert db.query(MealComponent).filter(MealComponent.meal_id == meal["id"]).count() == 2


def test_meal_update_without_components_keeps_them(client, auth):
    log = _import(client, auth)
    meal_id = client.get("/v1/logs/2026-03-05", headers=auth).json()["meals"][0]["id"]

    updated = client.put(f"/v1/meals/{meal_id}", json={"calories": 650}, headers=auth).json()
    assert updated["calories"] == 650
    assert len(updated["components"]) == 2
    assert log["mealsCreated"] == 1


def test_meal_validation_and_ownership(client, auth, other_auth):
    log_id = _import(client, auth)["logId"]
    assert client.post("/v1/meals", json={"dailyLogId": log_id}, headers=auth).status_code == 400

    resp = client.post(
        "/v1/meals",
        json={"dailyLogId": log_id, "mealType": "lunch", "name": "Stolen"},
        headers=other_auth,
    )
    assert resp.status_code == 404


def test_delete_meal(client, auth, db):
    _import(client, auth)
    meal_id = client.get("/v1/logs/2026-03-05", headers=auth).json()["meals"][0]["id"]

    assert client.delete(f"/v1/meals/{meal_id}", headers=auth).json() == {"success": True}
    assert client.get("/v1/logs/2026-03-05", headers=auth).json()["meals"] == []
    assert db.query(MealComponent).count() == 0


def test_workout_crud(client, auth):
    log_id = _import(client, auth)["logId"]

    created = client.post(
        "/v1/workouts",
        json={"dailyLogId": log_id, "type": "cycle", "durationMins": 45.5, "activeCalories": 380},
        headers=auth,
    )
    assert created.status_code == 201
    workout = created.json()
    assert workout["durationMins"] == 45

    updated = client.put(f"/v1/workouts/{workout['id']}", json={"effortLevel": 4}, headers=auth).json()
    assert updated["effortLevel"] == 4
    assert updated["type"] == "cycle"
    assert updated["activeCalories"] == 380

    assert client.delete(f"/v1/workouts/{workout['id']}", headers=auth).status_code == 200
    assert len(client.get("/v1/logs/2026-03-05", headers=auth).json()["workouts"]) == 1


def test_supplement_crud(client, auth, other_auth):
    log_id = _import(client, auth)["logId"]

    created = client.post("/v1/supplements", json={"dailyLogId": log_id, "name": "Zinc", "doseMg": 25}, headers=auth)
    assert created.status_code == 201
    supp_id = created.json()["id"]

    assert client.put(f"/v1/supplements/{supp_id}", json={"doseMg": 50}, headers=other_auth).status_code == 404
    updated = client.put(f"/v1/supplements/{supp_id}", json={"doseMg": 50}, headers=auth).json()
    assert updated["doseMg"] == 50
    assert updated["name"] == "Zinc"

    assert client.delete(f"/v1/supplements/{supp_id}", headers=auth).status_code == 200


def test_body_metrics(client, auth):
    for d, w in (("2026-03-01", 81.0), ("2026-03-02", 80.6), ("2026-03-03", 80.1)):
        assert client.post("/v1/metrics", json={"date": d, "weightKg": w}, headers=auth).status_code == 201

    rows = client.get("/v1/metrics", params={"from": "2026-03-02"}, headers=auth).json()
    assert [r["date"] for r in rows] == ["2026-03-03", "2026-03-02"]

    rows = client.get("/v1/metrics", params={"to": "2026-03-01", "limit": 5}, headers=auth).json()
    assert [r["weightKg"] for r in rows] == [81.0]

    assert client.post("/v1/metrics", json={"weightKg": 80}, headers=auth).status_code == 400


def test_sleep_routes(client, auth):
    _import(client, auth)

    listed = client.get("/v1/sleep", headers=auth).json()
    assert len(listed) == 1
    assert listed[0]["remPct"] == 21

    one = client.get("/v1/sleep/2026-03-05", headers=auth).json()
    assert one["totalMins"] == 420
    assert one["supplements"][0]["name"] == "Magnesium"

    assert client.get("/v1/sleep/2026-03-04", headers=auth).status_code == 404


def test_goals_and_templates(client, auth, other_auth):
    goal = client.post(
        "/v1/goals",
        json={"goalType": "weight", "targetValue": 75, "targetDate": "2026-06-01"},
        headers=auth,
    )
    assert goal.status_code == 201
    goal_id = goal.json()["id"]

    updated = client.put(f"/v1/goals/{goal_id}", json={"targetValue": 76}, headers=auth).json()
    assert updated["targetValue"] == 76
    assert updated["goalType"] == "weight"
    assert client.put(f"/v1/goals/{goal_id}", json={"targetValue": 1}, headers=other_auth).status_code == 404
    assert len(client.get("/v1/goals", headers=auth).json()) == 1
    assert client.post("/v1/goals", json={"goalType": "weight"}, headers=auth).status_code == 400

    tpl = client.post(
        "/v1/templates",
        json={"name": "Protein oats", "mealType": "breakfast", "calories": 450, "components": [{"name": "Oats"}]},
        headers=auth,
    )
    assert tpl.status_code == 201
    tpl_id = tpl.json()["id"]
    assert client.get("/v1/templates", headers=auth).json()[0]["components"] == [{"name": "Oats"}]
    assert client.delete(f"/v1/templates/{tpl_id}", headers=other_auth).status_code == 404
    assert client.delete(f"/v1/templates/{tpl_id}", headers=auth).json() == {"success": True}
