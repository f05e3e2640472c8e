from fastapi.testclient import TestClient

from rungroups.main import app


def get_client():
    return TestClient(app)


def _run(day, distance, minutes, elevation=None):
    payload = {
        "uuid": f"run-{day}-{distance}",
        "startDate": f"2024-04-{day:02d}T07:00:00Z",
        "duration": {"quantity": minutes, "unit": "min"},
        "totalDistance": {"quantity": distance, "unit": "mi"},
    }
    if elevation is not None:
        payload["totalElevation"] = {"quantity": elevation, "unit": "m"}
    return payload


def test_health_ok():
    r = get_client().get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


def test_group_by_distance():
    body = {
        "groupType": "distance",
        "tolerance": 0.25,
        "groupSize": 1.0,
        "workouts": [_run(1, 8.0, 64), _run(2, 4.9, 40), _run(3, 5.1, 41), _run(4, 6.5, 52)],
    }

    r = get_client().post("/api/groups", json=body)
    assert r.status_code == 200, r.text

    data = r.json()
    assert data["groupType"] == "distance"
    assert data["totalWorkouts"] == 4
    assert data["groupedWorkouts"] == 3
    assert [g["key"] for g in data["groups"]] == ["5", "8"]

    five, eight = data["groups"]
    assert (five["rank"], five["rankLabel"], five["count"]) == (1, "Most Common", 2)
    assert (eight["rank"], eight["rankLabel"]) == (2, "Least Common")
    assert five["title"] == "5 mi"
    assert five["highlight"]["id"] == "run-2-4.9" or five["highlight"]["id"] == "run-3-5.1"
    assert abs(sum(g["percentageOfTotalWorkouts"] for g in data["groups"]) - 100) < 1e-6


def test_unknown_group_type_falls_back_to_distance():
    body = {"groupType": "weather", "workouts": [_run(1, 5.0, 40)]}

    r = get_client().post("/api/groups", json=body)
    assert r.status_code == 200, r.text
    assert r.json()["groupType"] == "distance"


def test_empty_workouts():
    r = get_client().post("/api/groups", json={"groupType": "pace", "workouts": []})
    assert r.status_code == 200
    assert r.json()["groups"] == []


def test_invalid_tolerance_rejected():
    body = {"groupType": "distance", "tolerance": -1, "workouts": [_run(1, 5.0, 40)]}

    r = get_client().post("/api/groups", json=body)
    assert r.status_code == 422
    assert "tolerance" in r.json()["detail"]


def test_invalid_workout_payload_rejected():
    body = {"groupType": "distance", "workouts": [{"duration": 100}]}

    r = get_client().post("/api/groups", json=body)
    assert r.status_code == 422


def test_grouping_defaults():
    r = get_client().get("/api/groups/config")
    assert r.status_code == 200
    assert r.json()["defaults"]["altitude"] == {"tolerance": 50.0, "groupSize": 100.0}
