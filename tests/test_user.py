import math

import pytest
from sqlalchemy import event

from calorics.services import auth as auth_service
from calorics.services.auth import create_access_token
from calorics.services.dates import today
from calorics.services.measurements import calculate_age

from tests.conftest import register_and_login

PROFILE_UPDATE = {
    "currentWeight": 80,
    "height": 180,
    "neckMeasurement": 40,
    "waistMeasurement": 90,
    "hipMeasurement": 0,
    "goal": "maintain",
}


def test_register_login_and_profile(client):
    headers = register_and_login(client)

    resp = client.get("/api/user/profile", headers=headers)
    assert resp.status_code == 200
    profile = resp.json()
    assert profile["email"] == "a@x"
    assert profile["gender"] == "male"
    assert profile["age"] == calculate_age("1990-01-01", today())
    assert profile["goal"] == "maintain"
    assert profile["fatPercentage"] == 0
    assert profile["neededCalories"] == 0
    assert profile["currentWeight"] is None
    assert "password" not in profile and "passwordHash" not in profile


def test_login_returns_profile(client):
    register_and_login(client)
    resp = client.post("/api/login", json={"email": "a@x", "password": "p"})
    data = resp.json()
    assert data["token"]
    assert data["user"]["name"] == "A"


def test_register_duplicate_email(client):
    register_and_login(client)
    resp = client.post(
        "/api/register",
        json={
            "name": "Other",
            "email": "a@x",
            "password": "q",
            "gender": "female",
            "birthday": "1995-05-05",
        },
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Email already registered"}


def test_register_duplicate_email_caught_by_unique_constraint(client, monkeypatch):
    # both requests pass the lookup, as when two registrations race
    monkeypatch.setattr(auth_service, "email_taken", lambda db, email: False)
    payload = {
        "name": "A",
        "email": "race@x",
        "password": "p",
        "gender": "male",
        "birthday": "1990-01-01",
    }
    assert client.post("/api/register", json=payload).status_code == 200

    resp = client.post("/api/register", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Email already registered"}


@pytest.mark.parametrize(
    "override",
    [
        {"gender": "other"},
        {"birthday": "yesterday"},
        {"goal": "bulk"},
        {"email": ""},
    ],
)
def test_register_validation(client, override):
    payload = {
        "name": "A",
        "email": "c@x",
        "password": "p",
        "gender": "male",
        "birthday": "1990-01-01",
    }
    payload.update(override)
    resp = client.post("/api/register", json=payload)
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_login_same_error_for_unknown_email_and_wrong_password(client):
    register_and_login(client)
    wrong_password = client.post("/api/login", json={"email": "a@x", "password": "nope"})
    unknown_email = client.post("/api/login", json={"email": "z@x", "password": "p"})
    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()


@pytest.mark.parametrize(
    "method,path",
    [
        ("get", "/api/user/profile"),
        ("put", "/api/user/profile"),
        ("get", "/api/user/stats"),
        ("get", "/api/user/weekly-stats"),
        ("get", "/api/foods"),
        ("get", "/api/food-entries"),
        ("post", "/api/food-entries"),
        ("delete", "/api/food-entries/1"),
        ("post", "/api/food-entries/direct"),
        ("get", "/api/food-sets"),
        ("post", "/api/food-sets"),
        ("post", "/api/food-sets/1/apply"),
        ("delete", "/api/food-sets/1"),
    ],
)
def test_protected_routes_require_token(client, engine, method, path):
    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", record)
    try:
        missing = getattr(client, method)(path)
        invalid = getattr(client, method)(path, headers={"Authorization": "Bearer not-a-token"})
    finally:
        event.remove(engine, "before_cursor_execute", record)

    assert missing.status_code == 401
    assert invalid.status_code == 401
    assert statements == []


def test_token_for_unknown_user_is_rejected(client):
    headers = {"Authorization": f"Bearer {create_access_token(424242)}"}
    assert client.get("/api/user/profile", headers=headers).status_code == 401


def test_update_profile_recomputes_targets(client, auth_headers):
    resp = client.put("/api/user/profile", json=PROFILE_UPDATE, headers=auth_headers)
    assert resp.status_code == 200, resp.text
    data = resp.json()

    age = calculate_age("1990-01-01", today())
    assert data["fatPercentage"] == 18
    assert data["goal"] == "maintain"
    assert data["neededCalories"] == math.floor((800 + 1125 - 5 * age + 5) * 1.55)

    profile = client.get("/api/user/profile", headers=auth_headers).json()
    assert profile["currentWeight"] == 80
    assert profile["hipMeasurement"] is None
    assert profile["fatPercentage"] == 18


def test_update_profile_partial_keeps_other_fields(client, auth_headers):
    client.put("/api/user/profile", json=PROFILE_UPDATE, headers=auth_headers)
    resp = client.put("/api/user/profile", json={"goal": "lose"}, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["goal"] == "lose"

    profile = client.get("/api/user/profile", headers=auth_headers).json()
    assert profile["height"] == 180
    assert profile["goal"] == "lose"


def test_update_profile_rejects_fractional_and_bad_goal(client, auth_headers):
    fractional = dict(PROFILE_UPDATE, currentWeight=80.5)
    bad_goal = dict(PROFILE_UPDATE, goal="bulk")
    assert client.put("/api/user/profile", json=fractional, headers=auth_headers).status_code == 400
    assert client.put("/api/user/profile", json=bad_goal, headers=auth_headers).status_code == 400


def test_daily_stats_shape(client, auth_headers):
    client.put("/api/user/profile", json=PROFILE_UPDATE, headers=auth_headers)
    resp = client.get("/api/user/stats", params={"date": "2024-03-01"}, headers=auth_headers)
    assert resp.status_code == 200
    data = resp.json()
    for key in (
        "dailyCalories",
        "neededCalories",
        "weight",
        "neck",
        "waist",
        "hip",
        "fatPercentage",
        "goal",
        "age",
        "foodEntries",
    ):
        assert key in data
    assert data["dailyCalories"] == 0
    assert data["weight"] == 80
    assert data["fatPercentage"] == 18


def test_daily_stats_bad_date(client, auth_headers):
    resp = client.get("/api/user/stats", params={"date": "March 1st"}, headers=auth_headers)
    assert resp.status_code == 400


def test_weekly_stats_percentage(client, auth_headers, foods):
    client.put("/api/user/profile", json=PROFILE_UPDATE, headers=auth_headers)
    needed = client.get("/api/user/profile", headers=auth_headers).json()["neededCalories"]
    chicken = foods["Chicken Breast"]["id"]
    client.post(
        "/api/food-entries",
        json={"food_id": chicken, "serving_desc": "100 grams", "quantity": 5, "date": "2024-03-04"},
        headers=auth_headers,
    )

    resp = client.get(
        "/api/user/weekly-stats",
        params={"startDate": "2024-03-02", "endDate": "2024-03-08"},
        headers=auth_headers,
    )
    data = resp.json()
    assert data["totalCalories"] == 1000
    assert data["averagePercentage"] == pytest.approx(1000 / (needed * 7) * 100)


def test_weekly_stats_without_measurements_is_zero_percent(client, auth_headers, foods):
    client.post(
        "/api/food-entries",
        json={
            "food_id": foods["Apple"]["id"],
            "serving_desc": "100 grams",
            "quantity": 1,
            "date": "2024-03-04",
        },
        headers=auth_headers,
    )
    resp = client.get(
        "/api/user/weekly-stats",
        params={"startDate": "2024-03-02", "endDate": "2024-03-08"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["totalCalories"] == 52
    assert resp.json()["averagePercentage"] == 0


def test_weekly_stats_rejects_inverted_range(client, auth_headers):
    resp = client.get(
        "/api/user/weekly-stats",
        params={"startDate": "2024-03-08", "endDate": "2024-03-02"},
        headers=auth_headers,
    )
    assert resp.status_code == 400


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"
