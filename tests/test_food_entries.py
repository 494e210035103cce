from calorics.models.food_entry import FoodEntry
from calorics.services.dates import today_str

from tests.conftest import register_and_login


def log_entry(client, headers, food_id, serving_desc, quantity=1, date="2024-03-01"):
    payload = {"food_id": food_id, "serving_desc": serving_desc, "quantity": quantity}
    if date is not None:
        payload["date"] = date
    return client.post("/api/food-entries", json=payload, headers=headers)


def test_entry_calories_from_serving(client, auth_headers, foods):
    apple = foods["Apple"]
    resp = log_entry(client, auth_headers, apple["id"], "1 medium piece")
    assert resp.status_code == 200, resp.text

    data = resp.json()
    assert data["calories"] == 52 * 150 * 1 / 100
    assert data["calories"] == 78
    assert data["date"] == "2024-03-01"
    assert data["serving_desc"] == "1 medium piece"
    assert data["food_set_id"] is None
    assert data["food"]["name"] == "Apple"


def test_entry_fractional_quantity_is_not_rounded(client, auth_headers, foods):
    oil = foods["Olive Oil"]
    resp = log_entry(client, auth_headers, oil["id"], "1 teaspoon", quantity=0.5)
    assert resp.status_code == 200
    assert resp.json()["calories"] == oil["calories"] * 5 * 0.5 / 100


def test_entry_without_date_uses_today(client, auth_headers, foods):
    resp = log_entry(client, auth_headers, foods["Apple"]["id"], "100 grams", date=None)
    assert resp.status_code == 200
    assert resp.json()["date"] == today_str()


def test_entry_unknown_food(client, auth_headers):
    resp = log_entry(client, auth_headers, 99999, "100 grams")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid food ID"}


def test_entry_unknown_serving(client, auth_headers, foods):
    # servings belong to their own food only
    resp = log_entry(client, auth_headers, foods["Chicken Breast"]["id"], "1 medium piece")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid serving size"}


def test_entry_bad_date(client, auth_headers, foods):
    resp = log_entry(client, auth_headers, foods["Apple"]["id"], "100 grams", date="01/03/2024")
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_entry_negative_quantity_rejected(client, auth_headers, foods):
    resp = log_entry(client, auth_headers, foods["Apple"]["id"], "100 grams", quantity=-1)
    assert resp.status_code == 400


def test_daily_stats_sums_entries_for_date(client, auth_headers, foods):
    log_entry(client, auth_headers, foods["Apple"]["id"], "1 medium piece")
    log_entry(client, auth_headers, foods["Chicken Breast"]["id"], "50 grams")
    log_entry(client, auth_headers, foods["Chicken Breast"]["id"], "100 grams", date="2024-03-02")

    resp = client.get("/api/user/stats", params={"date": "2024-03-01"}, headers=auth_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["dailyCalories"] == 178
    assert len(data["foodEntries"]) == 2
    assert data["date"] == "2024-03-01"


def test_list_by_date_newest_first(client, auth_headers, foods):
    first = log_entry(client, auth_headers, foods["Apple"]["id"], "50 grams").json()
    second = log_entry(client, auth_headers, foods["Apple"]["id"], "100 grams").json()

    resp = client.get("/api/food-entries", params={"date": "2024-03-01"}, headers=auth_headers)
    assert resp.status_code == 200
    assert [e["id"] for e in resp.json()] == [second["id"], first["id"]]


def test_list_by_range_is_inclusive(client, auth_headers, foods):
    apple = foods["Apple"]["id"]
    for day in ("2024-02-29", "2024-03-01", "2024-03-05", "2024-03-06"):
        log_entry(client, auth_headers, apple, "100 grams", date=day)

    resp = client.get(
        "/api/food-entries",
        params={"startDate": "2024-03-01", "endDate": "2024-03-05"},
        headers=auth_headers,
    )
    assert resp.status_code == 200
    assert sorted(e["date"] for e in resp.json()) == ["2024-03-01", "2024-03-05"]


def test_delete_own_entry(client, auth_headers, foods):
    entry = log_entry(client, auth_headers, foods["Apple"]["id"], "100 grams").json()

    resp = client.delete(f"/api/food-entries/{entry['id']}", headers=auth_headers)
    assert resp.status_code == 200
    assert "message" in resp.json()

    listed = client.get("/api/food-entries", params={"date": "2024-03-01"}, headers=auth_headers)
    assert listed.json() == []


def test_delete_someone_elses_entry_is_not_found(client, auth_headers, foods, db_session):
    entry = log_entry(client, auth_headers, foods["Apple"]["id"], "100 grams").json()
    other = register_and_login(client, email="b@x")

    resp = client.delete(f"/api/food-entries/{entry['id']}", headers=other)
    missing = client.delete("/api/food-entries/99999", headers=other)

    assert resp.status_code == 404
    assert missing.status_code == 404
    assert resp.json() == missing.json()
    assert db_session.get(FoodEntry, entry["id"]) is not None


def test_direct_entry_creates_custom_food(client, auth_headers):
    resp = client.post(
        "/api/food-entries/direct",
        json={"name": "Grandma's soup", "calories": 120, "quantity": 2, "date": "2024-03-01"},
        headers=auth_headers,
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["calories"] == 240
    assert data["serving_desc"] == "100 grams"
    assert data["food"]["category"] == "Custom"
    assert [s["description"] for s in data["food"]["servings"]] == ["100 grams"]


def test_direct_entries_are_not_deduplicated(client, auth_headers):
    payload = {"name": "Soup", "calories": 100, "quantity": 1, "date": "2024-03-01"}
    first = client.post("/api/food-entries/direct", json=payload, headers=auth_headers).json()
    second = client.post("/api/food-entries/direct", json=payload, headers=auth_headers).json()
    assert first["food_id"] != second["food_id"]
