from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId

from clarityweb.main import app
from clarityweb.utils.constants import SESSION_COOKIE_NAME

UNKNOWN_ID = "65f1c0ffee00000000000001"


def entry_id(simplifications, index):
    return str(simplifications.docs[index]["_id"])


def test_history_lists_own_entries_newest_first(login, client, simplifications):
    login("ada@example.com")

    response = client.get("/api/history")

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert (body["page"], body["limit"]) == (1, 10)
    assert [item["mode"] for item in body["items"]] == ["summary", "accessible", "simple"]
    assert body["items"][0]["id"] == entry_id(simplifications, 2)
    assert body["items"][0]["sourceUrl"] == "https://example.com/tides"
    assert body["items"][0]["statistics"]["wordsCountAfter"] == 80
    assert "Bob" not in response.text


def test_history_pages(login, client):
    login("ada@example.com")

    first = client.get("/api/history", params={"page": 1, "limit": 2}).json()
    second = client.get("/api/history", params={"page": 2, "limit": 2}).json()
    past_end = client.get("/api/history", params={"page": 5, "limit": 2}).json()

    assert [item["mode"] for item in first["items"]] == ["summary", "accessible"]
    assert [item["mode"] for item in second["items"]] == ["simple"]
    assert past_end["items"] == []
    assert first["total"] == second["total"] == past_end["total"] == 3


@pytest.mark.parametrize("params, modes", [
    ({"mode": "simple"}, ["simple"]),
    ({"mode": "all"}, ["summary", "accessible", "simple"]),
    ({"favoritesOnly": "true"}, ["accessible"]),
    ({"search": "SUNLIGHT"}, ["accessible"]),
    ({"search": "feline"}, ["simple"]),
    ({"search": "cat.sat"}, []),
])
def test_history_filters(login, client, params, modes):
    login("ada@example.com")
    body = client.get("/api/history", params=params).json()
    assert [item["mode"] for item in body["items"]] == modes
    assert body["total"] == len(modes)


@pytest.mark.parametrize("params", [
    {"page": 0},
    {"limit": 0},
    {"limit": 51},
    {"mode": "poetry"},
])
def test_history_rejects_bad_query(login, client, params):
    login("ada@example.com")
    response = client.get("/api/history", params=params)
    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_favorites_lists_only_favorites(login, client):
    login("ada@example.com")
    body = client.get("/api/history/favorites").json()
    assert [item["simplifiedText"] for item in body["items"]] == ["Plants turn sunlight into food."]
    assert body["total"] == 1


def test_get_simplification(login, client, simplifications):
    login("ada@example.com")
    item_id = entry_id(simplifications, 0)

    response = client.get(f"/api/history/{item_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == item_id
    assert body["simplifiedText"] == "The cat sat on the mat."
    assert body["isFavorite"] is False
    assert body["sourceUrl"] is None


@pytest.mark.parametrize("item_id", [UNKNOWN_ID, "not-an-object-id"])
def test_get_unknown_simplification_is_404(login, client, item_id):
    login("ada@example.com")
    response = client.get(f"/api/history/{item_id}")
    assert response.status_code == 404
    assert response.json()["error"] == "Simplification not found"


def test_other_accounts_entries_read_as_missing(login, client, simplifications):
    login("ada@example.com")
    bobs = entry_id(simplifications, 3)

    assert client.get(f"/api/history/{bobs}").status_code == 404
    assert client.post(f"/api/history/{bobs}/favorite").status_code == 404
    assert client.delete(f"/api/history/{bobs}").status_code == 404
    assert simplifications.docs[3]["isFavorite"] is True


def test_toggle_favorite_flips_and_returns_entry(login, client, simplifications):
    login("ada@example.com")
    item_id = entry_id(simplifications, 0)

    first = client.post(f"/api/history/{item_id}/favorite")
    assert first.status_code == 200
    assert first.json()["isFavorite"] is True
    assert simplifications.docs[0]["isFavorite"] is True

    second = client.post(f"/api/history/{item_id}/favorite")
    assert second.json()["isFavorite"] is False


def test_toggle_favorite_treats_missing_flag_as_false(login, client, simplifications):
    login("ada@example.com")
    del simplifications.docs[2]["isFavorite"]

    response = client.post(f"/api/history/{entry_id(simplifications, 2)}/favorite")

    assert response.json()["isFavorite"] is True


def test_delete_simplification(login, client, simplifications):
    login("ada@example.com")
    item_id = entry_id(simplifications, 1)

    response = client.delete(f"/api/history/{item_id}")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get(f"/api/history/{item_id}").status_code == 404
    assert client.delete(f"/api/history/{item_id}").status_code == 404
    assert client.get("/api/history").json()["total"] == 2


def test_unknown_account_is_404(login, client):
    login("ghost@example.com")
    response = client.get("/api/history")
    assert response.status_code == 404
    assert response.json()["error"] == "User not found"


@pytest.mark.parametrize("method, path", [
    ("get", "/api/history"),
    ("get", "/api/history/favorites"),
    ("get", f"/api/history/{UNKNOWN_ID}"),
    ("post", f"/api/history/{UNKNOWN_ID}/favorite"),
    ("delete", f"/api/history/{UNKNOWN_ID}"),
])
def test_no_session_is_401_before_storage(client, connector, method, path):
    response = getattr(client, method)(path)
    assert response.status_code == 401
    assert response.json()["error"] == "Unauthorized"
    assert connector.calls == 0


def test_forged_cookie_is_401(client, connector):
    client.cookies.set(SESSION_COOKIE_NAME, "forged.token.value")
    assert client.get("/api/history").status_code == 401
    assert connector.calls == 0


@pytest.mark.parametrize("method, path", [
    ("get", "/api/history"),
    ("get", f"/api/history/{UNKNOWN_ID}"),
    ("post", f"/api/history/{UNKNOWN_ID}/favorite"),
    ("delete", f"/api/history/{UNKNOWN_ID}"),
])
def test_storage_error_is_generic_500(login, client, connector, method, path):
    failure = RuntimeError("cursor exploded at 10.0.0.7")
    collection = MagicMock()
    collection.count_documents = AsyncMock(side_effect=failure)
    collection.find_one = AsyncMock(side_effect=failure)
    collection.find_one_and_update = AsyncMock(side_effect=failure)
    collection.delete_one = AsyncMock(side_effect=failure)
    connector._simplifications = collection

    login("ada@example.com")
    response = getattr(client, method)(path)
    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"
    assert "10.0.0.7" not in response.text


def test_connection_failure_is_generic_500(login, client, make_connector):
    app.state.db_connector = make_connector(error=ConnectionError("Could not establish MongoDB connection"))

    login("ada@example.com")
    response = client.get("/api/history/favorites")
    assert response.status_code == 500
    assert response.json()["error"] == "Internal server error"


def test_toggle_runs_as_single_server_side_update(login, client, connector, users):
    collection = MagicMock()
    collection.find_one_and_update = AsyncMock(return_value=None)
    connector._simplifications = collection

    login("ada@example.com")
    assert client.post(f"/api/history/{UNKNOWN_ID}/favorite").status_code == 404

    query, update = collection.find_one_and_update.await_args.args
    assert query == {"_id": ObjectId(UNKNOWN_ID), "userId": users.docs[0]["_id"]}
    assert update == [{"$set": {"isFavorite": {"$not": ["$isFavorite"]}}}]
