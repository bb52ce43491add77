"""Tests for the /api/documentation endpoints."""


def titles(response):
    return [doc["title"] for doc in response.json()["data"]]


def test_list_sorted_by_order(client, store):
    # Manually assigned order wins over store order.
    section = store.documentation.get("1")
    store.documentation.replace(section.model_copy(update={"order": 9}))
    response = client.get("/api/documentation")
    assert response.status_code == 200
    assert titles(response) == ["API Reference", "Tool Development Guide", "FAQ", "Quick Start Guide"]
    assert response.json()["meta"]["total"] == 4


def test_category_filter(client):
    assert titles(client.get("/api/documentation", params={"category": "getting started"})) == ["Quick Start Guide"]
    assert client.get("/api/documentation", params={"category": "nope"}).json()["data"] == []


def test_get_section(client):
    response = client.get("/api/documentation/4")
    assert response.status_code == 200
    assert response.json()["data"]["title"] == "FAQ"


def test_get_missing_section(client):
    response = client.get("/api/documentation/40")
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Documentation section not found"}


def test_categories_are_distinct(client):
    client.post("/api/documentation", json={"title": "Errors", "content": "...", "category": "API"})
    response = client.get("/api/documentation/meta/categories")
    assert response.status_code == 200
    assert response.json()["data"] == ["Getting Started", "API", "Development", "Support"]


def test_create_appends_after_highest_order(client):
    response = client.post("/api/documentation", json={"title": "Changelog", "content": "v1", "category": "Support"})
    assert response.status_code == 201
    assert response.json()["data"]["order"] == 5
    assert titles(client.get("/api/documentation"))[-1] == "Changelog"


def test_create_requires_fields(client):
    response = client.post("/api/documentation", json={"title": "Changelog"})
    assert response.status_code == 400
    assert response.json()["error"] == "Missing required fields: content, category"


def test_update_restamps_last_updated(client):
    before = client.get("/api/documentation/2").json()["data"]
    response = client.put("/api/documentation/2", json={"content": "Updated", "id": "77"})
    assert response.status_code == 200
    after = response.json()["data"]
    assert after["id"] == "2"
    assert after["content"] == "Updated"
    assert after["last_updated"] > before["last_updated"]
