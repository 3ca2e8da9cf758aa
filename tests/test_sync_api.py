import pytest


@pytest.mark.parametrize("plural", ["notes", "tasks", "ideas"])
def test_sync_requires_non_empty_array(client, alice, plural):
    response = client.post(f"/api/{plural}/sync", json={plural: []}, headers=alice["headers"])

    assert response.status_code == 400
    assert response.get_json() == {"error": f"{plural.capitalize()} array is required"}


def test_sync_requires_auth(client):
    response = client.post("/api/notes/sync", json={"notes": [{"title": "a", "content": "b"}]})

    assert response.status_code == 401


def test_sync_imports_every_record_for_caller(client, alice):
    notes = [
        {"title": f"n{i}", "content": "body", "user_id": "someone-else"} for i in range(3)
    ]

    response = client.post("/api/notes/sync", json={"notes": notes}, headers=alice["headers"])

    assert response.status_code == 201
    assert response.get_json() == {"message": "3 notes synced successfully", "count": 3}
    listed = client.get("/api/notes", headers=alice["headers"]).get_json()["notes"]
    assert len(listed) == 3
    assert {n["user_id"] for n in listed} == {alice["user"]["id"]}
    assert {n["color"] for n in listed} == {"#ffffff"}


def test_sync_accepts_bare_array(client, alice):
    tasks = [{"title": "a"}, {"title": "b", "completed": True, "priority": "high"}]

    response = client.post("/api/tasks/sync", json=tasks, headers=alice["headers"])

    assert response.status_code == 201
    assert response.get_json()["count"] == 2


def test_sync_skips_colliding_ids(client, alice):
    first = client.post(
        "/api/ideas/sync",
        json={"ideas": [{"id": "fixed-id", "title": "a", "description": "b"}]},
        headers=alice["headers"],
    )
    second = client.post(
        "/api/ideas/sync",
        json={
            "ideas": [
                {"id": "fixed-id", "title": "dup", "description": "b"},
                {"title": "fresh", "description": "c"},
            ]
        },
        headers=alice["headers"],
    )

    assert first.get_json()["count"] == 1
    assert second.get_json()["count"] == 1
    titles = sorted(i["title"] for i in client.get("/api/ideas", headers=alice["headers"]).get_json()["ideas"])
    assert titles == ["a", "fresh"]


def test_sync_rejects_invalid_record_and_inserts_nothing(client, alice):
    response = client.post(
        "/api/tasks/sync",
        json={"tasks": [{"title": "ok"}, {"description": "no title"}]},
        headers=alice["headers"],
    )

    assert response.status_code == 400
    assert response.get_json()["error"].startswith("Task #1:")
    assert client.get("/api/tasks", headers=alice["headers"]).get_json()["tasks"] == []
