from datetime import datetime

import pytest

from znote.errors import ValidationError
from znote.extensions import db
from znote.models import Task
from znote.services.task_service import parse_due_date


def create_task(client, headers, **fields):
    body = {"title": "Task"}
    body.update(fields)
    response = client.post("/api/tasks", json=body, headers=headers)
    assert response.status_code == 201, response.get_json()
    return response.get_json()["task"]


def test_create_applies_defaults(client, alice):
    task = create_task(client, alice["headers"], title="Write report")

    assert task["completed"] is False
    assert task["priority"] == "medium"
    assert task["description"] is None
    assert task["due_date"] is None
    assert task["user_id"] == alice["user"]["id"]


def test_create_requires_title(client, alice):
    response = client.post("/api/tasks", json={"description": "x"}, headers=alice["headers"])

    assert response.status_code == 400
    assert response.get_json() == {"error": "Title is required"}


def test_invalid_priority_is_rejected(client, alice):
    response = client.post(
        "/api/tasks", json={"title": "T", "priority": "urgent"}, headers=alice["headers"]
    )

    assert response.status_code == 400
    assert "low, medium, high" in response.get_json()["error"]


def test_completed_must_be_boolean(client, alice):
    response = client.post(
        "/api/tasks", json={"title": "T", "completed": "yes"}, headers=alice["headers"]
    )

    assert response.status_code == 400


def test_due_date_accepts_plain_date(client, alice):
    task = create_task(client, alice["headers"], due_date="2024-05-01")

    assert task["due_date"] == "2024-05-01T00:00:00Z"


def test_due_date_rejects_garbage(client, alice):
    response = client.post(
        "/api/tasks", json={"title": "T", "due_date": "next friday"}, headers=alice["headers"]
    )

    assert response.status_code == 400


def test_toggle_completed_through_update(client, alice):
    task = create_task(client, alice["headers"])

    response = client.put(
        f"/api/tasks/{task['id']}", json={"completed": True}, headers=alice["headers"]
    )

    assert response.status_code == 200
    assert response.get_json()["task"]["completed"] is True
    assert response.get_json()["message"] == "Task updated successfully"


def test_clearing_due_date(client, alice):
    task = create_task(client, alice["headers"], due_date="2024-05-01")

    response = client.put(
        f"/api/tasks/{task['id']}", json={"due_date": None}, headers=alice["headers"]
    )

    assert response.get_json()["task"]["due_date"] is None


def test_list_order(app, client, alice):
    done = create_task(client, alice["headers"], title="done", due_date="2024-01-01", completed=True)
    undated = create_task(client, alice["headers"], title="undated")
    later = create_task(client, alice["headers"], title="later", due_date="2024-03-01")
    sooner = create_task(client, alice["headers"], title="sooner", due_date="2024-02-01")

    with app.app_context():
        for task_id, stamp in (
            (done["id"], datetime(2024, 1, 4)),
            (undated["id"], datetime(2024, 1, 3)),
            (later["id"], datetime(2024, 1, 2)),
            (sooner["id"], datetime(2024, 1, 1)),
        ):
            db.session.get(Task, task_id).created_at = stamp
        db.session.commit()

    tasks = client.get("/api/tasks", headers=alice["headers"]).get_json()["tasks"]

    assert [t["title"] for t in tasks] == ["sooner", "later", "undated", "done"]


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-05-01", datetime(2024, 5, 1)),
        ("2024-05-01T10:30:00", datetime(2024, 5, 1, 10, 30)),
        ("2024-05-01T10:30:00Z", datetime(2024, 5, 1, 10, 30)),
        ("2024-05-01T12:30:00+02:00", datetime(2024, 5, 1, 10, 30)),
        ("", None),
        (None, None),
    ],
)
def test_parse_due_date(value, expected):
    assert parse_due_date(value) == expected


def test_parse_due_date_rejects_non_strings():
    with pytest.raises(ValidationError):
        parse_due_date(20240501)
