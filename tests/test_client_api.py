from unittest.mock import Mock

import pytest
import requests

from znote_client import create_client
from znote_client.api import ApiClient, ApiError
from znote_client.storage import LocalStorage


def _response(status_code, body):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = body
    return response


def test_bearer_header_added_when_token_present():
    session = Mock()
    session.request.return_value = _response(200, {"notes": []})
    api = ApiClient("http://api/api", token_provider=lambda: "tok", session=session)

    assert api.get("/notes") == {"notes": []}

    args, kwargs = session.request.call_args
    assert args == ("GET", "http://api/api/notes")
    assert kwargs["headers"]["Authorization"] == "Bearer tok"


def test_no_header_without_token():
    session = Mock()
    session.request.return_value = _response(200, {})
    api = ApiClient("http://api/api", session=session)

    api.post("/auth/login", {"email": "a"})

    assert "Authorization" not in session.request.call_args.kwargs["headers"]


def test_error_body_becomes_api_error():
    session = Mock()
    session.request.return_value = _response(400, {"error": "Title is required"})
    api = ApiClient("http://api/api", session=session)

    with pytest.raises(ApiError) as excinfo:
        api.post("/tasks", {})

    assert excinfo.value.status == 400
    assert excinfo.value.message == "Title is required"


def test_unauthorized_with_token_triggers_callback():
    session = Mock()
    session.request.return_value = _response(401, {"error": "Token expired"})
    on_unauthorized = Mock()
    api = ApiClient(
        "http://api/api", token_provider=lambda: "tok", on_unauthorized=on_unauthorized, session=session
    )

    with pytest.raises(ApiError):
        api.get("/notes")

    on_unauthorized.assert_called_once_with()


def test_bad_credentials_do_not_trigger_callback():
    session = Mock()
    session.request.return_value = _response(401, {"error": "Invalid email or password"})
    on_unauthorized = Mock()
    api = ApiClient("http://api/api", on_unauthorized=on_unauthorized, session=session)

    with pytest.raises(ApiError):
        api.post("/auth/login", {})

    on_unauthorized.assert_not_called()


def test_network_failure():
    session = Mock()
    session.request.side_effect = requests.ConnectionError("refused")
    api = ApiClient("http://api/api", session=session)

    with pytest.raises(ApiError) as excinfo:
        api.get("/notes")

    assert excinfo.value.status is None
    assert excinfo.value.message == "Network error, please try again"


def test_storage_round_trip_and_remove(tmp_path):
    storage = LocalStorage(tmp_path)

    storage.set("znote-auth", {"token": "t"})
    assert storage.get("znote-auth") == {"token": "t"}

    storage.remove("znote-auth")
    assert storage.get("znote-auth", "missing") == "missing"


def test_storage_ignores_corrupted_file(tmp_path):
    (tmp_path / "znote-notes.json").write_text("{not json", encoding="utf-8")

    assert LocalStorage(tmp_path).get("znote-notes", {}) == {}


def test_storage_rejects_unsafe_keys(tmp_path):
    with pytest.raises(ValueError):
        LocalStorage(tmp_path).set("../escape", 1)


def test_storage_ignores_invalid_utf8(tmp_path):
    (tmp_path / "znote-notes.json").write_bytes(b"\xff\xfe{}")

    assert LocalStorage(tmp_path).get("znote-notes", {}) == {}


def test_client_starts_in_guest_mode_over_unexpected_device_state(tmp_path):
    (tmp_path / "znote-notes.json").write_bytes(b"\xff\xfe")
    (tmp_path / "znote-tasks.json").write_text('[{"id": "1"}]', encoding="utf-8")
    (tmp_path / "znote-ideas.json").write_text('{"ideas": "nope"}', encoding="utf-8")
    (tmp_path / "znote-auth.json").write_text('"garbage"', encoding="utf-8")

    client = create_client(data_dir=tmp_path, api_url="http://api/api", session=Mock())

    assert client.auth.is_guest is True
    assert client.notes.items == []
    assert client.tasks.items == []
    assert client.ideas.items == []
    assert client.tasks.add({"title": "fresh start"})["success"] is True


def test_unauthenticated_post_omits_stored_token():
    session = Mock()
    session.request.return_value = _response(401, {"error": "Invalid email or password"})
    on_unauthorized = Mock()
    api = ApiClient(
        "http://api/api", token_provider=lambda: "tok", on_unauthorized=on_unauthorized, session=session
    )

    with pytest.raises(ApiError):
        api.post("/auth/login", {"email": "a", "password": "b"}, auth=False)

    assert "Authorization" not in session.request.call_args.kwargs["headers"]
    on_unauthorized.assert_not_called()
