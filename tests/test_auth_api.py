from datetime import timedelta

from jose import jwt
from sqlalchemy.dialects import mysql
from sqlalchemy.schema import CreateTable

from conftest import bearer, register
from znote.models import User
from znote.security import create_access_token, decode_access_token


def test_register_returns_user_without_hash_and_token(client):
    response = client.post(
        "/api/auth/register",
        json={"email": "Alice@Example.com", "password": "pw-123456", "name": "Alice"},
    )

    assert response.status_code == 201
    data = response.get_json()
    assert data["user"]["email"] == "Alice@Example.com"
    assert data["user"]["name"] == "Alice"
    assert "password" not in data["user"]
    assert "password_hash" not in data["user"]
    assert data["token"]


def test_register_requires_email_and_password(client):
    response = client.post("/api/auth/register", json={"email": "a@example.com"})

    assert response.status_code == 400
    assert response.get_json() == {"error": "Email and password are required"}


def test_register_duplicate_email_is_rejected(client):
    register(client, "dup@example.com", "pw-1")

    response = client.post(
        "/api/auth/register", json={"email": "dup@example.com", "password": "pw-2"}
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "User already exists with this email"


def test_email_is_case_sensitive(client):
    register(client, "case@example.com", "pw-1")

    response = client.post(
        "/api/auth/register", json={"email": "CASE@example.com", "password": "pw-2"}
    )

    assert response.status_code == 201


def test_login_with_valid_credentials(client):
    registered = register(client, "carol@example.com", "carol-pass")

    response = client.post(
        "/api/auth/login", json={"email": "carol@example.com", "password": "carol-pass"}
    )

    assert response.status_code == 200
    data = response.get_json()
    assert data["user"]["id"] == registered["user"]["id"]
    assert data["token"]


def test_login_failures_share_one_message(client):
    register(client, "dave@example.com", "dave-pass")

    wrong_password = client.post(
        "/api/auth/login", json={"email": "dave@example.com", "password": "nope"}
    )
    unknown_email = client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "nope"}
    )

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.get_json() == {"error": "Invalid email or password"}
    assert unknown_email.get_json() == wrong_password.get_json()


def test_login_requires_fields(client):
    response = client.post("/api/auth/login", json={"email": "x@example.com"})

    assert response.status_code == 400


def test_profile_returns_current_user(client, alice):
    response = client.get("/api/auth/profile", headers=alice["headers"])

    assert response.status_code == 200
    user = response.get_json()["user"]
    assert user["id"] == alice["user"]["id"]
    assert user["email"] == "alice@example.com"
    assert user["created_at"]


def test_profile_of_missing_user_is_not_found(app, client):
    with app.app_context():
        token = create_access_token("00000000-0000-0000-0000-000000000000", "ghost@example.com")

    response = client.get("/api/auth/profile", headers=bearer(token))

    assert response.status_code == 404
    assert response.get_json() == {"error": "User not found"}


def test_missing_authorization_header(client):
    response = client.get("/api/notes")

    assert response.status_code == 401
    assert response.get_json() == {"error": "No authorization header provided"}


def test_malformed_authorization_header(client):
    response = client.get("/api/notes", headers={"Authorization": "Bearer"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "No token provided"}


def test_token_with_bad_signature_is_rejected(app, client, alice):
    forged = jwt.encode(
        {"user_id": alice["user"]["id"], "email": "alice@example.com", "exp": 4102444800},
        "not-the-secret",
        algorithm="HS256",
    )

    response = client.get("/api/notes", headers=bearer(forged))

    assert response.status_code == 401
    assert response.get_json() == {"error": "Invalid token"}


def test_expired_token_is_rejected(app, client, alice):
    with app.app_context():
        token = create_access_token(
            alice["user"]["id"], "alice@example.com", expires_delta=timedelta(seconds=-30)
        )

    response = client.get("/api/notes", headers=bearer(token))

    assert response.status_code == 401
    assert response.get_json() == {"error": "Token expired"}


def test_token_claims_and_seven_day_expiry(app, alice):
    with app.app_context():
        claims = decode_access_token(alice["token"])

    assert claims.user_id == alice["user"]["id"]
    assert claims.email == "alice@example.com"
    assert claims.expires_at - claims.issued_at == timedelta(days=7)


def test_register_rejects_over_long_name_and_email(client):
    long_name = client.post(
        "/api/auth/register",
        json={"email": "long@example.com", "password": "pw", "name": "n" * 129},
    )
    long_email = client.post(
        "/api/auth/register",
        json={"email": "e" * 250 + "@example.com", "password": "pw"},
    )

    assert long_name.status_code == 400
    assert long_name.get_json() == {"error": "Name must be at most 128 characters"}
    assert long_email.status_code == 400


def test_email_column_is_binary_collated_on_mysql():
    ddl = str(CreateTable(User.__table__).compile(dialect=mysql.dialect()))
    email_line = next(line for line in ddl.splitlines() if "email" in line)

    assert "utf8mb4_bin" in email_line
