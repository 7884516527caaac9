from datetime import datetime, timedelta, timezone

from conftest import PASSWORD, bearer, register
from jose import jwt

from exambuddy.core.security import decode_access_token
from exambuddy.models.user import User
from exambuddy.schemas.auth import UserOutSchema


def test_register_returns_token_and_user(client):
    data = register(client, "New.User@Example.com")
    assert data["user"]["email"] == "new.user@example.com"
    assert data["user"]["id"]

    payload = decode_access_token(data["token"])
    assert payload["userId"] == data["user"]["id"]
    expires = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
    assert timedelta(days=6, hours=23) < expires - datetime.now(timezone.utc) <= timedelta(days=7)


def test_register_duplicate_email_is_409(client):
    register(client)
    resp = client.post("/api/auth/register", json={"email": "student@example.com", "password": PASSWORD})
    assert resp.status_code == 409
    assert resp.json() == {"error": "Email already registered."}


def test_register_validates_input(client):
    cases = [
        {"email": "student@example.com"},
        {"password": PASSWORD},
        {"email": "not-an-email", "password": PASSWORD},
        {"email": "student@example.com", "password": "short"},
        {"email": "student@example.com", "password": "x" * 73},
    ]
    for body in cases:
        resp = client.post("/api/auth/register", json=body)
        assert resp.status_code == 400, body
        assert "error" in resp.json()


def test_login_with_good_credentials(client):
    user = register(client)["user"]
    resp = client.post("/api/auth/login", json={"email": "STUDENT@example.com", "password": PASSWORD})
    assert resp.status_code == 200
    assert resp.json()["user"] == user


def test_login_with_bad_password_is_401(client):
    register(client)
    resp = client.post("/api/auth/login", json={"email": "student@example.com", "password": "wrong-password"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid credentials."}


def test_login_unknown_email_is_401(client):
    resp = client.post("/api/auth/login", json={"email": "ghost@example.com", "password": PASSWORD})
    assert resp.status_code == 401


def test_login_missing_fields_is_400(client):
    assert client.post("/api/auth/login", json={}).status_code == 400


def test_me(client):
    data = register(client)
    resp = client.get("/api/auth/me", headers=bearer(data["token"]))
    assert resp.status_code == 200
    assert resp.json() == {
        "id": data["user"]["id"],
        "email": "student@example.com",
        "currentSubject": "Insurance Exam",
    }


def test_expired_token_is_401(client):
    user_id = register(client)["user"]["id"]
    token = jwt.encode(
        {"userId": user_id, "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        "test-secret",
        algorithm="HS256",
    )
    resp = client.get("/api/user-stats", headers=bearer(token))
    assert resp.status_code == 401
    assert resp.json()["error"] == "Token expired"


def test_token_signed_with_other_secret_is_403(client):
    user_id = register(client)["user"]["id"]
    token = jwt.encode(
        {"userId": user_id, "exp": datetime.now(timezone.utc) + timedelta(days=1)},
        "someone-elses-secret",
        algorithm="HS256",
    )
    resp = client.get("/api/user-stats", headers=bearer(token))
    assert resp.status_code == 403
    assert resp.json()["error"] == "Invalid token"


def test_token_without_user_claim_is_403(client):
    token = jwt.encode(
        {"sub": "1", "exp": datetime.now(timezone.utc) + timedelta(days=1)},
        "test-secret",
        algorithm="HS256",
    )
    assert client.get("/api/user-stats", headers=bearer(token)).status_code == 403


def test_token_for_unknown_user_is_401(client):
    token = jwt.encode(
        {"userId": "00000000-0000-0000-0000-000000000000", "exp": datetime.now(timezone.utc) + timedelta(days=1)},
        "test-secret",
        algorithm="HS256",
    )
    assert client.get("/api/user-stats", headers=bearer(token)).status_code == 401


def test_non_bearer_scheme_is_401(client):
    resp = client.get("/api/user-stats", headers={"Authorization": "Basic dXNlcjpwYXNz"})
    assert resp.status_code == 401


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_user_out_schema_reads_orm_rows():
    user = User(id="u-1", email="reader@example.com", hashed_password="x")
    assert UserOutSchema.model_validate(user).model_dump() == {"id": "u-1", "email": "reader@example.com"}
