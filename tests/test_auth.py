import uuid
from datetime import datetime, timedelta

import pytest
from fastapi import HTTPException
from jose import jwt

from app.auth import create_access_token, decode_token, hash_password, parse_video_id, verify_password
from app.config import get_settings


def test_password_hashing():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)
    assert not verify_password("secret123", None)


USER_ID = "3f2b8c1e-9d4a-4c2e-8f6b-1a2b3c4d5e6f"


def _encode(claims, secret=None):
    settings = get_settings()
    return jwt.encode(claims, secret or settings.secret_key, algorithm=settings.algorithm)


def _claims(**overrides):
    claims = {
        "iss": "tubely-access",
        "sub": USER_ID,
        "email": "a@example.com",
        "exp": datetime.utcnow() + timedelta(minutes=5),
    }
    claims.update(overrides)
    return claims


def test_token_round_trip():
    payload = decode_token(create_access_token(USER_ID, "a@example.com"))
    assert payload.sub == USER_ID
    assert payload.email == "a@example.com"
    assert payload.iss == "tubely-access"


def test_decode_normalizes_subject():
    payload = decode_token(_encode(_claims(sub=USER_ID.upper())))
    assert payload.sub == USER_ID


def test_decode_rejects_expired_token():
    assert decode_token(_encode(_claims(exp=datetime.utcnow() - timedelta(minutes=1)))) is None


def test_decode_rejects_foreign_secret():
    assert decode_token(_encode(_claims(), secret="other-secret")) is None


def test_decode_rejects_foreign_issuer():
    assert decode_token(_encode(_claims(iss="someone-else"))) is None


def test_decode_rejects_missing_issuer():
    claims = _claims()
    del claims["iss"]
    assert decode_token(_encode(claims)) is None


def test_decode_rejects_non_uuid_subject():
    assert decode_token(_encode(_claims(sub="user-1"))) is None


def test_parse_video_id_normalizes():
    value = uuid.uuid4()
    assert parse_video_id(str(value).upper()) == str(value)


@pytest.mark.parametrize("value", ["", "abc", "1234-5678", "00000000-0000-0000-0000-00000000000g"])
def test_parse_video_id_rejects_malformed(value):
    with pytest.raises(HTTPException) as exc:
        parse_video_id(value)
    assert exc.value.status_code == 400
    assert exc.value.detail == "Invalid ID"


def test_register_and_login(client):
    res = client.post("/api/users", json={"email": "New@Example.com", "password": "secret123"})
    assert res.status_code == 201
    assert res.json()["email"] == "new@example.com"

    res = client.post("/api/login", json={"email": "new@example.com", "password": "secret123"})
    assert res.status_code == 200
    token = res.json()["access_token"]

    res = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 200
    assert res.json()["email"] == "new@example.com"


def test_register_duplicate_email(client, user):
    res = client.post("/api/users", json={"email": user.email, "password": "secret123"})
    assert res.status_code == 400
    assert res.json() == {"error": "Email already registered"}


def test_login_wrong_password(client, user):
    res = client.post("/api/login", json={"email": user.email, "password": "nope"})
    assert res.status_code == 401
    assert res.json() == {"error": "Invalid email or password"}


@pytest.mark.parametrize("header", ["", "Bearer", "Bearer ", "Basic abc", "token-without-scheme"])
def test_malformed_authorization_header(client, header):
    res = client.get("/api/me", headers={"Authorization": header})
    assert res.status_code == 401
    assert res.json() == {"error": "Couldn't find JWT"}


def test_token_for_deleted_user(client):
    token = create_access_token(str(uuid.uuid4()), "ghost@example.com")
    res = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401
    assert res.json() == {"error": "Couldn't validate JWT"}


def test_lowercase_bearer_scheme_is_accepted(client, user):
    token = create_access_token(user.id, user.email)
    res = client.get("/api/me", headers={"Authorization": f"bearer {token}"})
    assert res.status_code == 200


def test_bearer_scheme_is_documented(client):
    schemes = client.get("/openapi.json").json()["components"]["securitySchemes"]
    assert schemes["HTTPBearer"] == {"type": "http", "scheme": "bearer"}
