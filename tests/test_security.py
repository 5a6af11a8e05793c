import json
from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException
from jose import jwt

from transactions_service.core.config import SecuritySettings, Settings
from transactions_service.core.security import create_access_token, create_refresh_token, decode_token
from transactions_service.schemas import TokenPayload


@pytest.fixture
def settings():
    return Settings(security=SecuritySettings(access_secret="access-secret-1", refresh_secret="refresh-secret-1"))


def test_access_token_round_trip(settings):
    token = create_access_token(TokenPayload(id=42, username="alice", role="admin"), settings=settings)

    payload = decode_token(token, settings=settings)

    assert payload.id == 42
    assert payload.username == "alice"
    assert payload.role == "admin"


def test_payload_claim_uses_original_wire_layout(settings):
    token = create_access_token(TokenPayload(id=7, iin="990101", role="user"), settings=settings)

    claims = jwt.get_unverified_claims(token)

    assert json.loads(claims["payload"]) == {"id": 7, "iin": "990101", "username": "", "payload": "user"}


def test_refresh_token_is_not_an_access_token(settings):
    token = create_refresh_token(TokenPayload(id=1), settings=settings)

    assert decode_token(token, access=False, settings=settings).id == 1
    with pytest.raises(HTTPException) as excinfo:
        decode_token(token, settings=settings)
    assert excinfo.value.status_code == 403


def test_expired_token_rejected(settings):
    token = create_access_token(TokenPayload(id=1), expires_delta=timedelta(seconds=-5), settings=settings)

    with pytest.raises(HTTPException) as excinfo:
        decode_token(token, settings=settings)
    assert excinfo.value.status_code == 403


@pytest.mark.parametrize(
    "claims",
    [
        {"exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        {"payload": "not json", "exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        {"payload": json.dumps({"id": 1})},
    ],
)
def test_malformed_claims_rejected(settings, claims):
    token = jwt.encode(claims, settings.access_secret, algorithm=settings.algorithm)

    with pytest.raises(HTTPException) as excinfo:
        decode_token(token, settings=settings)
    assert excinfo.value.status_code == 403
