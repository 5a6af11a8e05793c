"""JWT helpers and request identity dependencies."""
import json
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError

from transactions_service.core.config import Settings, get_settings
from transactions_service.schemas import TokenPayload

security = HTTPBearer(auto_error=False)

UNAUTHORIZED_DETAIL = "Unauthorized to perform this action"


def _encode(payload: TokenPayload, secret: str, expires_delta: timedelta, settings: Settings) -> str:
    claims = {
        "payload": json.dumps(
            {"id": payload.id, "iin": payload.iin, "username": payload.username, "payload": payload.role}
        ),
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(claims, secret, algorithm=settings.algorithm)


def create_access_token(
    payload: TokenPayload,
    expires_delta: Optional[timedelta] = None,
    settings: Optional[Settings] = None,
) -> str:
    settings = settings or get_settings()
    delta = expires_delta or timedelta(minutes=settings.security.access_token_expire_minutes)
    return _encode(payload, settings.access_secret, delta, settings)


def create_refresh_token(
    payload: TokenPayload,
    expires_delta: Optional[timedelta] = None,
    settings: Optional[Settings] = None,
) -> str:
    settings = settings or get_settings()
    delta = expires_delta or timedelta(minutes=settings.security.refresh_token_expire_minutes)
    return _encode(payload, settings.refresh_secret, delta, settings)


def decode_token(token: str, *, access: bool = True, settings: Optional[Settings] = None) -> TokenPayload:
    settings = settings or get_settings()
    secret = settings.access_secret if access else settings.refresh_secret
    try:
        claims = jwt.decode(
            token,
            secret,
            algorithms=[settings.algorithm],
            options={"require_exp": True},
        )
        raw = claims.get("payload")
        if not isinstance(raw, str):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=UNAUTHORIZED_DETAIL)
        return TokenPayload.model_validate(json.loads(raw))
    except (JWTError, ValueError, ValidationError) as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=UNAUTHORIZED_DETAIL) from exc


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    settings: Settings = Depends(get_settings),
) -> TokenPayload:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=UNAUTHORIZED_DETAIL)
    return decode_token(credentials.credentials, settings=settings)


async def get_current_admin(
    principal: TokenPayload = Depends(get_current_principal),
    settings: Settings = Depends(get_settings),
) -> TokenPayload:
    if principal.role != settings.security.admin_role:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return principal
