from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from content_api.access import regions_of
from content_api.config import Settings, get_settings
from content_api.errors import Unauthorized

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Caller:
    """Authenticated identity: the token subject plus its validated claims."""

    subject: str
    claims: Dict[str, Any] = field(default_factory=dict)

    @property
    def regions(self) -> set[str]:
        return regions_of(self.claims)


def create_access_token(
    subject: str,
    claims: Dict[str, Any],
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
    now_utc: Optional[datetime] = None,
) -> str:
    """
    Mint a signed token. Production tokens come from the identity provider;
    this is for tests and local development.
    """
    current_time = now_utc if now_utc is not None else datetime.now(timezone.utc)
    to_encode: Dict[str, Any] = dict(claims)
    to_encode["sub"] = subject
    to_encode["iat"] = current_time
    to_encode["exp"] = current_time + (expires_delta or timedelta(hours=1))
    if settings.jwt_audience:
        to_encode["aud"] = settings.jwt_audience
    if settings.jwt_issuer:
        to_encode["iss"] = settings.jwt_issuer
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> Optional[Dict[str, Any]]:
    if not settings.jwt_secret:
        return None
    options = {"verify_aud": settings.jwt_audience is not None}
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options=options,
        )
    except JWTError:
        return None


def get_caller(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> Caller:
    if credentials is None or not credentials.credentials:
        raise Unauthorized("JWT required")

    claims = decode_access_token(credentials.credentials, settings)
    if claims is None:
        raise Unauthorized("Invalid token")

    subject = claims.get("sub")
    if not subject:
        raise Unauthorized("Token has no subject")

    return Caller(subject=str(subject), claims=claims)
