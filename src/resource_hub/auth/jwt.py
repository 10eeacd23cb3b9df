"""
resource_hub.auth.jwt

JWT issuing and validation helpers.

Responsibilities:
- Issue short-lived JWTs for local/dev scenarios and tests.
- Decode and validate JWTs with strict claim requirements (iss/aud/exp/iat/sub).
- Adapt JWT validation to the `CredentialVerifier` interface used by the resolver.

Note:
- Tokens carry only the subject. Roles are looked up at resolution time.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from resource_hub.auth.models import VerifiedCredential
from resource_hub.errors import InvalidCredential
from resource_hub.settings import Settings


@dataclass(frozen=True, slots=True)
class JwtConfig:
    # Algorithm/issuer/audience are enforced during decoding.
    alg: str
    issuer: str
    audience: str
    secret: str

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            secret=settings.jwt_secret,
        )


class JwtValidationError(InvalidCredential):
    pass


def issue_token(
    *,
    cfg: JwtConfig,
    subject: str,
    ttl: timedelta = timedelta(hours=1),
) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "iss": cfg.issuer,
        "aud": cfg.audience,
        "sub": subject,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_and_validate(*, cfg: JwtConfig, token: str) -> dict[str, Any]:
    try:
        # jwt.decode enforces signature + registered claims (issuer/audience/exp, etc.).
        return jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=cfg.audience,
            options={
                "require": ["exp", "iat", "iss", "aud", "sub"],
            },
        )
    except InvalidTokenError as e:
        raise JwtValidationError(str(e)) from e


class JwtCredentialVerifier:
    """
    Credential verifier backed by HS/RS JWTs.
    """

    def __init__(self, cfg: JwtConfig) -> None:
        self._cfg = cfg

    async def verify(self, token: str) -> VerifiedCredential:
        payload = decode_and_validate(cfg=self._cfg, token=token)
        subject = str(payload.get("sub") or "").strip()
        if not subject:
            raise JwtValidationError("Token subject is empty")
        return VerifiedCredential(
            identity=subject,
            valid_until=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
        )


# --- Module Notes -----------------------------------------------------------
# Token issuing is used by `api/routers/dev_auth.py` (dev convenience) and tests.
