"""
resource_hub.auth.resolver

Principal resolution: bearer credential -> authenticated `Principal`.

Responsibilities:
- Delegate signature/expiry checks to a `CredentialVerifier`.
- Load the subject's current role from the `PrincipalStore` on every call.
- Collapse every failure (missing, malformed, expired, unknown subject) into
  `AuthenticationFailed`.
"""

from __future__ import annotations

from datetime import UTC, datetime

from resource_hub.auth.models import Principal
from resource_hub.authz.ports import CredentialVerifier, PrincipalStore
from resource_hub.errors import AuthenticationFailed, InvalidCredential


class PrincipalResolver:
    def __init__(self, *, verifier: CredentialVerifier, principals: PrincipalStore) -> None:
        self._verifier = verifier
        self._principals = principals

    async def resolve(self, credential: str | None) -> Principal:
        if credential is None or not credential.strip():
            raise AuthenticationFailed("Missing bearer token")

        try:
            verified = await self._verifier.verify(credential.strip())
        except InvalidCredential as e:
            raise AuthenticationFailed("Invalid bearer token") from e

        if verified.valid_until <= datetime.now(tz=UTC):
            raise AuthenticationFailed("Bearer token expired")

        role = await self._principals.load_role(verified.identity)
        if role is None:
            raise AuthenticationFailed("Token subject no longer exists")

        return Principal(identity=verified.identity, role=role)
