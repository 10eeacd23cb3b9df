"""
resource_hub.authz.ports

Interfaces of the external collaborators consumed by the resolver and engine.

Responsibilities:
- Credential verification (signature/expiry).
- Principal role lookup.
- Record owner lookup and owner-scoped listing.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from resource_hub.auth.models import Role, VerifiedCredential
from resource_hub.authz.operations import EntityType


class CredentialVerifier(Protocol):
    async def verify(self, token: str) -> VerifiedCredential:
        """Return the verified subject or raise `InvalidCredential`."""
        ...


class PrincipalStore(Protocol):
    async def load_role(self, identity: str) -> Role | None: ...


class RecordStore(Protocol):
    async def load_owner(self, entity_type: EntityType, record_id: str) -> str | None: ...

    async def list_scoped_by(
        self, entity_type: EntityType, owner: str | None
    ) -> Sequence[Any]: ...


# --- Module Notes -----------------------------------------------------------
# SQL implementations live in `db.repositories` (`UserRepo`, `SqlRecordStore`);
# tests use in-memory fakes. Calls are single-shot: no retries anywhere.
