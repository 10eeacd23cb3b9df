"""
tests.conftest

Shared fixtures.

Responsibilities:
- In-memory fakes of the credential verifier, principal store and record store
  for driving the authorization engine without a database.
- A file-backed SQLite app + httpx client for API tests.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

import httpx
import pytest
import pytest_asyncio

from resource_hub.api.app import create_app
from resource_hub.auth.models import Role, VerifiedCredential
from resource_hub.auth.resolver import PrincipalResolver
from resource_hub.authz.engine import AuthorizationEngine
from resource_hub.authz.operations import EntityType
from resource_hub.errors import InvalidCredential
from resource_hub.settings import Settings


class FakeVerifier:
    def __init__(self) -> None:
        self.tokens: dict[str, VerifiedCredential] = {}

    async def verify(self, token: str) -> VerifiedCredential:
        try:
            return self.tokens[token]
        except KeyError:
            raise InvalidCredential("unknown token") from None


class FakePrincipalStore:
    def __init__(self) -> None:
        self.roles: dict[str, Role] = {}
        self.lookups: list[str] = []

    async def load_role(self, identity: str) -> Role | None:
        self.lookups.append(identity)
        return self.roles.get(identity)


class FakeRecordStore:
    def __init__(self) -> None:
        self.owners: dict[tuple[EntityType, str], str] = {}
        self.loads: list[tuple[EntityType, str]] = []

    async def load_owner(self, entity_type: EntityType, record_id: str) -> str | None:
        self.loads.append((entity_type, record_id))
        return self.owners.get((entity_type, record_id))

    async def list_scoped_by(self, entity_type: EntityType, owner: str | None) -> list[Any]:
        return [
            {"id": record_id, "owner": record_owner}
            for (kind, record_id), record_owner in self.owners.items()
            if kind is entity_type and (owner is None or record_owner == owner)
        ]


@dataclass
class AuthzHarness:
    verifier: FakeVerifier = field(default_factory=FakeVerifier)
    principals: FakePrincipalStore = field(default_factory=FakePrincipalStore)
    records: FakeRecordStore = field(default_factory=FakeRecordStore)

    @property
    def engine(self) -> AuthorizationEngine:
        resolver = PrincipalResolver(verifier=self.verifier, principals=self.principals)
        return AuthorizationEngine(resolver=resolver, records=self.records)

    def add_user(self, identity: str, role: Role) -> str:
        """Register a principal and return its bearer token."""
        token = f"token-{identity}"
        self.verifier.tokens[token] = VerifiedCredential(
            identity=identity,
            valid_until=datetime.now(tz=UTC) + timedelta(hours=1),
        )
        self.principals.roles[identity] = role
        # A user record is owned by the user itself.
        self.records.owners[(EntityType.user, identity)] = identity
        self.records.owners[(EntityType.profile, identity)] = identity
        return token

    def add_resource(self, record_id: str, owner: str) -> None:
        self.records.owners[(EntityType.resource, record_id)] = owner


@pytest.fixture
def harness() -> AuthzHarness:
    return AuthzHarness()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        log_level="WARNING",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'resource_hub.db'}",
    )


@pytest_asyncio.fixture
async def client(settings: Settings) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(settings=settings)

    # httpx ASGITransport does not run the lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
            yield http


SeedUser = Callable[..., Awaitable[tuple[dict[str, Any], dict[str, str]]]]


@pytest.fixture
def seed_user(client: httpx.AsyncClient) -> SeedUser:
    """Create a user through the dev router; returns (user, auth headers)."""

    async def _seed(name: str, role: str = "member") -> tuple[dict[str, Any], dict[str, str]]:
        r = await client.post(
            "/v1/dev/users",
            json={"name": name, "email": f"{name}@example.com", "role": role},
        )
        assert r.status_code == 201, r.text
        body = r.json()
        return body["user"], {"Authorization": f"Bearer {body['access_token']}"}

    return _seed
