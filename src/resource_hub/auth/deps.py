"""
resource_hub.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Extract the bearer credential at the HTTP boundary.
- Build the request-scoped resolver + decision engine.
- Provide the `authorize(...)` dependency factory used by every protected route.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from resource_hub.api.deps import db_session, settings_dep
from resource_hub.auth.jwt import JwtConfig, JwtCredentialVerifier
from resource_hub.auth.models import Principal
from resource_hub.auth.resolver import PrincipalResolver
from resource_hub.authz.decisions import AuthorizationDecision
from resource_hub.authz.engine import AuthorizationEngine
from resource_hub.authz.operations import EntityType, Operation
from resource_hub.authz.reporting import build_denial_report, log_denial
from resource_hub.db.repositories.records import SqlRecordStore
from resource_hub.db.repositories.users import UserRepo
from resource_hub.errors import AuthorizationDenied
from resource_hub.settings import Settings

_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True, slots=True)
class Authorized:
    """
    Result of an Allow decision, handed to the route handler as a plain value.
    """

    principal: Principal
    decision: AuthorizationDecision
    record_id: str | None = None


def bearer_credential(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> str | None:
    if creds is None or creds.scheme.lower() != "bearer" or not creds.credentials:
        return None
    return creds.credentials


def get_authorization_engine(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> AuthorizationEngine:
    resolver = PrincipalResolver(
        verifier=JwtCredentialVerifier(JwtConfig.from_settings(settings)),
        principals=UserRepo(session),
    )
    return AuthorizationEngine(resolver=resolver, records=SqlRecordStore(session))


def authorize(
    operation: Operation,
    entity_type: EntityType,
    *,
    record_param: str | None = None,
):
    """
    Dependency factory: resolve the caller and run the decision engine for
    `operation` on `entity_type` (record id taken from the `record_param` path
    parameter). Raises `AuthorizationDenied` on Deny.
    """

    async def _dep(
        request: Request,
        credential: str | None = Depends(bearer_credential),
        engine: AuthorizationEngine = Depends(get_authorization_engine),
    ) -> Authorized:
        record_id = request.path_params.get(record_param) if record_param else None
        decision = await engine.authorize(credential, operation, entity_type, record_id)
        principal = decision.principal
        if decision.allowed and principal is not None:
            return Authorized(principal=principal, decision=decision, record_id=record_id)

        report = build_denial_report(
            decision,
            operation=operation,
            entity_type=entity_type,
            record_id=record_id,
        )
        log_denial(report)
        raise AuthorizationDenied(report)

    return _dep


# --- Module Notes -----------------------------------------------------------
# Handlers receive `Authorized` and pass its principal/decision on to services
# explicitly; nothing is stashed on `request.state`.
