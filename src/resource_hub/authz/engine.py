"""
resource_hub.authz.engine

Authorization decision engine.

Responsibilities:
- Compose principal resolution, the role policy and the ownership policy into a
  single Allow/Deny decision per request.
- Run the role gate before any record lookup.
- Check record existence before ownership and raise `RecordNotFound` separately.

The engine keeps no state between calls and performs no writes; the same inputs
against the same backing stores always produce the same decision.
"""

from __future__ import annotations

from resource_hub.auth.models import Principal
from resource_hub.auth.resolver import PrincipalResolver
from resource_hub.authz.decisions import AuthorizationDecision, DenyReason
from resource_hub.authz.operations import RECORD_OPERATIONS, EntityType, Operation
from resource_hub.authz.ownership_policy import OwnedRecord, list_scope, owner_allows
from resource_hub.authz.ports import RecordStore
from resource_hub.authz.role_policy import OwnershipRule, rule_for
from resource_hub.errors import AuthenticationFailed, RecordNotFound


class AuthorizationEngine:
    def __init__(self, *, resolver: PrincipalResolver, records: RecordStore) -> None:
        self._resolver = resolver
        self._records = records

    async def authorize(
        self,
        credential: str | None,
        operation: Operation,
        entity_type: EntityType,
        record_id: str | None = None,
    ) -> AuthorizationDecision:
        try:
            principal = await self._resolver.resolve(credential)
        except AuthenticationFailed:
            return AuthorizationDecision.deny(DenyReason.unauthenticated)
        return await self.authorize_principal(principal, operation, entity_type, record_id)

    async def authorize_principal(
        self,
        principal: Principal,
        operation: Operation,
        entity_type: EntityType,
        record_id: str | None = None,
    ) -> AuthorizationDecision:
        rule = rule_for(entity_type, operation)

        # RoleCheck: no record is touched for roles that can never do this.
        if not rule.permits(principal.role):
            return AuthorizationDecision.deny(DenyReason.insufficient_role, principal)

        if rule.ownership is OwnershipRule.list_scope:
            return AuthorizationDecision.allow(
                principal, scope_owner=list_scope(principal, entity_type)
            )

        if rule.ownership is OwnershipRule.self_only:
            record_id = principal.identity

        if operation not in RECORD_OPERATIONS:
            return AuthorizationDecision.allow(principal)

        if record_id is None:
            raise ValueError(f"{operation.value} {entity_type.value} requires a record id")

        # Existence before ownership.
        owner = await self._records.load_owner(entity_type, record_id)
        if owner is None:
            raise RecordNotFound(entity_type, record_id)

        if rule.grants_outright(principal.role):
            return AuthorizationDecision.allow(principal)

        record = OwnedRecord(id=record_id, owner=owner)
        if not owner_allows(principal, record, operation, entity_type):
            return AuthorizationDecision.deny(DenyReason.not_owner, principal)
        return AuthorizationDecision.allow(principal)


# --- Module Notes -----------------------------------------------------------
# Store failures (connection errors, timeouts) propagate unchanged; there is no
# partial decision to roll back because nothing is written before Allow.
