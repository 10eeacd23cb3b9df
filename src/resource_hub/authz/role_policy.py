"""
resource_hub.authz.role_policy

Declarative role policy: which roles may invoke which operation on which entity type.

Responsibilities:
- Hold the single (entity type, operation) -> rule table.
- Answer "may this role ever perform this operation" without touching any record.
- Tell the decision engine whether a permitted role still needs an ownership check.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from resource_hub.auth.models import Role
from resource_hub.authz.operations import EntityType, Operation

ALL_ROLES: frozenset[Role] = frozenset(Role)
PRIVILEGED_ROLES: frozenset[Role] = frozenset({Role.admin, Role.moderator})
ADMIN_ONLY: frozenset[Role] = frozenset({Role.admin})


class OwnershipRule(enum.StrEnum):
    # Role gate alone decides.
    none = "none"
    # Record owner, or a role in `override_roles`.
    record_owner = "record_owner"
    # List query restricted to the caller's records unless the role overrides.
    list_scope = "list_scope"
    # The record is the caller's own (profile endpoints).
    self_only = "self_only"


@dataclass(frozen=True, slots=True)
class PolicyRule:
    roles: frozenset[Role]
    ownership: OwnershipRule = OwnershipRule.none
    override_roles: frozenset[Role] = frozenset()

    def permits(self, role: Role) -> bool:
        return role in self.roles

    def grants_outright(self, role: Role) -> bool:
        if not self.permits(role):
            return False
        if self.ownership is OwnershipRule.none:
            return True
        return role in self.override_roles


DENY_ALL = PolicyRule(roles=frozenset())


ROLE_POLICY: Mapping[tuple[EntityType, Operation], PolicyRule] = MappingProxyType(
    {
        (EntityType.resource, Operation.list): PolicyRule(
            roles=ALL_ROLES,
            ownership=OwnershipRule.list_scope,
            override_roles=PRIVILEGED_ROLES,
        ),
        (EntityType.resource, Operation.read): PolicyRule(
            roles=ALL_ROLES,
            ownership=OwnershipRule.record_owner,
            override_roles=PRIVILEGED_ROLES,
        ),
        (EntityType.resource, Operation.create): PolicyRule(roles=PRIVILEGED_ROLES),
        # Moderators get no override here: only admin may update another owner's record.
        (EntityType.resource, Operation.update): PolicyRule(
            roles=ALL_ROLES,
            ownership=OwnershipRule.record_owner,
            override_roles=ADMIN_ONLY,
        ),
        (EntityType.resource, Operation.delete): PolicyRule(roles=ADMIN_ONLY),
        (EntityType.user, Operation.list): PolicyRule(roles=ADMIN_ONLY),
        (EntityType.user, Operation.read): PolicyRule(roles=ADMIN_ONLY),
        (EntityType.user, Operation.update): PolicyRule(roles=ADMIN_ONLY),
        (EntityType.user, Operation.delete): PolicyRule(roles=ADMIN_ONLY),
        (EntityType.profile, Operation.read): PolicyRule(
            roles=ALL_ROLES, ownership=OwnershipRule.self_only
        ),
        (EntityType.profile, Operation.update): PolicyRule(
            roles=ALL_ROLES, ownership=OwnershipRule.self_only
        ),
        # Audit trails are listed by entity id and outlive the record, so there is
        # no existence or ownership step.
        (EntityType.audit, Operation.list): PolicyRule(roles=ADMIN_ONLY),
    }
)


def rule_for(entity_type: EntityType, operation: Operation) -> PolicyRule:
    # Anything missing from the table is denied to every role.
    return ROLE_POLICY.get((entity_type, operation), DENY_ALL)


def role_allows(role: Role, operation: Operation, entity_type: EntityType) -> bool:
    return rule_for(entity_type, operation).permits(role)


# --- Module Notes -----------------------------------------------------------
# Handlers never compare roles themselves; every route goes through
# `authz.engine.AuthorizationEngine`, which reads this table.
