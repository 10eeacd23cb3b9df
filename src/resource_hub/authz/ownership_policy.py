"""
resource_hub.authz.ownership_policy

Per-record ownership rules for principals the role policy did not settle.

Responsibilities:
- Decide whether a principal may act on one loaded record given its owner.
- Compute the owner scope of `List` queries before any data is fetched.
- Stamp ownership onto new records at creation time.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from resource_hub.auth.models import Principal
from resource_hub.authz.operations import EntityType, Operation
from resource_hub.authz.role_policy import OwnershipRule, rule_for

# Client-supplied keys that could try to set ownership on create.
_OWNER_KEYS = ("owner", "created_by", "createdBy")


@dataclass(frozen=True, slots=True)
class OwnedRecord:
    id: str
    owner: str


def owner_allows(
    principal: Principal,
    record: OwnedRecord,
    operation: Operation,
    entity_type: EntityType,
) -> bool:
    rule = rule_for(entity_type, operation)
    if not rule.permits(principal.role):
        return False

    if rule.ownership is OwnershipRule.none:
        return True
    if rule.ownership is OwnershipRule.self_only:
        return record.id == principal.identity and record.owner == principal.identity
    # record_owner / list_scope
    if principal.role in rule.override_roles:
        return True
    return record.owner == principal.identity


def list_scope(principal: Principal, entity_type: EntityType) -> str | None:
    """
    Owner filter to apply to a `List` query, or None for "all records".

    Callers must have passed the role gate for `List` first.
    """

    rule = rule_for(entity_type, Operation.list)
    if rule.ownership is not OwnershipRule.list_scope:
        return None
    if principal.role in rule.override_roles:
        return None
    return principal.identity


def stamp_owner(principal: Principal, payload: Mapping[str, Any]) -> dict[str, Any]:
    # Ownership always comes from the principal, never from the request body.
    stamped = {k: v for k, v in payload.items() if k not in _OWNER_KEYS}
    stamped["owner"] = principal.identity
    return stamped
