"""
resource_hub.authz.decisions

Authorization decision value types.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from resource_hub.auth.models import Principal


class DenyReason(enum.StrEnum):
    unauthenticated = "Unauthenticated"
    insufficient_role = "InsufficientRole"
    not_owner = "NotOwner"


@dataclass(frozen=True, slots=True)
class AuthorizationDecision:
    """
    `Allow` or `Deny(reason)`.

    An allow carries the resolved principal so executors never re-resolve it, and
    for `List` the owner filter to apply (`scope_owner=None` means all records).
    """

    allowed: bool
    reason: DenyReason | None = None
    principal: Principal | None = None
    scope_owner: str | None = None

    @classmethod
    def allow(cls, principal: Principal, *, scope_owner: str | None = None) -> AuthorizationDecision:
        return cls(allowed=True, principal=principal, scope_owner=scope_owner)

    @classmethod
    def deny(cls, reason: DenyReason, principal: Principal | None = None) -> AuthorizationDecision:
        return cls(allowed=False, reason=reason, principal=principal)
