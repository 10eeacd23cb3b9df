"""
resource_hub.auth.models

Auth domain models.

Responsibilities:
- Define the role set and the authenticated identity type (`Principal`).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime


class Role(enum.StrEnum):
    # Ordered by privilege: admin ⊇ moderator ⊇ member. Ownership overrides are
    # not purely hierarchical, see `authz.role_policy`.
    admin = "admin"
    moderator = "moderator"
    member = "member"


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity. Built per request, never persisted.
    """

    identity: str
    role: Role


@dataclass(frozen=True, slots=True)
class VerifiedCredential:
    # Output of a credential verifier: the subject and the token expiry.
    identity: str
    valid_until: datetime


# --- Module Notes -----------------------------------------------------------
# The role is never read from the credential; it is loaded from the principal
# store on every resolution so role changes apply on the next request.
