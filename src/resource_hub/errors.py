"""
resource_hub.errors

Domain exception types shared by the auth, authz and service layers.

Responsibilities:
- Separate credential, authorization and existence failures so the API layer
  can map each to its status code without inspecting messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from resource_hub.authz.operations import EntityType
    from resource_hub.authz.reporting import DenialReport


class InvalidCredential(Exception):
    """Raised by credential verifiers for malformed, expired or badly signed tokens."""


class AuthenticationFailed(Exception):
    """Raised by the principal resolver; always maps to `Unauthenticated`."""


class AuthorizationDenied(Exception):
    """
    Terminal authorization failure surfaced at the HTTP boundary.
    """

    def __init__(self, report: DenialReport) -> None:
        self.report = report
        super().__init__(report.message)


class RecordNotFound(Exception):
    def __init__(self, entity_type: EntityType, record_id: str) -> None:
        self.entity_type = entity_type
        self.record_id = record_id
        super().__init__(f"{entity_type.value} not found with id of {record_id}")


class Conflict(Exception):
    """Raised when a write would violate a uniqueness constraint."""


# --- Module Notes -----------------------------------------------------------
# `RecordNotFound` is not an `AuthorizationDenied`: existence is checked before
# ownership and reported as 404.
