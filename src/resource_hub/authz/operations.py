"""
resource_hub.authz.operations

Operation and entity-type vocabulary used by the authorization policies.
"""

from __future__ import annotations

import enum


class Operation(enum.StrEnum):
    list = "List"
    read = "Read"
    create = "Create"
    update = "Update"
    delete = "Delete"


class EntityType(enum.StrEnum):
    resource = "Resource"
    # Admin-managed user collection.
    user = "User"
    # The caller's own user record.
    profile = "Profile"
    # Append-only audit log, kept after the audited record is gone.
    audit = "Audit"


# Operations that address one existing record (existence is checked first).
RECORD_OPERATIONS: frozenset[Operation] = frozenset(
    {Operation.read, Operation.update, Operation.delete}
)
