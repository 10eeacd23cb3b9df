"""
resource_hub.authz.reporting

Structured denial reporting.

Responsibilities:
- Turn a Deny decision into a deterministic `DenialReport` for the caller.
- Log denials as structured `authz.denied` events.
- Map denial reasons to HTTP status codes.
"""

from __future__ import annotations

from pydantic import BaseModel
from starlette.status import HTTP_401_UNAUTHORIZED

from resource_hub.authz.decisions import AuthorizationDecision, DenyReason
from resource_hub.authz.operations import EntityType, Operation
from resource_hub.observability.logging import get_logger
from resource_hub.settings import Settings

log = get_logger(__name__)

_VERBS: dict[Operation, str] = {
    Operation.list: "list",
    Operation.read: "access",
    Operation.create: "create",
    Operation.update: "update",
    Operation.delete: "delete",
}


class DenialReport(BaseModel):
    reason: DenyReason
    message: str
    operation: Operation
    entity_type: EntityType
    record_id: str | None = None
    principal_id: str | None = None


def build_denial_report(
    decision: AuthorizationDecision,
    *,
    operation: Operation,
    entity_type: EntityType,
    record_id: str | None = None,
) -> DenialReport:
    if decision.allowed or decision.reason is None:
        raise ValueError("Cannot report an Allow decision")

    principal = decision.principal
    verb = _VERBS[operation]
    noun = entity_type.value.lower()

    if decision.reason is DenyReason.unauthenticated or principal is None:
        message = "Not authorized to access this route"
    elif decision.reason is DenyReason.insufficient_role:
        message = f"User role {principal.role.value} is not authorized to {verb} {noun}"
    else:
        message = f"User {principal.identity} is not authorized to {verb} this {noun}"

    return DenialReport(
        reason=decision.reason,
        message=message,
        operation=operation,
        entity_type=entity_type,
        record_id=record_id,
        principal_id=principal.identity if principal is not None else None,
    )


def log_denial(report: DenialReport) -> None:
    log.warning(
        "authz.denied",
        reason=report.reason.value,
        operation=report.operation.value,
        entity_type=report.entity_type.value,
        record_id=report.record_id,
        principal_id=report.principal_id,
    )


def status_code_for(reason: DenyReason, settings: Settings) -> int:
    if reason is DenyReason.unauthenticated:
        return HTTP_401_UNAUTHORIZED
    return settings.forbidden_status_code


# --- Module Notes -----------------------------------------------------------
# Every reason stays visible in the body even when InsufficientRole and NotOwner
# share a status code.
