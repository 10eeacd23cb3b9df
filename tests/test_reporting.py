"""
tests.test_reporting

Denial reports and status mapping.
"""

from __future__ import annotations

import pytest

from resource_hub.auth.models import Principal, Role
from resource_hub.authz.decisions import AuthorizationDecision, DenyReason
from resource_hub.authz.operations import EntityType, Operation
from resource_hub.authz.reporting import build_denial_report, status_code_for
from resource_hub.settings import Settings


def test_not_owner_report_names_principal_and_record() -> None:
    principal = Principal(identity="u1", role=Role.member)
    decision = AuthorizationDecision.deny(DenyReason.not_owner, principal)

    report = build_denial_report(
        decision, operation=Operation.update, entity_type=EntityType.resource, record_id="r1"
    )

    assert report.reason is DenyReason.not_owner
    assert report.message == "User u1 is not authorized to update this resource"
    assert report.record_id == "r1"
    assert report.principal_id == "u1"


def test_insufficient_role_report_names_role() -> None:
    principal = Principal(identity="m1", role=Role.moderator)
    decision = AuthorizationDecision.deny(DenyReason.insufficient_role, principal)

    report = build_denial_report(decision, operation=Operation.delete, entity_type=EntityType.resource)

    assert report.message == "User role moderator is not authorized to delete resource"


def test_unauthenticated_report_has_no_principal() -> None:
    decision = AuthorizationDecision.deny(DenyReason.unauthenticated)

    report = build_denial_report(decision, operation=Operation.list, entity_type=EntityType.user)

    assert report.principal_id is None
    assert report.model_dump(mode="json")["reason"] == "Unauthenticated"


def test_reports_are_deterministic() -> None:
    principal = Principal(identity="u1", role=Role.member)
    decision = AuthorizationDecision.deny(DenyReason.not_owner, principal)

    first = build_denial_report(decision, operation=Operation.read, entity_type=EntityType.resource)
    second = build_denial_report(decision, operation=Operation.read, entity_type=EntityType.resource)

    assert first == second


def test_allow_cannot_be_reported() -> None:
    decision = AuthorizationDecision.allow(Principal(identity="u1", role=Role.member))

    with pytest.raises(ValueError):
        build_denial_report(decision, operation=Operation.read, entity_type=EntityType.resource)


@pytest.mark.parametrize(
    ("configured", "reason", "expected"),
    [
        (401, DenyReason.unauthenticated, 401),
        (401, DenyReason.insufficient_role, 401),
        (401, DenyReason.not_owner, 401),
        (403, DenyReason.unauthenticated, 401),
        (403, DenyReason.insufficient_role, 403),
        (403, DenyReason.not_owner, 403),
    ],
)
def test_status_mapping(configured: int, reason: DenyReason, expected: int) -> None:
    settings = Settings(forbidden_status_code=configured)
    assert status_code_for(reason, settings) == expected
