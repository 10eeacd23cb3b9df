"""
tests.test_auth_deps

The `authorize(...)` FastAPI dependency: Allow hand-off and denial logging.
"""

from __future__ import annotations

import pytest
from starlette.requests import Request
from structlog.testing import capture_logs

from resource_hub.auth.deps import Authorized, authorize
from resource_hub.auth.models import Role
from resource_hub.authz.decisions import DenyReason
from resource_hub.authz.operations import EntityType, Operation
from resource_hub.errors import AuthorizationDenied


def _request(**path_params: str) -> Request:
    return Request({"type": "http", "method": "GET", "path": "/", "path_params": path_params})


@pytest.mark.asyncio
async def test_allow_returns_principal_and_decision(harness) -> None:
    token = harness.add_user("u1", Role.member)
    harness.add_resource("r1", owner="u1")
    dep = authorize(Operation.read, EntityType.resource, record_param="resource_id")

    result = await dep(_request(resource_id="r1"), credential=token, engine=harness.engine)

    assert isinstance(result, Authorized)
    assert result.principal.identity == "u1"
    assert result.decision.allowed
    assert result.record_id == "r1"


@pytest.mark.asyncio
async def test_list_allow_carries_scope_owner(harness) -> None:
    token = harness.add_user("u1", Role.member)
    dep = authorize(Operation.list, EntityType.resource)

    result = await dep(_request(), credential=token, engine=harness.engine)

    assert result.record_id is None
    assert result.decision.scope_owner == "u1"


@pytest.mark.asyncio
async def test_not_owner_denial_is_logged_with_context(harness) -> None:
    token = harness.add_user("u1", Role.member)
    harness.add_resource("r2", owner="u2")
    dep = authorize(Operation.update, EntityType.resource, record_param="resource_id")

    with capture_logs() as logs, pytest.raises(AuthorizationDenied) as exc_info:
        await dep(_request(resource_id="r2"), credential=token, engine=harness.engine)

    assert exc_info.value.report.reason is DenyReason.not_owner
    denied = [e for e in logs if e["event"] == "authz.denied"]
    assert denied == [
        {
            "event": "authz.denied",
            "log_level": "warning",
            "reason": "NotOwner",
            "operation": "Update",
            "entity_type": "Resource",
            "record_id": "r2",
            "principal_id": "u1",
        }
    ]


@pytest.mark.asyncio
async def test_unauthenticated_denial_is_logged_without_principal(harness) -> None:
    dep = authorize(Operation.list, EntityType.resource)

    with capture_logs() as logs, pytest.raises(AuthorizationDenied):
        await dep(_request(), credential=None, engine=harness.engine)

    (event,) = [e for e in logs if e["event"] == "authz.denied"]
    assert event["reason"] == "Unauthenticated"
    assert event["principal_id"] is None
    assert event["record_id"] is None
