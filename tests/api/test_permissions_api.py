"""API tests for permission checks: decisions, identity header, 503 on collaborator failure."""

from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

from workshop_access.application.services import PermissionEngine
from workshop_access.domain.entities import MembershipRecord, Permission
from workshop_access.domain.enums import MembershipState, PermissionScope
from workshop_access.shared.utils.generators import generate_cuid


def _headers(actor_id: str) -> dict[str, str]:
    return {"X-Actor-ID": actor_id}


@pytest.fixture
def member(memberships, workshop_id: str, actor_id: str) -> str:
    """actor_id as an active member of the workshop."""
    memberships.add(MembershipRecord(tenant_id=workshop_id, user_id=actor_id))
    return actor_id


async def test_owner_check_granted(client: AsyncClient, workshop_id: str, owner_id: str) -> None:
    response = await client.post(
        f"/api/v1/workshops/{workshop_id}/permissions/check",
        json={"action": "delete", "resource": "workshop"},
        headers=_headers(owner_id),
    )
    assert response.status_code == 200
    assert response.json() == {
        "granted": True,
        "reason": "workshop owner/manager has full access",
        "source": "workshop",
    }


async def test_denied_check_is_200(client: AsyncClient, workshop_id: str, member: str) -> None:
    """A denial is a decision, not an error."""
    response = await client.post(
        f"/api/v1/workshops/{workshop_id}/permissions/check",
        json={"action": "update", "resource": "task"},
        headers=_headers(member),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["granted"] is False
    assert data["source"] is None


async def test_check_with_team_context(
    client: AsyncClient, grant, workshop_id: str, actor_id: str, member: str
) -> None:
    team_id = "cteam0000000000000000000"
    await grant(actor_id, PermissionScope.TEAM, [Permission("task", "update")], scope_id=team_id)

    response = await client.post(
        f"/api/v1/workshops/{workshop_id}/permissions/check",
        json={"action": "update", "resource": "task", "context": {"team_id": team_id}},
        headers=_headers(actor_id),
    )

    assert response.json()["granted"] is True
    assert response.json()["source"] == "team"


async def test_missing_actor_header_is_401(client: AsyncClient, workshop_id: str) -> None:
    response = await client.post(
        f"/api/v1/workshops/{workshop_id}/permissions/check",
        json={"action": "view", "resource": "task"},
    )
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"


async def test_missing_action_is_422(client: AsyncClient, workshop_id: str, owner_id: str) -> None:
    response = await client.post(
        f"/api/v1/workshops/{workshop_id}/permissions/check",
        json={"resource": "task"},
        headers=_headers(owner_id),
    )
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_collaborator_failure_is_503(
    client: AsyncClient, engine: PermissionEngine, workshop_id: str, owner_id: str
) -> None:
    """A failing directory maps to 503 and nothing is cached."""
    engine.workshops.is_owner_or_manager = AsyncMock(side_effect=RuntimeError("down"))

    response = await client.post(
        f"/api/v1/workshops/{workshop_id}/permissions/check",
        json={"action": "view", "resource": "task"},
        headers=_headers(owner_id),
    )

    assert response.status_code == 503
    assert response.json()["error"] == "COLLABORATOR_UNAVAILABLE"
    assert len(engine.cache) == 0


async def test_check_any_and_all(
    client: AsyncClient, grant, workshop_id: str, actor_id: str, member: str
) -> None:
    await grant(actor_id, PermissionScope.WORKSHOP, [Permission("task", "update")])
    body = {
        "requests": [
            {"action": "update", "resource": "task"},
            {"action": "delete", "resource": "task"},
        ]
    }

    any_response = await client.post(
        f"/api/v1/workshops/{workshop_id}/permissions/check-any",
        json=body,
        headers=_headers(actor_id),
    )
    all_response = await client.post(
        f"/api/v1/workshops/{workshop_id}/permissions/check-all",
        json=body,
        headers=_headers(actor_id),
    )

    assert any_response.json() == {"result": True}
    assert all_response.json() == {"result": False}


async def test_check_all_empty_is_true(client: AsyncClient, workshop_id: str, member: str) -> None:
    response = await client.post(
        f"/api/v1/workshops/{workshop_id}/permissions/check-all",
        json={"requests": []},
        headers=_headers(member),
    )
    assert response.json() == {"result": True}


async def test_non_member_cannot_ask(
    client: AsyncClient, memberships, workshop_id: str, actor_id: str
) -> None:
    """Permission routes are for workshop members; strangers and suspended members get 403."""
    memberships.add(
        MembershipRecord(
            tenant_id=workshop_id, user_id=actor_id, state=MembershipState.SUSPENDED
        )
    )
    url = f"/api/v1/workshops/{workshop_id}/permissions"

    suspended = await client.post(
        f"{url}/check", json={"action": "view", "resource": "task"}, headers=_headers(actor_id)
    )
    stranger = await client.post(
        f"{url}/check-any", json={"requests": []}, headers=_headers(generate_cuid())
    )

    assert suspended.status_code == 403
    assert suspended.json()["error"] == "PERMISSION_DENIED"
    assert stranger.status_code == 403
