"""API tests for role management and the require_permission guard."""

from httpx import AsyncClient

from workshop_access.domain.entities import MembershipRecord
from workshop_access.shared.utils.generators import generate_cuid


def _headers(actor_id: str) -> dict[str, str]:
    return {"X-Actor-ID": actor_id}


async def _create_role(client: AsyncClient, workshop_id: str, owner_id: str, **body) -> dict:
    payload = {
        "name": "Editor",
        "permissions": [{"resource": "task", "action": "update"}],
        **body,
    }
    response = await client.post(
        f"/api/v1/workshops/{workshop_id}/roles", json=payload, headers=_headers(owner_id)
    )
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_role(client: AsyncClient, workshop_id: str, owner_id: str) -> None:
    role = await _create_role(client, workshop_id, owner_id)
    assert role["tenant_id"] == workshop_id
    assert role["scope"] == "workshop"
    assert role["permissions"] == [{"resource": "task", "action": "update", "polarity": "grant"}]


async def test_create_role_forbidden_for_non_manager(
    client: AsyncClient, workshop_id: str, actor_id: str
) -> None:
    response = await client.post(
        f"/api/v1/workshops/{workshop_id}/roles",
        json={"name": "Editor"},
        headers=_headers(actor_id),
    )
    assert response.status_code == 403
    assert response.json()["error"] == "PERMISSION_DENIED"


async def test_create_role_rejects_separator_in_permission(
    client: AsyncClient, workshop_id: str, owner_id: str
) -> None:
    response = await client.post(
        f"/api/v1/workshops/{workshop_id}/roles",
        json={"name": "Bad", "permissions": [{"resource": "ta|sk", "action": "view"}]},
        headers=_headers(owner_id),
    )
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "resource"}


async def test_assign_then_check(
    client: AsyncClient, memberships, workshop_id: str, owner_id: str, actor_id: str
) -> None:
    """Assignment takes effect on the next check; a second assignment conflicts."""
    memberships.add(MembershipRecord(tenant_id=workshop_id, user_id=actor_id))
    role = await _create_role(client, workshop_id, owner_id)
    check = {"action": "update", "resource": "task"}
    url = f"/api/v1/workshops/{workshop_id}/permissions/check"
    before = await client.post(url, json=check, headers=_headers(actor_id))

    assigned = await client.post(
        f"/api/v1/workshops/{workshop_id}/roles/{role['id']}/assignments",
        json={"user_id": actor_id},
        headers=_headers(owner_id),
    )
    duplicate = await client.post(
        f"/api/v1/workshops/{workshop_id}/roles/{role['id']}/assignments",
        json={"user_id": actor_id},
        headers=_headers(owner_id),
    )
    after = await client.post(url, json=check, headers=_headers(actor_id))

    assert before.json()["granted"] is False
    assert assigned.status_code == 201
    assert assigned.json()["user_id"] == actor_id
    assert duplicate.status_code == 409
    assert after.json()["granted"] is True


async def test_revoke_and_delete(
    client: AsyncClient, workshop_id: str, owner_id: str, actor_id: str
) -> None:
    role = await _create_role(client, workshop_id, owner_id)
    base = f"/api/v1/workshops/{workshop_id}/roles/{role['id']}"
    await client.post(f"{base}/assignments", json={"user_id": actor_id}, headers=_headers(owner_id))

    revoked = await client.delete(f"{base}/assignments/{actor_id}", headers=_headers(owner_id))
    deleted = await client.delete(base, headers=_headers(owner_id))
    missing = await client.patch(base, json={"name": "x"}, headers=_headers(owner_id))

    assert revoked.status_code == 204
    assert deleted.status_code == 204
    assert missing.status_code == 404


async def test_update_role(client: AsyncClient, workshop_id: str, owner_id: str) -> None:
    role = await _create_role(client, workshop_id, owner_id)
    response = await client.patch(
        f"/api/v1/workshops/{workshop_id}/roles/{role['id']}",
        json={"permissions": [{"resource": "task", "action": "delete", "polarity": "deny"}]},
        headers=_headers(owner_id),
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Editor"
    assert response.json()["permissions"][0]["polarity"] == "deny"


async def test_team_role_requires_scope_id(
    client: AsyncClient, workshop_id: str, owner_id: str
) -> None:
    role = await _create_role(client, workshop_id, owner_id, scope="team")
    response = await client.post(
        f"/api/v1/workshops/{workshop_id}/roles/{role['id']}/assignments",
        json={"user_id": generate_cuid()},
        headers=_headers(owner_id),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_user_roles_guarded_by_permission(
    client: AsyncClient, workshop_id: str, owner_id: str, actor_id: str
) -> None:
    """GET user roles needs view on role; the owner passes, a stranger gets 403."""
    role = await _create_role(client, workshop_id, owner_id)
    await client.post(
        f"/api/v1/workshops/{workshop_id}/roles/{role['id']}/assignments",
        json={"user_id": actor_id},
        headers=_headers(owner_id),
    )
    url = f"/api/v1/workshops/{workshop_id}/users/{actor_id}/roles"

    allowed = await client.get(url, headers=_headers(owner_id))
    forbidden = await client.get(url, headers=_headers(generate_cuid()))

    assert allowed.status_code == 200
    assert [a["role_id"] for a in allowed.json()] == [role["id"]]
    assert forbidden.status_code == 403
    assert forbidden.json()["details"] == {"resource": "role", "action": "view"}


async def test_list_and_get_roles(
    client: AsyncClient, workshop_id: str, owner_id: str, actor_id: str
) -> None:
    """Role listing and lookup need view on role; unknown roles are 404."""
    role = await _create_role(client, workshop_id, owner_id)
    base = f"/api/v1/workshops/{workshop_id}/roles"

    listed = await client.get(base, headers=_headers(owner_id))
    fetched = await client.get(f"{base}/{role['id']}", headers=_headers(owner_id))
    missing = await client.get(f"{base}/{generate_cuid()}", headers=_headers(owner_id))
    forbidden = await client.get(base, headers=_headers(actor_id))

    assert listed.status_code == 200
    assert [r["id"] for r in listed.json()] == [role["id"]]
    assert fetched.status_code == 200
    assert fetched.json()["name"] == "Editor"
    assert missing.status_code == 404
    assert forbidden.status_code == 403
