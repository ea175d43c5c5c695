"""Pytest configuration and fixtures for workshop-access.

Engine and service fixtures are wired on the in-memory directories and
stores. HTTP tests build an app whose state is populated from the same
fixtures (ASGITransport does not run the lifespan).
"""

from collections.abc import Awaitable, Callable, Iterable

import pytest
from httpx import ASGITransport, AsyncClient

from workshop_access.application.services import PermissionEngine, RoleService
from workshop_access.core.config import get_settings
from workshop_access.domain.entities import (
    Permission,
    Role,
    RoleAssignment,
    WorkshopRecord,
)
from workshop_access.domain.enums import PermissionScope
from workshop_access.infrastructure.cache import DecisionCache
from workshop_access.infrastructure.directories import (
    InMemoryMembershipDirectory,
    InMemoryProjectDirectory,
    InMemoryRoleAssignmentStore,
    InMemoryRoleStore,
    InMemoryTeamDirectory,
    InMemoryWorkshopDirectory,
)
from workshop_access.main import create_app
from workshop_access.shared.utils.generators import generate_cuid


class FakeClock:
    """Manually advanced monotonic clock for TTL tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Each test sees settings built from the current environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def workshop_id() -> str:
    return generate_cuid()


@pytest.fixture
def owner_id() -> str:
    return generate_cuid()


@pytest.fixture
def actor_id() -> str:
    return generate_cuid()


@pytest.fixture
def workshops(workshop_id: str, owner_id: str) -> InMemoryWorkshopDirectory:
    """Directory holding one private workshop owned by owner_id."""
    return InMemoryWorkshopDirectory([WorkshopRecord(id=workshop_id, owner_id=owner_id)])


@pytest.fixture
def memberships() -> InMemoryMembershipDirectory:
    return InMemoryMembershipDirectory()


@pytest.fixture
def projects() -> InMemoryProjectDirectory:
    return InMemoryProjectDirectory()


@pytest.fixture
def teams() -> InMemoryTeamDirectory:
    return InMemoryTeamDirectory()


@pytest.fixture
def roles() -> InMemoryRoleStore:
    return InMemoryRoleStore()


@pytest.fixture
def assignments(roles: InMemoryRoleStore) -> InMemoryRoleAssignmentStore:
    return InMemoryRoleAssignmentStore(roles)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> DecisionCache:
    return DecisionCache(ttl_seconds=60, clock=clock)


@pytest.fixture
def engine(
    workshops: InMemoryWorkshopDirectory,
    memberships: InMemoryMembershipDirectory,
    projects: InMemoryProjectDirectory,
    teams: InMemoryTeamDirectory,
    assignments: InMemoryRoleAssignmentStore,
    cache: DecisionCache,
) -> PermissionEngine:
    return PermissionEngine(
        workshops=workshops,
        memberships=memberships,
        projects=projects,
        teams=teams,
        assignments=assignments,
        cache=cache,
    )


@pytest.fixture
def grant(
    roles: InMemoryRoleStore,
    assignments: InMemoryRoleAssignmentStore,
    workshop_id: str,
    owner_id: str,
) -> Callable[..., Awaitable[RoleAssignment]]:
    """Create a role holding permissions and assign it to a user, bypassing RoleService."""

    async def _grant(
        user_id: str,
        scope: PermissionScope,
        permissions: Iterable[Permission],
        scope_id: str | None = None,
        tenant_id: str | None = None,
    ) -> RoleAssignment:
        tenant = tenant_id or workshop_id
        role = await roles.create(
            Role(
                id=generate_cuid(),
                tenant_id=tenant,
                name=f"{scope.value} role",
                scope=scope,
                permissions=list(permissions),
            )
        )
        return await assignments.create(
            RoleAssignment(
                id=generate_cuid(),
                tenant_id=tenant,
                role_id=role.id,
                user_id=user_id,
                scope=scope,
                scope_id=scope_id,
                assigned_by=owner_id,
                role=role,
            )
        )

    return _grant


@pytest.fixture
def role_service(
    roles: InMemoryRoleStore,
    assignments: InMemoryRoleAssignmentStore,
    workshops: InMemoryWorkshopDirectory,
    engine: PermissionEngine,
) -> RoleService:
    return RoleService(roles, assignments, workshops, engine)


@pytest.fixture
async def client(engine: PermissionEngine, role_service: RoleService) -> AsyncClient:
    """Async HTTP client against an app wired to the engine and role service fixtures."""
    app = create_app()
    app.state.permission_engine = engine
    app.state.role_service = role_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
