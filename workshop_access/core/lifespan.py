"""Application lifespan: startup and shutdown.

Wires the permission engine, role service and, when Redis is enabled,
the invalidation publisher and listener task. No business logic here.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from workshop_access.application.services import PermissionEngine, RoleService
from workshop_access.core.config import get_settings
from workshop_access.infrastructure.cache import DecisionCache
from workshop_access.infrastructure.directories import (
    InMemoryMembershipDirectory,
    InMemoryProjectDirectory,
    InMemoryRoleAssignmentStore,
    InMemoryRoleStore,
    InMemoryTeamDirectory,
    InMemoryWorkshopDirectory,
)
from workshop_access.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, directories and stores, Redis publisher and
    subscriber (if enabled), engine, role service, listener task.
    Shutdown order: listener task cancel, Redis disconnect.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    roles = InMemoryRoleStore()
    assignments = InMemoryRoleAssignmentStore(roles)
    workshops = InMemoryWorkshopDirectory()
    teams = InMemoryTeamDirectory()
    app.state.workshops = workshops
    app.state.memberships = InMemoryMembershipDirectory()
    app.state.projects = InMemoryProjectDirectory()
    app.state.teams = teams

    publisher = None
    subscriber = None
    if settings.redis_enabled:
        from workshop_access.infrastructure.messaging import (
            RedisInvalidationPublisher,
            RedisInvalidationSubscriber,
        )

        publisher = RedisInvalidationPublisher()
        await publisher.connect()
        subscriber = RedisInvalidationSubscriber()
        await subscriber.connect()

    engine = PermissionEngine(
        workshops=workshops,
        memberships=app.state.memberships,
        projects=app.state.projects,
        teams=teams,
        assignments=assignments,
        cache=DecisionCache(ttl_seconds=settings.permission_cache_ttl_seconds),
        broadcaster=publisher,
    )
    app.state.permission_engine = engine
    app.state.role_service = RoleService(roles, assignments, workshops, engine)
    app.state.invalidation_publisher = publisher
    app.state.invalidation_subscriber = subscriber

    if subscriber is not None:
        from workshop_access.infrastructure.messaging import run_invalidation_listener

        app.state.invalidation_listener_task = asyncio.create_task(
            run_invalidation_listener(engine, subscriber)
        )
    else:
        app.state.invalidation_listener_task = None

    logger.info(
        "Permission engine %s started (ttl=%ss, redis=%s)",
        engine.instance_id,
        settings.permission_cache_ttl_seconds,
        settings.redis_enabled,
    )

    yield

    # ---- Shutdown ----
    listener_task = getattr(app.state, "invalidation_listener_task", None)
    if listener_task is not None:
        listener_task.cancel()
        try:
            await listener_task
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("Invalidation listener task had failed")
        logger.info("Invalidation listener task stopped")

    for client in (
        getattr(app.state, "invalidation_subscriber", None),
        getattr(app.state, "invalidation_publisher", None),
    ):
        if client is not None:
            await client.disconnect()
