"""Redis Pub/Sub for permission cache invalidation across engine instances.

The engine applies an invalidation locally, then publishes it. Every
instance runs run_invalidation_listener, which applies events published
by other instances. Delivery is best effort; the decision TTL bounds
staleness when a message is lost.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from dataclasses import asdict, dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

import redis.asyncio as redis

from workshop_access.core.config import get_settings
from workshop_access.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from workshop_access.application.services.permission_engine import PermissionEngine

logger = logging.getLogger(__name__)


class InvalidationKind(str, Enum):
    """Which cached decisions an event drops."""

    USER = "user"
    WORKSHOP = "workshop"
    ALL = "all"


@dataclass(frozen=True)
class InvalidationEvent:
    """Invalidation event payload for Redis.

    origin is the instance id of the publishing engine, so the publisher
    can skip its own echo.
    """

    kind: InvalidationKind
    origin: str
    tenant_id: str | None = None
    actor_id: str | None = None
    timestamp: str = ""

    def __post_init__(self) -> None:
        if self.kind == InvalidationKind.USER and not (self.actor_id and self.tenant_id):
            raise ValueError("user invalidation requires actor_id and tenant_id")
        if self.kind == InvalidationKind.WORKSHOP and not self.tenant_id:
            raise ValueError("workshop invalidation requires tenant_id")

    @classmethod
    def for_user(cls, origin: str, actor_id: str, tenant_id: str) -> InvalidationEvent:
        return cls(
            kind=InvalidationKind.USER,
            origin=origin,
            tenant_id=tenant_id,
            actor_id=actor_id,
            timestamp=utc_now().isoformat(),
        )

    @classmethod
    def for_workshop(cls, origin: str, tenant_id: str) -> InvalidationEvent:
        return cls(
            kind=InvalidationKind.WORKSHOP,
            origin=origin,
            tenant_id=tenant_id,
            timestamp=utc_now().isoformat(),
        )

    @classmethod
    def for_all(cls, origin: str) -> InvalidationEvent:
        return cls(kind=InvalidationKind.ALL, origin=origin, timestamp=utc_now().isoformat())

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON publish."""
        data = asdict(self)
        data["kind"] = self.kind.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InvalidationEvent:
        """Deserialize from Redis message."""
        data = dict(data)
        data["kind"] = InvalidationKind(data["kind"])
        return cls(**data)


class _RedisPubSubBase:
    """Shared Redis connection and channel logic for invalidation pub/sub."""

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        channel: str | None = None,
    ) -> None:
        """Initialize. Pass redis_client for DI/testing."""
        self.redis = redis_client
        self.settings = get_settings()
        self.channel = channel or self.settings.invalidation_channel
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self._connected:
            return
        if self.redis is None:
            try:
                self.redis = redis.Redis(
                    host=self.settings.redis_host,
                    port=self.settings.redis_port,
                    db=self.settings.redis_db,
                    password=self.settings.redis_password.get_secret_value() if self.settings.redis_password else None,
                    decode_responses=True,
                    socket_connect_timeout=5,
                )
                await self.redis.ping()
                self._connected = True
                logger.info("Redis invalidation pub/sub connected")
            except (redis.ConnectionError, redis.TimeoutError) as e:
                logger.warning("Redis invalidation pub/sub connection failed: %s", e)
                self._connected = False
                self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.close()
            self.redis = None
            self._connected = False
            logger.info("Redis invalidation pub/sub disconnected")

    def is_available(self) -> bool:
        """Return True if Redis is connected."""
        return self._connected and self.redis is not None


class RedisInvalidationPublisher(_RedisPubSubBase):
    """Publishes invalidation events (implements IInvalidationBroadcaster)."""

    async def publish(self, event: InvalidationEvent) -> bool:
        """Publish event to the invalidation channel.

        Returns:
            True if published, False if Redis unavailable or the publish failed.
        """
        if not self.is_available() or self.redis is None:
            logger.debug("Redis not available, skipping invalidation publish")
            return False
        try:
            await self.redis.publish(self.channel, json.dumps(event.to_dict()))
            logger.debug("Published %s invalidation to %s", event.kind.value, self.channel)
        except redis.RedisError:
            logger.exception("Failed to publish invalidation event")
            return False
        else:
            return True


class RedisInvalidationSubscriber(_RedisPubSubBase):
    """Subscribes to invalidation events.

    listen() uses a locally-scoped PubSub that is closed in finally.
    """

    async def listen(self) -> AsyncIterator[InvalidationEvent]:
        """Yield invalidation events as they arrive. Malformed messages are skipped."""
        if not self.is_available() or self.redis is None:
            logger.warning("Redis not available for invalidation subscription")
            return
        pubsub = self.redis.pubsub()
        try:
            await pubsub.subscribe(self.channel)
            logger.info("Subscribed to %s", self.channel)
            async for message in pubsub.listen():
                if message["type"] != "message":
                    continue
                try:
                    data = json.loads(message["data"])
                    yield InvalidationEvent.from_dict(data)
                except (json.JSONDecodeError, KeyError, TypeError, ValueError):
                    logger.exception("Failed to parse invalidation message")
        finally:
            await pubsub.unsubscribe(self.channel)
            await pubsub.close()
            logger.info("Unsubscribed from %s", self.channel)


async def run_invalidation_listener(
    engine: PermissionEngine,
    subscriber: RedisInvalidationSubscriber,
) -> None:
    """Apply invalidation events from other instances to engine's local cache.

    Run as a background task from lifespan when Redis is enabled.
    Cancelling the task stops the loop. An event whose ids cannot form a
    cache key is logged and skipped.
    """
    try:
        async for event in subscriber.listen():
            if event.origin == engine.instance_id:
                continue
            try:
                engine.apply_invalidation(event)
            except ValueError:
                logger.exception(
                    "Skipping unusable %s invalidation from %s", event.kind.value, event.origin
                )
    except asyncio.CancelledError:
        logger.info("Invalidation listener cancelled")
        raise
    except redis.RedisError:
        logger.exception("Invalidation listener stopped on Redis error")
