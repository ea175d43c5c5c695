"""Messaging: Redis pub/sub fan-out of permission cache invalidation.

Used when several engine instances serve the same workshops.
"""

from workshop_access.infrastructure.messaging.invalidation_pubsub import (
    InvalidationEvent,
    InvalidationKind,
    RedisInvalidationPublisher,
    RedisInvalidationSubscriber,
    run_invalidation_listener,
)

__all__ = [
    "InvalidationEvent",
    "InvalidationKind",
    "RedisInvalidationPublisher",
    "RedisInvalidationSubscriber",
    "run_invalidation_listener",
]
