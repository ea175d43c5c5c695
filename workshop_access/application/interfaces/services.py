"""Service interfaces (ports) for the application layer.

Protocols define contracts for the decision cache, cross-instance
invalidation fan-out, and the invalidation API that mutators call (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from workshop_access.domain.value_objects import PermissionResult
    from workshop_access.infrastructure.messaging.invalidation_pubsub import (
        InvalidationEvent,
    )


# Decision cache interface
class IDecisionCache(Protocol):
    """Process-local TTL memo of permission decisions."""

    def get(self, key: str) -> PermissionResult | None:
        """Return the cached result if still fresh, else None."""

    def set(self, key: str, result: PermissionResult) -> None:
        """Store result, overwriting any previous entry."""

    def delete_prefix(self, prefix: str) -> int:
        """Drop keys starting with prefix. Returns count dropped."""

    def delete_segment(self, segment: str) -> int:
        """Drop keys containing segment as a whole key component. Returns count dropped."""

    def clear(self) -> int:
        """Drop every key. Returns count dropped."""


# Cross-instance invalidation interface
class IInvalidationBroadcaster(Protocol):
    """Fans invalidation events out to other engine instances."""

    async def publish(self, event: InvalidationEvent) -> bool:
        """Publish event. Returns False when the transport is unavailable."""


# Invalidation API used by mutators of roles, assignments and memberships
class IPermissionInvalidator(Protocol):
    """Subset of PermissionEngine that mutators depend on."""

    async def invalidate_user(self, actor_id: str, tenant_id: str) -> None:
        """Drop cached decisions for one actor in one workshop."""

    async def invalidate_workshop(self, tenant_id: str) -> None:
        """Drop cached decisions for every actor in one workshop."""

    async def invalidate_all(self) -> None:
        """Drop every cached decision."""
