"""Domain enumerations for workshop access control.

Enums represent fixed sets of domain values (scopes, polarity,
workshop visibility, membership state).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class PermissionScope(_ValuesMixin, str, Enum):
    """Granularity at which a role applies.

    TASK roles can be defined and assigned but are not part of the
    layered evaluation order.
    """

    WORKSHOP = "workshop"
    TEAM = "team"
    PROJECT = "project"
    TASK = "task"
    INDIVIDUAL = "individual"


class PermissionPolarity(_ValuesMixin, str, Enum):
    """Whether a permission entry grants or denies the matched action."""

    GRANT = "grant"
    DENY = "deny"


class WorkshopVisibility(_ValuesMixin, str, Enum):
    """Workshop visibility. PUBLIC workshops are viewable by anyone."""

    PUBLIC = "public"
    PRIVATE = "private"


class MembershipState(_ValuesMixin, str, Enum):
    """Lifecycle of a user's membership in a workshop."""

    ACTIVE = "active"
    PENDING = "pending"
    SUSPENDED = "suspended"
    REMOVED = "removed"
