"""Cache: in-process permission decision cache and key builders.

Owned by a PermissionEngine instance; key format is in keys.py (DRY).
"""

from workshop_access.infrastructure.cache.decision_cache import CacheEntry, DecisionCache
from workshop_access.infrastructure.cache.keys import (
    decision_key,
    user_prefix,
    validate_key_component,
)

__all__ = [
    "CacheEntry",
    "DecisionCache",
    "decision_key",
    "user_prefix",
    "validate_key_component",
]
