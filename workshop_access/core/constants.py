"""Core constants: decision cache key structure and shared literal values.

Single source of truth for cache key format (DRY). Used by the decision
cache key builders and the invalidation matching rules.
"""

# Delimiter for composite decision keys
CACHE_KEY_SEP = "|"

# Wildcard accepted in permission resource/action
WILDCARD = "*"

# Default decision TTL in seconds
DEFAULT_PERMISSION_CACHE_TTL = 60.0

# Redis channel for cross-instance invalidation events
DEFAULT_INVALIDATION_CHANNEL = "permission_invalidation"
