"""Shared utilities: datetime, generators."""

from workshop_access.shared.utils.datetime import utc_now
from workshop_access.shared.utils.generators import generate_cuid

__all__ = [
    "generate_cuid",
    "utc_now",
]
