"""Identifier format validation for actors, workshops, projects and teams.

Identifiers are CUID2 strings (see shared.utils.generators). Checked before
any directory lookup so malformed ids never reach a store.
"""

import re

CUID_LENGTH = 24
_CUID_RE = re.compile(r"^[a-z][a-z0-9]{" + str(CUID_LENGTH - 1) + r"}$")


def is_valid_id_format(value: str | None) -> bool:
    """Return True if value looks like an identifier issued by generate_cuid."""
    if not value or not isinstance(value, str):
        return False
    return bool(_CUID_RE.fullmatch(value))
