"""ID generators (CUID2) for roles, assignments and engine instances."""

from cuid2 import cuid_wrapper

from workshop_access.core.id_validation import CUID_LENGTH

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string of CUID_LENGTH characters.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    if len(result) != CUID_LENGTH:
        raise ValueError(f"Expected {CUID_LENGTH}-character CUID, got {len(result)}")
    return result
