"""Short random identifiers for requests and error correlation."""

import secrets
import string

_ALPHABET = string.ascii_lowercase + string.digits


def short_id(length: int = 6) -> str:
    """Return a random lower-case alphanumeric id (6 chars by default)."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))
