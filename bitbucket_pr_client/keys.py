"""Build status key normalisation.

Bitbucket limits build status keys to 40 characters. Keys are built as
``{key}-{extension}`` and replaced with their SHA-1 hex digest when too long,
which is also 40 characters.
"""

import hashlib
import logging
from functools import lru_cache

from .models import MAX_KEY_SIZE_BB_API

logger = logging.getLogger(__name__)

COMPUTED_KEY_FORMAT = "{}-{}"


@lru_cache
def _sha1():
    """Resolve the SHA-1 constructor once, or None if the runtime lacks it."""
    try:
        hashlib.new("sha1")
    except ValueError:
        logger.warning("Failed to create hash provider", exc_info=True)
        return None
    return hashlib.sha1


def compute_api_key(base_key: str, extension: str) -> str:
    """Return a build status key of at most 40 characters."""
    computed_key = COMPUTED_KEY_FORMAT.format(base_key, extension)
    if len(computed_key) <= MAX_KEY_SIZE_BB_API:
        return computed_key

    sha1 = _sha1()
    if sha1 is not None:
        return sha1(computed_key.encode("utf-8")).hexdigest()
    return computed_key[:MAX_KEY_SIZE_BB_API]
