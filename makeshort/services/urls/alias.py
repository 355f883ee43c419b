"""Random alias candidates for short URLs.

Candidates are not unique and not cryptographically secure; uniqueness is
enforced by the ``uq_urls_alias`` constraint at insert time.
"""

from __future__ import annotations

import random
import string
import time

ALIAS_ALPHABET = string.ascii_lowercase + string.digits
DEFAULT_ALIAS_LENGTH = 6


def generate_alias(length: int = DEFAULT_ALIAS_LENGTH) -> str:
    """Draw ``length`` characters uniformly from ``[a-z0-9]``.

    A fresh generator seeded from the current time is used per call.

    :param length: Number of characters, at least 1.
    :raises ValueError: If ``length`` is not positive.
    """
    if length < 1:
        raise ValueError("Alias length must be positive")
    rng = random.Random(time.time_ns())
    return "".join(rng.choice(ALIAS_ALPHABET) for _ in range(length))
