from __future__ import annotations

import hashlib
from dataclasses import dataclass

from makeshort.services._shared.ports import Hasher


@dataclass(frozen=True, slots=True)
class SaltedSHA256Hasher(Hasher):
    """Hex SHA-256 of ``plaintext + salt``.

    Deterministic so credentials can be matched with a single indexed query.
    """

    salt: str

    def hash(self, plaintext: str) -> str:
        return hashlib.sha256((plaintext + self.salt).encode("utf-8")).hexdigest()
