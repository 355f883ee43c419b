from __future__ import annotations

from typing import Protocol


class Hasher(Protocol):
    """Deterministic one-way transform of a secret into a stored credential.

    Determinism is required: login looks users up by ``(email, hash)``.
    """

    def hash(self, plaintext: str) -> str: ...
