from __future__ import annotations


def is_owner(*, actor_id: int | None, owner_id: int) -> bool:
    """Return True when ``actor_id`` is the owner; anonymous actors own nothing."""
    if actor_id is None:
        return False
    return int(actor_id) == int(owner_id)
