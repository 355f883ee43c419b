# makeshort/services/users/dto.py
from __future__ import annotations

from makeshort.services.auth.dto import UserPublicOut

__all__ = ["UserPublicOut"]
