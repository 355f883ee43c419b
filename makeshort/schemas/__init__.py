"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginSchema, SignupSchema, TokenPairSchema, UserSchema
from .url import URLCreatedSchema, URLCreateSchema, URLSchema, URLUpdateSchema

__all__ = [
    "LoginSchema",
    "SignupSchema",
    "TokenPairSchema",
    "UserSchema",
    "URLCreateSchema",
    "URLCreatedSchema",
    "URLSchema",
    "URLUpdateSchema",
]
