from makeshort.models.refresh_session import RefreshSession
from makeshort.models.url import ShortURL
from makeshort.models.user import User

__all__ = [
    "RefreshSession",
    "ShortURL",
    "User",
]
