"""Service layer.

Subpackages
-----------
- ``_shared``: :class:`~makeshort.services._shared.base.BaseService`, domain
  errors, authorization policies and ports (token manager, session store,
  hasher).
- ``auth``: registration, login, logout and refresh-token rotation.
- ``urls``: alias generation and owner-checked short URL mutations.
- ``redirect``: alias resolution with redirect counting.
- ``users``: public profiles and account deletion.

This package deliberately re-exports nothing: repositories import
``makeshort.services._shared.errors`` and eager imports here would cycle.
"""
