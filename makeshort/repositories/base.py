"""Persistence-only repository base for SQLAlchemy 2.x.

Repositories never open, commit or roll back transactions; the calling
service owns the Unit of Work. Sorting and updates are whitelisted per
aggregate so request data can never pick arbitrary columns.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, select
from sqlalchemy.orm import InstrumentedAttribute, Session, scoped_session

from makeshort.core.extensions import db

E = TypeVar("E")  # mapped entity


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """Turn ``["-created_at", "alias"]`` into ``[("created_at", True), ("alias", False)]``.

    Blank tokens are dropped.
    """
    parsed: list[tuple[str, bool]] = []
    for token in raw:
        field = token.lstrip("-").strip()
        if field:
            parsed.append((field, token.startswith("-")))
    return parsed


class BaseRepository(Generic[E]):
    """Generic repository for one mapped model.

    Subclasses set ``model`` and may override :meth:`_sortable_fields` and
    :meth:`_updatable_fields`.
    """

    model: type[E]

    def __init__(self, session: Session | scoped_session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        """The injected session, else the Flask-scoped ``db.session``."""
        return cast(Session, self._session if self._session is not None else db.session)

    # ------------------------------ Whitelists -------------------------------

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {}

    def _updatable_fields(self) -> set[str]:
        return set()

    def _order(self, stmt: Select[Any], sort: Iterable[str]) -> Select[Any]:
        """Apply whitelisted ``ORDER BY`` terms, then ``id`` as a tiebreaker.

        Unknown keys are ignored.
        """
        columns = self._sortable_fields()
        terms = [
            columns[field].desc() if desc else columns[field].asc()
            for field, desc in parse_sort_tokens(sort)
            if field in columns
        ]
        pk = getattr(self.model, "id", None)
        if pk is not None:
            terms.append(pk.asc())
        return stmt.order_by(*terms) if terms else stmt

    # --------------------------------- CRUD ----------------------------------

    def get(self, entity_id: Any) -> E | None:
        """Entity by primary key, or ``None``."""
        return self.session.get(self.model, entity_id)

    def delete(self, instance: E) -> None:
        """Delete through the ORM (so relationship cascades run) and flush."""
        self.session.delete(instance)
        self.flush()

    def flush(self) -> None:
        self.session.flush()

    def assign_updates(self, instance: E, fields: Mapping[str, Any], *, flush: bool = True) -> E:
        """Set whitelisted attributes; ``@validates`` hooks still run.

        :raises ValueError: If ``fields`` names a non-updatable attribute.
        """
        unknown = sorted(set(fields) - self._updatable_fields())
        if unknown:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        for key, value in fields.items():
            setattr(instance, key, value)
        if flush:
            self.flush()
        return instance

    def list(
        self,
        *,
        filters: Mapping[str, Any] | None = None,
        sort: Iterable[str] | None = None,
    ) -> list[E]:
        """Entities matching equality ``filters`` in whitelisted ``sort`` order."""
        stmt: Select[Any] = select(self.model).filter_by(**(filters or {}))
        return list(self.session.execute(self._order(stmt, sort or [])).scalars().all())
