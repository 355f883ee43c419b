"""
SQLAlchemy implementation of UnitOfWork for Flask.
"""

from __future__ import annotations

import logging

from sqlalchemy import event, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, SessionTransaction, scoped_session

from makeshort.core.extensions import db
from makeshort.repositories import RefreshSessionRepository, URLRepository, UserRepository
from makeshort.uow.base import UnitOfWork

log = logging.getLogger(__name__)


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session | scoped_session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)
        self.urls = URLRepository(session=self.session)
        self.refresh_sessions = RefreshSessionRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    SQLAlchemy-backed UoW using the Flask-scoped session.

    The same session is shared across all repositories for a consistent
    transaction. Commits on clean exit, rolls back when the block raises.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # The session begins lazily on first use.
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            try:
                self.commit()
            except Exception:
                self.rollback()
                raise
        else:
            self.rollback()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work backed by the Flask-scoped SQLAlchemy session.

    This UoW:
    - Owns a fresh transaction when none is active and applies
      ``SET TRANSACTION READ ONLY`` on PostgreSQL/MySQL; otherwise attaches to
      the caller's transaction.
    - Blocks ORM flushes and raw DML while active.
    - Rolls back on exit only when it owns the transaction.
    - Disallows ``commit()``.
    """

    _WRITE_PREFIXES = ("insert", "update", "delete", "merge", "alter", "drop", "truncate", "create")
    _READONLY_DIALECTS = ("postgresql", "mysql", "mariadb")

    def __init__(self, *, enforce_db_readonly: bool = True) -> None:
        super().__init__(session=db.session)
        self.enforce_db_readonly = enforce_db_readonly
        self._conn: Connection | None = None
        self._txn: SessionTransaction | None = None
        self._target_session: Session | None = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        session = self.session
        self._target_session = session() if isinstance(session, scoped_session) else session
        if not self._target_session.in_transaction():
            self._txn = self._target_session.begin()

        self._conn = self._target_session.connection()
        if (
            self._txn is not None
            and self.enforce_db_readonly
            and self._conn.dialect.name in self._READONLY_DIALECTS
        ):
            try:
                self._target_session.execute(text("SET TRANSACTION READ ONLY"))
            except SQLAlchemyError as exc:
                log.warning("SET TRANSACTION READ ONLY failed (%s); guards only.", exc)

        event.listen(self._target_session, "before_flush", self._block_flush)
        event.listen(self._conn, "before_cursor_execute", self._block_dml)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._txn is not None:
                self._txn.rollback()
        finally:
            event.remove(self._target_session, "before_flush", self._block_flush)
            event.remove(self._conn, "before_cursor_execute", self._block_dml)
            self._txn = None
            self._conn = None
            self._target_session = None

    def commit(self) -> None:
        """
        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    @staticmethod
    def _block_flush(session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError("Read-only UnitOfWork: ORM flush blocked.")

    def _block_dml(self, conn, cursor, statement, parameters, context, executemany) -> None:
        first_token = statement.lstrip().split(None, 1)[0].lower() if statement else ""
        if first_token.startswith(self._WRITE_PREFIXES):
            raise RuntimeError(f"Read-only UnitOfWork: SQL statement blocked: {first_token.upper()}")
