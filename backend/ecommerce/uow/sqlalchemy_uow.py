"""
SQLAlchemy units of work bound to the Flask-scoped session.
"""

from __future__ import annotations

import logging
from contextlib import suppress

from sqlalchemy import event
from sqlalchemy.exc import InvalidRequestError
from sqlalchemy.orm import Session, SessionTransaction, scoped_session

from ecommerce.core.extensions import db
from ecommerce.repositories import UserRepository
from ecommerce.uow.base import UnitOfWork

log = logging.getLogger(__name__)


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-write unit of work.

    Commits when the ``with`` block exits cleanly, rolls back otherwise.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        # The session autobegins on first use.
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
    Read-only unit of work.

    Owns a fresh transaction when none is running, otherwise attaches to the
    outer one (for example the savepoint used by the test suite). In both
    cases a ``before_flush`` guard rejects pending ORM writes, and an owned
    transaction is always rolled back on exit.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)
        self._txn_ctx: SessionTransaction | None = None
        self._guarded: Session | None = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        self._txn_ctx = None
        try:
            txn_ctx = self.session.begin()
            txn_ctx.__enter__()
            self._txn_ctx = txn_ctx
        except InvalidRequestError:
            log.debug("Read-only unit of work attached to an existing transaction")
        target = self.session
        self._guarded = target() if isinstance(target, scoped_session) else target
        event.listen(self._guarded, "before_flush", self._before_flush)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._txn_ctx is not None:
                with suppress(Exception):
                    self.session.rollback()
                # Close the SessionTransaction context entered in __enter__
                try:
                    self._txn_ctx.__exit__(exc_type, exc, tb)
                finally:
                    self._txn_ctx = None
        finally:
            if self._guarded is not None:
                event.remove(self._guarded, "before_flush", self._before_flush)
                self._guarded = None

    def commit(self) -> None:
        """
        :raises RuntimeError: always; read-only scopes never commit.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()

    def _before_flush(self, session, flush_context, instances) -> None:
        if session.new or session.dirty or session.deleted:
            raise RuntimeError("Read-only UnitOfWork: ORM flush blocked.")
