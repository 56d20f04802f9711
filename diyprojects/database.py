"""Database session management."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import closing, contextmanager
from types import TracebackType
from typing import Any

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, Engine, Row, Transaction
from sqlalchemy.exc import SQLAlchemyError

from diyprojects.config import config
from diyprojects.dao.binding import PreparedStatement
from diyprojects.exceptions import DbConnectionError, DbError, TransactionError
from diyprojects.models import metadata

logger = logging.getLogger(__name__)

# Each query reports the identity generated by the last insert on the same
# connection.
_LAST_INSERT_ID_SQL = {
    "sqlite": "SELECT last_insert_rowid()",
    "mysql": "SELECT LAST_INSERT_ID()",
    "mariadb": "SELECT LAST_INSERT_ID()",
    "postgresql": "SELECT lastval()",
}

_engine: Engine | None = None


def get_engine() -> Engine:
    """Return the engine for the configured database, creating it once."""
    global _engine
    if _engine is None:
        _engine = create_engine(config.database_url(), echo=config.DEBUG)
    return _engine


class DbSession:
    """One connection to the store with explicit transaction control."""

    def __init__(self, connection: Connection) -> None:
        self._connection = connection
        self._transaction: Transaction | None = None

    @property
    def dialect_name(self) -> str:
        return self._connection.dialect.name

    def begin(self) -> None:
        try:
            self._transaction = self._connection.begin()
        except SQLAlchemyError as exc:
            raise TransactionError(f"Unable to start transaction: {exc}") from exc

    def commit(self) -> None:
        transaction = self._require_transaction("commit")
        try:
            transaction.commit()
        except SQLAlchemyError as exc:
            raise TransactionError(f"Unable to commit transaction: {exc}") from exc
        finally:
            self._transaction = None

    def rollback(self) -> None:
        transaction = self._require_transaction("rollback")
        try:
            transaction.rollback()
        except SQLAlchemyError as exc:
            raise TransactionError(f"Unable to roll back transaction: {exc}") from exc
        finally:
            self._transaction = None

    def _require_transaction(self, action: str) -> Transaction:
        if self._transaction is None:
            raise TransactionError(f"Cannot {action}: no transaction in progress")
        return self._transaction

    def query(self, statement: PreparedStatement) -> list[Row[Any]]:
        """Run a SELECT and return all of its rows."""
        self._check_bound(statement)
        with closing(
            self._connection.execute(statement.clause, statement.params)
        ) as result:
            return list(result.all())

    def execute_update(self, statement: PreparedStatement) -> int:
        """Run an INSERT, UPDATE or DELETE and return the affected row count."""
        self._check_bound(statement)
        with closing(
            self._connection.execute(statement.clause, statement.params)
        ) as result:
            return result.rowcount

    def last_insert_id(self) -> int:
        """Return the identity generated by this connection's last insert."""
        sql = _LAST_INSERT_ID_SQL.get(self.dialect_name)
        if sql is None:
            raise DbError(
                f"Cannot read last insert id for dialect {self.dialect_name!r}"
            )
        with closing(self._connection.execute(text(sql))) as result:
            value = result.scalar()
        if value is None:
            raise DbError("Store did not report a generated identity")
        return int(value)

    @staticmethod
    def _check_bound(statement: PreparedStatement) -> None:
        missing = statement.missing()
        if missing:
            raise DbError(f"Unbound statement parameters: {', '.join(missing)}")

    def close(self) -> None:
        try:
            if self._transaction is not None:
                logger.warning("Closing session with open transaction; rolling back")
                self.rollback()
        finally:
            self._connection.close()

    def __enter__(self) -> DbSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc is None:
            self.close()
            return
        # Keep the in-flight exception; a failed cleanup rollback is only logged.
        try:
            self.close()
        except TransactionError:
            logger.exception("Rollback failed while closing session after %r", exc)


def open_session(engine: Engine | None = None) -> DbSession:
    """Open a session on ``engine`` (the configured engine by default)."""
    engine = engine or get_engine()
    try:
        connection = engine.connect()
    except SQLAlchemyError as exc:
        raise DbConnectionError(
            f"Unable to connect to {engine.url.render_as_string()}: {exc}"
        ) from exc
    logger.debug("Opened session on %s", engine.url.render_as_string())
    return DbSession(connection)


@contextmanager
def session_scope(engine: Engine | None = None) -> Iterator[DbSession]:
    """Provide a session with a transaction around a series of operations.

    Commits when the block completes and rolls back on any exception.
    """
    with open_session(engine) as session:
        session.begin()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        session.commit()


def init_db(engine: Engine | None = None) -> None:
    """Create any missing tables."""
    engine = engine or get_engine()
    try:
        metadata.create_all(engine)
    except SQLAlchemyError as exc:
        raise DbError(f"Unable to create schema: {exc}") from exc
    logger.info("Schema ready on %s", engine.url.render_as_string())
