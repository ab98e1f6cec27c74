"""Single-use transactional execution scope.

A TransactionScope wraps exactly one database transaction and moves through
IDLE -> ACTIVE -> COMMITTED | ROLLED_BACK. It is not thread-safe: every
workflow invocation constructs its own scope, usually through ``atomic``.
"""

import logging
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scribe.database.base import Database, Transaction
from scribe.domain.errors import (
    InfrastructureError,
    SerializationConflictError,
    TransactionAlreadyUsedError,
    TransactionInProgressError,
    TransactionNotStartedError,
)

logger = logging.getLogger(__name__)

# SQLSTATE serialization_failure and deadlock_detected
_SERIALIZATION_SQLSTATES = frozenset({"40001", "40P01"})
_SQLITE_BUSY_MESSAGES = ("database is locked", "database is busy", "database table is locked")


class IsolationLevel(str, Enum):
    """Transaction isolation levels a scope can request."""

    DEFAULT = "default"
    SERIALIZABLE = "serializable"


class ScopeState(str, Enum):
    """Lifecycle states of a TransactionScope."""

    IDLE = "idle"
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


_TERMINAL_STATES = frozenset({ScopeState.COMMITTED, ScopeState.ROLLED_BACK})


def is_serialization_failure(error: BaseException) -> bool:
    """Return True if a driver error means the transaction lost a serialization race."""
    orig = getattr(error, "orig", None) or error
    sqlstate = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if sqlstate in _SERIALIZATION_SQLSTATES:
        return True
    message = str(orig).lower()
    return any(fragment in message for fragment in _SQLITE_BUSY_MESSAGES)


def translate_database_error(error: SQLAlchemyError, operation: str) -> InfrastructureError:
    """Map a SQLAlchemy exception to the infrastructure error taxonomy."""
    if is_serialization_failure(error):
        return SerializationConflictError(f"{operation}: serialization conflict: {error}")
    return InfrastructureError(f"{operation}: {error}")


class TransactionScope:
    """A single-use capsule around one database transaction."""

    def __init__(self, database: Database):
        """Initialize an idle scope.

        Args:
            database: Database that hands out transactions
        """
        self._database = database
        self._transaction: Optional[Transaction] = None
        self._state = ScopeState.IDLE

    @property
    def state(self) -> ScopeState:
        return self._state

    @property
    def session(self) -> Session:
        """Session of the open transaction.

        Raises:
            TransactionNotStartedError: If begin has not been called
            TransactionAlreadyUsedError: If the scope has already completed
        """
        self._require_active()
        return self._transaction.session

    def begin(self, isolation: IsolationLevel = IsolationLevel.DEFAULT) -> None:
        """Open the scope's transaction.

        Raises:
            TransactionInProgressError: If the scope is already active
            TransactionAlreadyUsedError: If the scope has already completed
            InfrastructureError: If the database cannot open a transaction
        """
        if self._state is ScopeState.ACTIVE:
            raise TransactionInProgressError()
        if self._state in _TERMINAL_STATES:
            raise TransactionAlreadyUsedError(self._state.value)

        try:
            self._transaction = self._database.begin(isolation)
        except SQLAlchemyError as exc:
            raise translate_database_error(exc, "begin transaction") from exc
        self._state = ScopeState.ACTIVE

    def commit(self) -> None:
        """Commit the transaction. The scope is unusable afterwards.

        A failed commit leaves nothing persisted and moves the scope to
        ROLLED_BACK.

        Raises:
            SerializationConflictError: If the database aborted the commit to
                preserve serializability
            InfrastructureError: For any other commit failure
        """
        transaction = self._take_transaction()
        self._state = ScopeState.ROLLED_BACK
        try:
            transaction.commit()
        except SQLAlchemyError as exc:
            raise translate_database_error(exc, "commit transaction") from exc
        self._state = ScopeState.COMMITTED

    def rollback(self) -> None:
        """Roll back the transaction. The scope is unusable afterwards.

        Raises:
            TransactionAlreadyUsedError: If the scope already committed or
                rolled back; no database I/O is performed
            InfrastructureError: If the rollback call fails (the database is
                still left in its pre-transaction state)
        """
        transaction = self._take_transaction()
        self._state = ScopeState.ROLLED_BACK
        try:
            transaction.rollback()
        except SQLAlchemyError as exc:
            raise InfrastructureError(f"roll back transaction: {exc}") from exc

    def _require_active(self) -> None:
        if self._state is ScopeState.IDLE:
            raise TransactionNotStartedError()
        if self._state in _TERMINAL_STATES:
            raise TransactionAlreadyUsedError(self._state.value)

    def _take_transaction(self) -> Transaction:
        self._require_active()
        transaction = self._transaction
        self._transaction = None
        return transaction


@contextmanager
def atomic(
    database: Database,
    isolation: IsolationLevel = IsolationLevel.DEFAULT,
    log: Optional[logging.Logger] = None,
) -> Iterator[TransactionScope]:
    """Run a block inside a fresh, begun TransactionScope.

    The block must call ``scope.commit()`` to persist its work. On every exit
    path the scope is rolled back; a rollback after a successful commit is a
    no-op, and a failing rollback is logged without replacing the error
    raised by the block. SQLAlchemy errors raised by the block are
    translated into InfrastructureError or SerializationConflictError.
    """
    log = log or logger
    scope = TransactionScope(database)
    scope.begin(isolation)
    try:
        yield scope
    except SQLAlchemyError as exc:
        raise translate_database_error(exc, "execute") from exc
    finally:
        try:
            scope.rollback()
        except TransactionAlreadyUsedError:
            log.debug(f"Transaction already {scope.state.value}; rollback skipped")
        except InfrastructureError as exc:
            log.error(f"Failed to roll back transaction: {exc}")
