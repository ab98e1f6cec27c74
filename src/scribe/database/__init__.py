"""Database layer for scribe application."""

from scribe.database.base import AccountStore, ClassStore, Database, LedgerStore
from scribe.database.factories import create_database, create_sqlite_database
from scribe.database.scope import IsolationLevel, ScopeState, TransactionScope, atomic

__all__ = [
    "AccountStore",
    "ClassStore",
    "Database",
    "LedgerStore",
    "IsolationLevel",
    "ScopeState",
    "TransactionScope",
    "atomic",
    "create_database",
    "create_sqlite_database",
]
