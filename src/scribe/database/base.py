"""Abstract store interfaces.

Every store method takes the active TransactionScope and runs through the
scope's session, so all reads and writes of one workflow share a single
database transaction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import TYPE_CHECKING, Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from scribe.domain.entities import (
    Account,
    Class,
    Course,
    CreditTransfer,
    Enrollment,
    Student,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session
    from scribe.database.scope import IsolationLevel, TransactionScope


class Transaction(ABC):
    """A single open database transaction."""

    @property
    @abstractmethod
    def session(self) -> Session:
        """Session bound to this transaction."""
        pass

    @abstractmethod
    def commit(self) -> None:
        """Commit the transaction and release its connection."""
        pass

    @abstractmethod
    def rollback(self) -> None:
        """Roll back the transaction and release its connection.

        Must leave the store in its pre-transaction state even if it raises.
        """
        pass


class Database(ABC):
    """Abstract database interface for scribe."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database and dispose of pooled connections."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def begin(self, isolation: IsolationLevel) -> Transaction:
        """Open a new transaction at the requested isolation level."""
        pass


class AccountStore(ABC):
    """Bank account persistence."""

    @abstractmethod
    def create(self, scope: TransactionScope, account: Account) -> Account:
        """Insert a bank account. Returns it with its assigned ID."""
        pass

    @abstractmethod
    def get(self, scope: TransactionScope, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, scope: TransactionScope) -> list[Account]:
        """List all accounts."""
        pass

    @abstractmethod
    def find_by_iban(self, scope: TransactionScope, iban: str) -> Account:
        """Get account by IBAN.

        Raises:
            AccountNotFoundError: If no account has this IBAN
        """
        pass

    @abstractmethod
    def update(self, scope: TransactionScope, account: Account) -> Account:
        """Persist the full account row by ID. Returns the stored state."""
        pass


class LedgerStore(ABC):
    """Credit transfer (transactions table) persistence."""

    @abstractmethod
    def bulk_insert(
        self, scope: TransactionScope, transfers: Sequence[CreditTransfer]
    ) -> list[CreditTransfer]:
        """Insert all transfers as one operation. Returns them with IDs assigned."""
        pass

    @abstractmethod
    def list_for_account(self, scope: TransactionScope, account_id: int) -> list[CreditTransfer]:
        """List transfers debited from an account, oldest first."""
        pass


class ClassStore(ABC):
    """Courses, students and enrollments."""

    @abstractmethod
    def create_course(self, scope: TransactionScope, course: Course) -> Course:
        """Insert a course. Returns it with its assigned ID."""
        pass

    @abstractmethod
    def register_student(
        self, scope: TransactionScope, name: str, birthdate: Optional[date], email: str
    ) -> Student:
        """Insert a student. Returns it with its assigned ID."""
        pass

    @abstractmethod
    def get_class_by_course_code(self, scope: TransactionScope, course_code: str) -> Class:
        """Get a course and its enrolled students.

        Raises:
            CourseNotFoundError: If no course has this code
        """
        pass

    @abstractmethod
    def get_students_by_email(
        self, scope: TransactionScope, emails: Sequence[str]
    ) -> list[Student]:
        """Return the registered students whose emails are in ``emails``."""
        pass

    @abstractmethod
    def insert_enrollments(
        self, scope: TransactionScope, course_id: int, student_ids: Sequence[int]
    ) -> list[Enrollment]:
        """Enroll the students in the course as one operation."""
        pass
