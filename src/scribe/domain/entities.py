"""Domain model entities for scribe.

These are pure data classes representing business concepts, independent of
database schema. The store is the sole owner of identity, so IDs are
optional until a value has been persisted.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Account:
    """Bank account domain entity."""

    organization_name: str
    organization_bic: str
    organization_iban: str
    balance_cents: int = 0
    id: Optional[int] = None


@dataclass(frozen=True)
class CreditTransfer:
    """A single credit transfer to a counterparty (a row of the ledger)."""

    amount_cents: int
    currency: str
    counterparty_name: str
    counterparty_bic: str
    counterparty_iban: str
    description: str
    account_id: Optional[int] = None
    id: Optional[int] = None

    def with_account_id(self, account_id: int) -> "CreditTransfer":
        """Return a copy of this transfer bound to the given account."""
        return replace(self, account_id=account_id)


@dataclass(frozen=True)
class BulkTransfer:
    """One debit against a single account paired with N credit transfers.

    The account is referenced by IBAN; its balance and ID are resolved
    against the store when the transfer is executed.
    """

    account: Account
    credit_transfers: tuple[CreditTransfer, ...] = ()

    @property
    def total_cents(self) -> int:
        """Total value of the bulk transfer in cents."""
        return sum(transfer.amount_cents for transfer in self.credit_transfers)


@dataclass(frozen=True)
class Course:
    """Course domain entity."""

    code: str
    capacity: int
    title: str = ""
    description: str = ""
    id: Optional[int] = None


@dataclass(frozen=True)
class Student:
    """Student domain entity. Email is the business key."""

    name: str
    birthdate: Optional[date]
    email: str
    id: Optional[int] = None


@dataclass(frozen=True)
class Enrollment:
    """Enrollment of one student in one course."""

    course_id: int
    student_id: int
    id: Optional[int] = None


@dataclass(frozen=True)
class Class:
    """A course together with its currently enrolled students.

    Not a stored table: reconstructed by join at read time.
    """

    course: Course
    students: tuple[Student, ...] = ()

    @property
    def code(self) -> str:
        return self.course.code

    @property
    def available_spaces(self) -> int:
        return self.course.capacity - len(self.students)

    @property
    def emails(self) -> list[str]:
        return [student.email for student in self.students]


@dataclass(frozen=True)
class EnrollmentRequest:
    """A batch of students, referenced by email, to enroll in a course."""

    course_code: str
    students: tuple[Student, ...] = field(default_factory=tuple)

    @property
    def emails(self) -> list[str]:
        return [student.email for student in self.students]


def format_emails(students) -> str:
    """Return a comma-separated list of student email addresses."""
    return ", ".join(student.email for student in students)
