"""Shared domain error messages and error types."""

from scribe.domain.entities import format_emails


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed structural validation of a request."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class AccountNotFoundError(NotFoundError):
    """No bank account is registered under the requested IBAN."""

    def __init__(self, iban: str):
        super().__init__(account_not_found(iban))
        self.iban = iban


class CourseNotFoundError(NotFoundError):
    """No course exists with the requested course code."""

    def __init__(self, course_code: str):
        super().__init__(course_not_found(course_code))
        self.course_code = course_code


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class BusinessRuleError(DomainError):
    """The request is well formed but violates a domain invariant."""


class InsufficientFundsError(BusinessRuleError):
    """The account cannot settle the bulk transfer without going overdrawn."""

    def __init__(self, iban: str = "", balance_cents: int = 0, total_cents: int = 0):
        super().__init__("insufficient funds to settle bulk transfer")
        self.iban = iban
        self.balance_cents = balance_cents
        self.total_cents = total_cents


class UnregisteredStudentsError(BusinessRuleError):
    """Some requested students have no registered record."""

    def __init__(self, students):
        self.students = tuple(students)
        super().__init__(
            f"attempted to enroll unregistered students: {format_emails(self.students)}"
        )

    def __eq__(self, other):
        if not isinstance(other, UnregisteredStudentsError):
            return NotImplemented
        return self.students == other.students

    __hash__ = DomainError.__hash__


class AlreadyEnrolledError(BusinessRuleError):
    """Some requested students are already enrolled in the course."""

    def __init__(self, students):
        self.students = tuple(students)
        super().__init__(f"students {format_emails(self.students)} are already enrolled")

    def __eq__(self, other):
        if not isinstance(other, AlreadyEnrolledError):
            return NotImplemented
        return self.students == other.students

    __hash__ = DomainError.__hash__


class OversubscribedError(BusinessRuleError):
    """Enrolling the students would exceed the course capacity."""

    def __init__(self, course_code: str, available_spaces: int, attempted_enrollments: int):
        super().__init__(
            f"attempted to enroll {attempted_enrollments} students, "
            f"but course '{course_code}' has only {available_spaces} spaces"
        )
        self.course_code = course_code
        self.available_spaces = available_spaces
        self.attempted_enrollments = attempted_enrollments

    def __eq__(self, other):
        if not isinstance(other, OversubscribedError):
            return NotImplemented
        return (self.course_code, self.available_spaces, self.attempted_enrollments) == (
            other.course_code,
            other.available_spaces,
            other.attempted_enrollments,
        )

    __hash__ = DomainError.__hash__


class InfrastructureError(Exception):
    """A store, connection or commit failure.

    The underlying driver exception is available as ``__cause__``.
    """

    retryable = False


class SerializationConflictError(InfrastructureError):
    """The database aborted the transaction to preserve serializability.

    The operation had no durable effect and may be retried by the caller.
    """

    retryable = True


class TransactionScopeError(RuntimeError):
    """Illegal use of a TransactionScope."""


class TransactionInProgressError(TransactionScopeError):
    def __init__(self):
        super().__init__("transaction already in progress")


class TransactionNotStartedError(TransactionScopeError):
    def __init__(self):
        super().__init__("transaction not started")


class TransactionAlreadyUsedError(TransactionScopeError):
    def __init__(self, state: str):
        super().__init__(f"transaction scope already used ({state})")
        self.state = state


def account_not_found(iban: str) -> str:
    """Return message for missing account."""
    return f"Account with IBAN '{iban}' not found"


def course_not_found(course_code: str) -> str:
    """Return message for missing course."""
    return f"Course '{course_code}' not found"
