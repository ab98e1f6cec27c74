"""Pure validation predicates over domain values.

Nothing in this module performs I/O. Emails are compared as opaque,
case-sensitive strings.
"""

from typing import Iterable

from scribe.domain.entities import BulkTransfer, EnrollmentRequest
from scribe.domain.errors import ValidationError


def positive_balance(balance_cents: int) -> bool:
    """Return True if the balance is not overdrawn."""
    return balance_cents >= 0


def has_capacity(capacity: int, already_enrolled: int, requested: int) -> bool:
    """Return True if ``requested`` more students fit in the course."""
    return capacity - already_enrolled >= requested


def email_set_difference(a: Iterable[str], b: Iterable[str]) -> set[str]:
    """Return the emails in ``a`` that are not in ``b``."""
    return set(a) - set(b)


def email_set_intersection(a: Iterable[str], b: Iterable[str]) -> set[str]:
    """Return the emails present in both ``a`` and ``b``."""
    return set(a) & set(b)


def validate_bulk_transfer(bulk_transfer: BulkTransfer) -> None:
    """Check the structure of a bulk transfer before any transaction opens.

    Raises:
        ValidationError: If the request is malformed
    """
    if not bulk_transfer.account.organization_iban:
        raise ValidationError("organization IBAN is required")
    if not bulk_transfer.credit_transfers:
        raise ValidationError("at least one credit transfer is required")
    for index, transfer in enumerate(bulk_transfer.credit_transfers):
        if transfer.amount_cents <= 0:
            raise ValidationError(
                f"credit transfer {index}: amount must be positive, got {transfer.amount_cents} cents"
            )
        if not transfer.currency:
            raise ValidationError(f"credit transfer {index}: currency is required")


def validate_enrollment_request(request: EnrollmentRequest) -> None:
    """Check the structure of an enrollment request before any transaction opens.

    Raises:
        ValidationError: If the course code or student list is empty
    """
    if not request.course_code:
        raise ValidationError("course code is required")
    if not request.students:
        raise ValidationError("at least one student is required")
    for index, student in enumerate(request.students):
        if not student.email:
            raise ValidationError(f"student {index}: email is required")
