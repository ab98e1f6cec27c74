"""Domain layer for scribe application.

Workflows live in ``scribe.domain.transfer`` and ``scribe.domain.enrollment``;
they are not re-exported here because they depend on the database layer,
which itself imports the entities defined in this package.
"""

from scribe.domain.entities import (
    Account,
    BulkTransfer,
    Class,
    Course,
    CreditTransfer,
    Enrollment,
    EnrollmentRequest,
    Student,
)

__all__ = [
    "Account",
    "BulkTransfer",
    "Class",
    "Course",
    "CreditTransfer",
    "Enrollment",
    "EnrollmentRequest",
    "Student",
]
