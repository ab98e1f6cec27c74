"""Class enrollment workflow."""

import logging
from typing import Optional

from scribe.database.base import ClassStore, Database
from scribe.database.scope import IsolationLevel, atomic
from scribe.domain.entities import Class, EnrollmentRequest, Student
from scribe.domain.errors import (
    AlreadyEnrolledError,
    OversubscribedError,
    UnregisteredStudentsError,
)
from scribe.domain.validation import (
    email_set_difference,
    email_set_intersection,
    has_capacity,
    validate_enrollment_request,
)


def _unique_by_email(students) -> list[Student]:
    seen = {}
    for student in students:
        seen.setdefault(student.email, student)
    return list(seen.values())


class EnrollmentWorkflow:
    """Enrolls registered students in a course without exceeding its capacity."""

    def __init__(self, db: Database, classes: ClassStore, logger: Optional[logging.Logger] = None):
        """Initialize enrollment workflow.

        Args:
            db: Database that opens transactions
            classes: Course, student and enrollment store
            logger: Logger for workflow events (defaults to the module logger)
        """
        self.db = db
        self.classes = classes
        self.logger = logger or logging.getLogger(__name__)

    def enroll(self, request: EnrollmentRequest) -> Class:
        """Enroll the requested students in the course.

        Checks run in a fixed order inside one serializable transaction:
        the course must exist, every student must be registered, none may
        already be enrolled, and the course must have room for all of them.

        Args:
            request: Course code and students (by email) to enroll

        Returns:
            The class after enrollment

        Raises:
            ValidationError: If the course code or student list is empty
            CourseNotFoundError: If the course does not exist
            UnregisteredStudentsError: If any student is not registered
            AlreadyEnrolledError: If any student is already enrolled
            OversubscribedError: If the course lacks capacity
            SerializationConflictError: If a concurrent transaction won the race
            InfrastructureError: For any other store failure
        """
        validate_enrollment_request(request)
        requested = _unique_by_email(request.students)
        requested_emails = [student.email for student in requested]

        with atomic(self.db, IsolationLevel.SERIALIZABLE, self.logger) as scope:
            klass = self.classes.get_class_by_course_code(scope, request.course_code)

            registered = self.classes.get_students_by_email(scope, requested_emails)
            registered_emails = [student.email for student in registered]

            missing = email_set_difference(requested_emails, registered_emails)
            if missing:
                raise UnregisteredStudentsError(
                    student for student in requested if student.email in missing
                )

            enrolled = email_set_intersection(klass.emails, registered_emails)
            if enrolled:
                raise AlreadyEnrolledError(
                    student for student in registered if student.email in enrolled
                )

            if not has_capacity(klass.course.capacity, len(klass.students), len(registered)):
                raise OversubscribedError(
                    course_code=klass.code,
                    available_spaces=klass.available_spaces,
                    attempted_enrollments=len(registered),
                )

            self.classes.insert_enrollments(
                scope, klass.course.id, [student.id for student in registered]
            )
            klass = self.classes.get_class_by_course_code(scope, request.course_code)
            scope.commit()

        self.logger.info(f"Enrolled {len(registered)} students in {klass.code}")
        return klass

    def get_class(self, course_code: str) -> Class:
        """Get a course and its enrolled students.

        Raises:
            CourseNotFoundError: If the course does not exist
        """
        with atomic(self.db, log=self.logger) as scope:
            klass = self.classes.get_class_by_course_code(scope, course_code)
            scope.commit()
        return klass
