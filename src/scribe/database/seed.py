"""Demo data for a fresh database."""

import logging
from datetime import date

from scribe.database.base import Database
from scribe.database.scope import atomic
from scribe.database.sqlalchemy_db import (
    SQLAlchemyAccountStore,
    SQLAlchemyClassStore,
)
from scribe.domain.entities import Account, Course
from scribe.domain.errors import AccountNotFoundError, CourseNotFoundError

logger = logging.getLogger(__name__)

SEED_ACCOUNTS = [
    Account(
        organization_name="ACME Corp",
        organization_bic="OIVUSCLQXXX",
        organization_iban="FR10474608000002006107XXXXX",
        balance_cents=10_000_000,
    ),
]

SEED_COURSES = [
    Course(
        code="SICP",
        title="Structure and Interpretation of Computer Programs",
        capacity=2,
        description="Programs as a means of expressing processes.",
    ),
    Course(
        code="HTDP",
        title="How to Design Programs",
        capacity=30,
        description="A systematic approach to program design.",
    ),
]

# (name, birthdate, email)
SEED_STUDENTS = [
    ("Ramdas Tifft", date(1991, 3, 14), "r.tifft@gmail.com"),
    ("Ada Lovelace", date(1990, 12, 10), "ada@example.com"),
    ("Grace Hopper", date(1992, 12, 9), "grace@example.com"),
]


def seed_database(db: Database) -> dict[str, int]:
    """Insert demo accounts, courses and students that do not exist yet.

    Returns:
        Number of rows created per table
    """
    accounts = SQLAlchemyAccountStore()
    classes = SQLAlchemyClassStore()
    created = {"bank_accounts": 0, "courses": 0, "students": 0}

    with atomic(db) as scope:
        for account in SEED_ACCOUNTS:
            try:
                accounts.find_by_iban(scope, account.organization_iban)
            except AccountNotFoundError:
                accounts.create(scope, account)
                created["bank_accounts"] += 1

        for course in SEED_COURSES:
            try:
                classes.get_class_by_course_code(scope, course.code)
            except CourseNotFoundError:
                classes.create_course(scope, course)
                created["courses"] += 1

        emails = [email for _, _, email in SEED_STUDENTS]
        existing = {student.email for student in classes.get_students_by_email(scope, emails)}
        for name, birthdate, email in SEED_STUDENTS:
            if email not in existing:
                classes.register_student(scope, name=name, birthdate=birthdate, email=email)
                created["students"] += 1

        scope.commit()

    logger.info(f"Seeded database: {created}")
    return created
