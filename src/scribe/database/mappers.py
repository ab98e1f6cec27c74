"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so that column names such as
``iban`` and ``amount_currency`` never leak into the domain.
"""

from scribe.domain import entities as domain
from scribe.database.models import (
    BankAccount as ORMBankAccount,
    Course as ORMCourse,
    Enrollment as ORMEnrollment,
    Student as ORMStudent,
    Transaction as ORMTransaction,
)


def account_to_domain(orm_account: ORMBankAccount) -> domain.Account:
    """Convert SQLAlchemy BankAccount model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        organization_name=orm_account.organization_name,
        organization_bic=orm_account.bic,
        organization_iban=orm_account.iban,
        balance_cents=orm_account.balance_cents,
    )


def account_to_orm(account: domain.Account) -> ORMBankAccount:
    """Convert domain Account entity to a new SQLAlchemy BankAccount row."""
    return ORMBankAccount(
        id=account.id,
        organization_name=account.organization_name,
        bic=account.organization_bic,
        iban=account.organization_iban,
        balance_cents=account.balance_cents,
    )


def credit_transfer_to_domain(orm_transaction: ORMTransaction) -> domain.CreditTransfer:
    """Convert SQLAlchemy Transaction model to domain CreditTransfer entity."""
    return domain.CreditTransfer(
        id=orm_transaction.id,
        account_id=orm_transaction.bank_account_id,
        amount_cents=orm_transaction.amount_cents,
        currency=orm_transaction.amount_currency,
        counterparty_name=orm_transaction.counterparty_name,
        counterparty_bic=orm_transaction.counterparty_bic,
        counterparty_iban=orm_transaction.counterparty_iban,
        description=orm_transaction.description,
    )


def credit_transfer_to_orm(transfer: domain.CreditTransfer) -> ORMTransaction:
    """Convert domain CreditTransfer entity to a new SQLAlchemy Transaction row."""
    return ORMTransaction(
        id=transfer.id,
        bank_account_id=transfer.account_id,
        counterparty_name=transfer.counterparty_name,
        counterparty_iban=transfer.counterparty_iban,
        counterparty_bic=transfer.counterparty_bic,
        amount_cents=transfer.amount_cents,
        amount_currency=transfer.currency,
        description=transfer.description,
    )


def course_to_domain(orm_course: ORMCourse) -> domain.Course:
    """Convert SQLAlchemy Course model to domain Course entity."""
    return domain.Course(
        id=orm_course.id,
        code=orm_course.code,
        title=orm_course.title,
        capacity=orm_course.capacity,
        description=orm_course.description,
    )


def student_to_domain(orm_student: ORMStudent) -> domain.Student:
    """Convert SQLAlchemy Student model to domain Student entity."""
    return domain.Student(
        id=orm_student.id,
        name=orm_student.name,
        birthdate=orm_student.birthdate,
        email=orm_student.email,
    )


def enrollment_to_domain(orm_enrollment: ORMEnrollment) -> domain.Enrollment:
    """Convert SQLAlchemy Enrollment model to domain Enrollment entity."""
    return domain.Enrollment(
        id=orm_enrollment.id,
        course_id=orm_enrollment.course_id,
        student_id=orm_enrollment.student_id,
    )


def class_to_domain(orm_course: ORMCourse, orm_students) -> domain.Class:
    """Compose a Class read-model from a course row and its enrolled student rows."""
    return domain.Class(
        course=course_to_domain(orm_course),
        students=tuple(student_to_domain(student) for student in orm_students),
    )
