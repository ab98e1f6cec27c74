"""SQLAlchemy models for scribe database.

Amounts are stored as integer minor-unit counts (cents).
"""

from sqlalchemy import (
    BigInteger,
    Column,
    Date,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class BankAccount(Base):
    """Bank account model."""

    __tablename__ = "bank_accounts"

    id = Column(Integer, primary_key=True)
    organization_name = Column(String, nullable=False)
    iban = Column(String, unique=True, nullable=False)
    bic = Column(String, nullable=False)
    balance_cents = Column(BigInteger, nullable=False, default=0)

    # Relationships
    transactions = relationship("Transaction", back_populates="bank_account")


class Transaction(Base):
    """Credit transfer model. Rows are immutable once inserted."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    bank_account_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=False)
    counterparty_name = Column(String, nullable=False)
    counterparty_iban = Column(String, nullable=False)
    counterparty_bic = Column(String, nullable=False)
    amount_cents = Column(BigInteger, nullable=False)
    amount_currency = Column(String(3), nullable=False)
    description = Column(String, nullable=False, default="")

    # Relationships
    bank_account = relationship("BankAccount", back_populates="transactions")


class Course(Base):
    """Course model."""

    __tablename__ = "courses"

    id = Column(Integer, primary_key=True)
    code = Column(String, unique=True, nullable=False)
    title = Column(String, nullable=False, default="")
    capacity = Column(Integer, nullable=False)
    description = Column(String, nullable=False, default="")


class Student(Base):
    """Student model."""

    __tablename__ = "students"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    birthdate = Column(Date, nullable=True)
    email = Column(String, unique=True, nullable=False)


class Enrollment(Base):
    """Enrollment of a student in a course."""

    __tablename__ = "enrollments"

    id = Column(Integer, primary_key=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False)

    # A student is enrolled in a course at most once
    __table_args__ = (UniqueConstraint("course_id", "student_id", name="uq_course_student"),)


def create_database_engine(database_url: str, busy_timeout: float = 5.0) -> Engine:
    """Create a SQLAlchemy engine.

    Args:
        database_url: SQLAlchemy database URL
        busy_timeout: Seconds a SQLite connection waits for a lock before failing
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args = {"timeout": busy_timeout, "check_same_thread": False}
    return create_engine(database_url, echo=False, connect_args=connect_args)
