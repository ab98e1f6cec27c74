"""Shared pytest fixtures for scribe tests."""

import json
import tempfile
import os
from datetime import date
import pytest

from scribe.database.factories import create_sqlite_database
from scribe.database.scope import atomic
from scribe.database.sqlalchemy_db import (
    SQLAlchemyAccountStore,
    SQLAlchemyClassStore,
    SQLAlchemyLedgerStore,
)
from scribe.domain.account import AccountService
from scribe.domain.enrollment import EnrollmentWorkflow
from scribe.domain.entities import Course
from scribe.domain.transfer import FundTransferWorkflow

ACME_IBAN = "FR10474608000002006107XXXXX"


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path, busy_timeout=10.0)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_store():
    return SQLAlchemyAccountStore()


@pytest.fixture
def ledger_store():
    return SQLAlchemyLedgerStore()


@pytest.fixture
def class_store():
    return SQLAlchemyClassStore()


@pytest.fixture
def account_service(temp_db, account_store, ledger_store):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db, account_store, ledger_store)


@pytest.fixture
def transfer_workflow(temp_db, account_store, ledger_store):
    """Create a FundTransferWorkflow with a temporary database."""
    return FundTransferWorkflow(temp_db, account_store, ledger_store)


@pytest.fixture
def enrollment_workflow(temp_db, class_store):
    """Create an EnrollmentWorkflow with a temporary database."""
    return EnrollmentWorkflow(temp_db, class_store)


@pytest.fixture
def acme_account(account_service):
    """Create the ACME Corp account with a balance of 100000.00."""
    return account_service.create_account(
        organization_name="ACME Corp",
        bic="OIVUSCLQXXX",
        iban=ACME_IBAN,
        balance_cents=10_000_000,
    )


@pytest.fixture
def register_students(temp_db, class_store):
    """Return a helper that registers students by email."""

    def _register(*emails):
        with atomic(temp_db) as scope:
            students = [
                class_store.register_student(
                    scope, name=email.split("@")[0], birthdate=date(1990, 1, 1), email=email
                )
                for email in emails
            ]
            scope.commit()
        return students

    return _register


@pytest.fixture
def sicp_course(temp_db, class_store):
    """Create the SICP course with capacity 2."""
    with atomic(temp_db) as scope:
        course = class_store.create_course(
            scope,
            Course(code="SICP", title="Structure and Interpretation of Computer Programs", capacity=2),
        )
        scope.commit()
    return course


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def write_json(tmp_path):
    """Return a helper that writes a payload to a JSON file and returns its path."""

    def _write(payload, name="request.json"):
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)

    return _write
