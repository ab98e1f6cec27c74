"""End-to-end tests for the scribe command line."""

import pytest

from scribe.cli.error_handling import exit_code_for
from scribe.cli.main import cli
from scribe.domain.account import AccountService
from scribe.domain.errors import (
    CourseNotFoundError,
    InfrastructureError,
    InsufficientFundsError,
    SerializationConflictError,
    ValidationError,
)

ACME_IBAN = "FR10474608000002006107XXXXX"


def credit_transfer(amount, name="Bip Bip"):
    return {
        "amount": amount,
        "currency": "EUR",
        "counterparty_name": name,
        "counterparty_bic": "CRLYFRPPTOU",
        "counterparty_iban": "EE383680981021245685",
        "description": "Wonderland/4410",
    }


def bulk_payload(*transfers):
    return {
        "organization_name": "ACME Corp",
        "organization_bic": "OIVUSCLQXXX",
        "organization_iban": ACME_IBAN,
        "credit_transfers": list(transfers),
    }


@pytest.fixture
def run(cli_runner, temp_db):
    """Invoke the CLI against the temporary database."""

    def _run(*args):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])

    return _run


@pytest.fixture
def seeded(run):
    result = run("seed")
    assert result.exit_code == 0, result.output
    return result


def test_init(run):
    result = run("init")
    assert result.exit_code == 0
    assert "Initialized database" in result.output


def test_seed_reports_created_rows(seeded, run):
    assert "courses: 2 created" in seeded.output

    again = run("seed")
    assert again.exit_code == 0
    assert "courses: 0 created" in again.output


def test_transfer_settles_and_updates_balance(seeded, run, write_json):
    path = write_json(
        bulk_payload(
            credit_transfer("61000", "Wile E Coyote"),
            credit_transfer("14.5"),
            credit_transfer("1237", "Road Runner"),
        )
    )

    result = run("transfer", path)

    assert result.exit_code == 0, result.output
    assert f"Settled 3 credit transfers totalling 62251.50 from {ACME_IBAN}" in result.output

    shown = run("account", "show", ACME_IBAN)
    assert shown.exit_code == 0
    assert "Balance: 37748.50" in shown.output
    assert "Road Runner" in shown.output


def test_transfer_insufficient_funds(seeded, run, write_json):
    result = run("transfer", write_json(bulk_payload(credit_transfer("100000.01"))))

    assert result.exit_code == 3
    assert "insufficient funds" in result.output

    shown = run("account", "show", ACME_IBAN)
    assert "Balance: 100000.00" in shown.output
    assert "No transfers found." in shown.output


def test_transfer_malformed_request(seeded, run, write_json):
    result = run("transfer", write_json({"organization_iban": ACME_IBAN}))
    assert result.exit_code == 2


def test_transfer_request_not_utf8(seeded, run, tmp_path):
    path = tmp_path / "latin1.json"
    path.write_bytes(b'{"organization_iban": "\xff"}')

    result = run("transfer", str(path))

    assert result.exit_code == 2
    assert "UTF-8" in result.output


def test_transfer_unknown_account(run, write_json):
    result = run("transfer", write_json(bulk_payload(credit_transfer("1"))))
    assert result.exit_code == 2
    assert "not found" in result.output


def test_enroll_and_show_class(seeded, run, write_json):
    path = write_json({"course_code": "SICP", "students": [{"email": "r.tifft@gmail.com"}]})

    result = run("enroll", path)

    assert result.exit_code == 0, result.output
    assert "Enrolled 1 student in SICP" in result.output

    shown = run("class", "show", "SICP")
    assert shown.exit_code == 0
    assert "Enrolled: 1/2" in shown.output
    assert "r.tifft@gmail.com" in shown.output


def test_enroll_counts_repeated_email_once(seeded, run, write_json):
    path = write_json(
        {"course_code": "HTDP", "students": [{"email": "ada@example.com"}, {"email": "ada@example.com"}]}
    )

    result = run("enroll", path)

    assert result.exit_code == 0, result.output
    assert "Enrolled 1 student in HTDP" in result.output
    assert "Enrolled: 1/30" in result.output


def test_enroll_rejections(seeded, run, write_json):
    unregistered = run(
        "enroll", write_json({"course_code": "SICP", "students": [{"email": "ghost@example.com"}]})
    )
    assert unregistered.exit_code == 3
    assert "ghost@example.com" in unregistered.output

    oversubscribed = run(
        "enroll",
        write_json(
            {
                "course_code": "SICP",
                "students": [
                    {"email": "r.tifft@gmail.com"},
                    {"email": "ada@example.com"},
                    {"email": "grace@example.com"},
                ],
            }
        ),
    )
    assert oversubscribed.exit_code == 3
    assert "only 2 spaces" in oversubscribed.output

    assert "No students enrolled." in run("class", "show", "SICP").output


def test_class_show_unknown_course(run):
    result = run("class", "show", "NOPE")
    assert result.exit_code == 2
    assert "Course 'NOPE' not found" in result.output


def test_account_create_and_list(run):
    result = run(
        "account", "create", "Globex", "--iban", "DE89370400440532013000", "--bic", "COBADEFFXXX",
        "--balance", "250.75",
    )
    assert result.exit_code == 0, result.output

    duplicate = run(
        "account", "create", "Globex", "--iban", "DE89370400440532013000", "--bic", "COBADEFFXXX",
    )
    assert duplicate.exit_code == 3

    listed = run("account", "list")
    assert "Globex" in listed.output
    assert "Balance: 250.75" in listed.output


def test_account_list_database_failure(run, monkeypatch):
    def fail(self):
        raise InfrastructureError("list accounts: disk I/O error")

    monkeypatch.setattr(AccountService, "list_accounts", fail)

    result = run("account", "list")

    assert result.exit_code == 1
    assert "Error: list accounts: disk I/O error" in result.output
    assert "Traceback" not in result.output


def test_account_create_bad_balance(run):
    result = run("account", "create", "Globex", "--iban", "X", "--bic", "Y", "--balance", "lots")
    assert result.exit_code == 2


@pytest.mark.parametrize(
    "error, code",
    [
        (ValidationError("bad"), 2),
        (CourseNotFoundError("NOPE"), 2),
        (InsufficientFundsError(), 3),
        (SerializationConflictError("busy"), 4),
        (InfrastructureError("down"), 1),
    ],
)
def test_exit_code_for(error, code):
    assert exit_code_for(error) == code
