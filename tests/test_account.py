"""Tests for the account service."""

import pytest

from scribe.domain.account import AccountService
from scribe.domain.entities import Account, BulkTransfer, CreditTransfer
from scribe.domain.errors import AccountNotFoundError, ConflictError, ValidationError

ACME_IBAN = "FR10474608000002006107XXXXX"


def bip_bip_transfer():
    return BulkTransfer(
        account=Account(
            organization_name="ACME Corp", organization_bic="OIVUSCLQXXX", organization_iban=ACME_IBAN
        ),
        credit_transfers=(
            CreditTransfer(
                amount_cents=1450,
                currency="EUR",
                counterparty_name="Bip Bip",
                counterparty_bic="CRLYFRPPTOU",
                counterparty_iban="EE383680981021245685",
                description="Wonderland/4410",
            ),
        ),
    )


class CountingDatabase:
    """Database wrapper that counts opened transactions."""

    def __init__(self, database):
        self.database = database
        self.begun = 0

    def begin(self, isolation):
        self.begun += 1
        return self.database.begin(isolation)


class TestCreateAccount:
    def test_create_account(self, account_service):
        """Test creating an account assigns an ID."""
        account = account_service.create_account(
            organization_name="Globex", bic="COBADEFFXXX", iban="DE89370400440532013000", balance_cents=25
        )

        assert account.id is not None
        assert account_service.get_account_by_iban("DE89370400440532013000") == account

    def test_duplicate_iban(self, account_service, acme_account):
        """Test that an IBAN can only be registered once."""
        with pytest.raises(ConflictError):
            account_service.create_account(organization_name="Other", bic="X", iban=ACME_IBAN)

    @pytest.mark.parametrize("iban, balance", [("", 0), ("DE89370400440532013000", -1)])
    def test_invalid_account(self, account_service, iban, balance):
        with pytest.raises(ValidationError):
            account_service.create_account(
                organization_name="Globex", bic="COBADEFFXXX", iban=iban, balance_cents=balance
            )


class TestStatement:
    def test_statement_matches_balance(self, transfer_workflow, account_service, acme_account):
        """Test that the statement pairs the debited balance with its transfers."""
        transfer_workflow.execute(bip_bip_transfer())

        account, transfers = account_service.get_statement(ACME_IBAN)

        assert account.balance_cents == 10_000_000 - 1450
        assert [t.amount_cents for t in transfers] == [1450]
        assert acme_account.balance_cents - account.balance_cents == sum(
            t.amount_cents for t in transfers
        )

    def test_statement_reads_in_one_transaction(self, temp_db, account_store, ledger_store, acme_account):
        """Test that balance and transfers come from a single transaction."""
        db = CountingDatabase(temp_db)
        service = AccountService(db, account_store, ledger_store)

        service.get_statement(ACME_IBAN)

        assert db.begun == 1

    def test_statement_unknown_account(self, account_service):
        with pytest.raises(AccountNotFoundError):
            account_service.get_statement("XX00")
