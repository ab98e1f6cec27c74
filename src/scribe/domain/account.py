"""Account domain service."""

from scribe.database.base import AccountStore, Database, LedgerStore
from scribe.database.scope import atomic
from scribe.domain.entities import Account as AccountEntity
from scribe.domain.entities import CreditTransfer
from scribe.domain.errors import AccountNotFoundError, ConflictError, ValidationError


class AccountService:
    """Service for creating and inspecting bank accounts."""

    def __init__(self, db: Database, accounts: AccountStore, ledger: LedgerStore):
        """Initialize account service.

        Args:
            db: Database instance
            accounts: Bank account store
            ledger: Credit transfer store
        """
        self.db = db
        self.accounts = accounts
        self.ledger = ledger

    def create_account(
        self, organization_name: str, bic: str, iban: str, balance_cents: int = 0
    ) -> AccountEntity:
        """Create a new bank account.

        Args:
            organization_name: Account holder
            bic: Bank identifier code
            iban: Account IBAN (must be unique)
            balance_cents: Opening balance in cents

        Returns:
            The stored account

        Raises:
            ValidationError: If the IBAN is empty or the opening balance is negative
            ConflictError: If an account with this IBAN already exists
        """
        if not iban:
            raise ValidationError("IBAN is required")
        if balance_cents < 0:
            raise ValidationError("Opening balance cannot be negative")

        account = AccountEntity(
            organization_name=organization_name,
            organization_bic=bic,
            organization_iban=iban,
            balance_cents=balance_cents,
        )
        with atomic(self.db) as scope:
            try:
                self.accounts.find_by_iban(scope, iban)
            except AccountNotFoundError:
                pass
            else:
                raise ConflictError(f"Account with IBAN '{iban}' already exists")
            account = self.accounts.create(scope, account)
            scope.commit()
        return account

    def get_account_by_iban(self, iban: str) -> AccountEntity:
        """Get account by IBAN.

        Raises:
            AccountNotFoundError: If no account has this IBAN
        """
        with atomic(self.db) as scope:
            account = self.accounts.find_by_iban(scope, iban)
            scope.commit()
        return account

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts."""
        with atomic(self.db) as scope:
            accounts = self.accounts.list_accounts(scope)
            scope.commit()
        return accounts

    def get_statement(self, iban: str) -> tuple[AccountEntity, list[CreditTransfer]]:
        """Get an account and its credit transfers as of one transaction.

        Raises:
            AccountNotFoundError: If no account has this IBAN
        """
        with atomic(self.db) as scope:
            account = self.accounts.find_by_iban(scope, iban)
            transfers = self.ledger.list_for_account(scope, account.id)
            scope.commit()
        return account, transfers
