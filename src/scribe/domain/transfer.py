"""Bulk fund transfer workflow."""

import logging
from dataclasses import replace
from typing import Optional

from scribe.database.base import AccountStore, Database, LedgerStore
from scribe.database.scope import IsolationLevel, atomic
from scribe.domain.entities import BulkTransfer, CreditTransfer
from scribe.domain.errors import InsufficientFundsError
from scribe.domain.validation import positive_balance, validate_bulk_transfer


class FundTransferWorkflow:
    """Debits one account and records its credit transfers atomically."""

    def __init__(
        self,
        db: Database,
        accounts: AccountStore,
        ledger: LedgerStore,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize fund transfer workflow.

        Args:
            db: Database that opens transactions
            accounts: Bank account store
            ledger: Credit transfer store
            logger: Logger for workflow events (defaults to the module logger)
        """
        self.db = db
        self.accounts = accounts
        self.ledger = ledger
        self.logger = logger or logging.getLogger(__name__)

    def execute(self, bulk_transfer: BulkTransfer) -> list[CreditTransfer]:
        """Execute a bulk transfer.

        The account is resolved by IBAN and debited by the transfer total, and
        every credit transfer is inserted against it, all inside one
        serializable transaction. If the account cannot cover the total,
        nothing is written.

        Args:
            bulk_transfer: Account reference and credit transfers to settle

        Returns:
            The inserted credit transfers with IDs and account ID assigned

        Raises:
            ValidationError: If the request is malformed
            AccountNotFoundError: If no account has the requested IBAN
            InsufficientFundsError: If the balance would go negative
            SerializationConflictError: If a concurrent transaction won the race
            InfrastructureError: For any other store failure
        """
        validate_bulk_transfer(bulk_transfer)
        iban = bulk_transfer.account.organization_iban
        total = bulk_transfer.total_cents

        with atomic(self.db, IsolationLevel.SERIALIZABLE, self.logger) as scope:
            account = self.accounts.find_by_iban(scope, iban)

            new_balance = account.balance_cents - total
            if not positive_balance(new_balance):
                self.logger.info(
                    f"Rejected bulk transfer of {total} cents from {iban}: "
                    f"balance is {account.balance_cents} cents"
                )
                raise InsufficientFundsError(iban, account.balance_cents, total)

            self.accounts.update(scope, replace(account, balance_cents=new_balance))
            transfers = [
                transfer.with_account_id(account.id) for transfer in bulk_transfer.credit_transfers
            ]
            inserted = self.ledger.bulk_insert(scope, transfers)
            scope.commit()

        self.logger.info(
            f"Settled {len(inserted)} credit transfers totalling {total} cents from {iban}"
        )
        return inserted
