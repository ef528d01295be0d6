"""Data access layer for quota accounts"""

from typing import Optional
from sqlalchemy import select, update
from sqlalchemy.orm import Session
from sqlalchemy.sql import func
from barcode_gateway.infrastructure.database.models import QuotaAccount
from barcode_gateway.domain.models import AccountSnapshot


class AccountRepository:
    """Repository for quota accounts, implementing the ledger's AccountStore"""

    def __init__(self, db: Session):
        self.db = db

    def read_balance(self, account_id: str) -> Optional[AccountSnapshot]:
        """Fetch current balance and last request key (bypasses the identity map)"""
        row = self.db.execute(
            select(QuotaAccount.balance, QuotaAccount.last_idempotency_key)
            .where(QuotaAccount.id == account_id)
        ).first()
        if row is None:
            return None
        return AccountSnapshot(
            account_id=account_id,
            balance=row.balance,
            last_idempotency_key=row.last_idempotency_key,
        )

    def conditional_deduct(
        self,
        account_id: str,
        amount: int,
        expected_prior_key: Optional[str],
        new_key: str,
    ) -> Optional[int]:
        """
        Compare-and-swap deduction in a single UPDATE.

        The WHERE clause re-checks the prior request key and the balance at
        write time, so two racing requests can't both deduct. Returns the new
        balance, or None when no row matched.
        """
        if expected_prior_key is None:
            key_matches = QuotaAccount.last_idempotency_key.is_(None)
        else:
            key_matches = QuotaAccount.last_idempotency_key == expected_prior_key

        result = self.db.execute(
            update(QuotaAccount)
            .where(
                QuotaAccount.id == account_id,
                key_matches,
                QuotaAccount.balance >= amount,
            )
            .values(
                balance=QuotaAccount.balance - amount,
                last_idempotency_key=new_key,
                updated_at=func.now(),
            )
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            return None

        snapshot = self.read_balance(account_id)
        return snapshot.balance if snapshot else None
