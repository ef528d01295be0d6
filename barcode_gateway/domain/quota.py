"""Quota ledger - at-most-once balance deduction keyed by a client idempotency key"""

import logging
from typing import Optional, Protocol
from barcode_gateway.domain.exceptions import (
    AccountNotFoundError,
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidRequestError,
    StorageConflictError,
)
from barcode_gateway.domain.models import AccountSnapshot, DeductionResult
from barcode_gateway.domain.result import Result, capture


class AccountStore(Protocol):
    """Storage contract the ledger needs; owns the persisted quota account"""

    def read_balance(self, account_id: str) -> Optional[AccountSnapshot]:
        ...

    def conditional_deduct(
        self,
        account_id: str,
        amount: int,
        expected_prior_key: Optional[str],
        new_key: str,
    ) -> Optional[int]:
        """
        Atomically subtract amount and store new_key, but only while the
        stored key still equals expected_prior_key and the balance covers
        amount. Returns the new balance, or None if the predicate failed.
        """
        ...


class QuotaLedger:
    """Applies quota deductions exactly once per idempotency key"""

    def __init__(self, store: AccountStore):
        self.store = store

    def deduct(self, account_id: str, amount: int, idempotency_key: str) -> Result[DeductionResult]:
        """
        Deduct amount from the account unless this key was already applied.

        Flow:
        1. Read (balance, last key)
        2. Same key as last time → return current balance, no write
        3. Balance too low → InsufficientBalance, no write
        4. Conditional write re-checking the prior key at write time
        5. On conflict, re-read once: if our key won the race elsewhere this is
           a duplicate; otherwise report StorageConflict (safe to retry)
        """
        return capture(self._deduct, account_id, amount, idempotency_key)

    def balance(self, account_id: str) -> Result[AccountSnapshot]:
        """Read-only balance lookup"""
        return capture(self._load, account_id)

    def _load(self, account_id: str) -> AccountSnapshot:
        snapshot = self.store.read_balance(account_id)
        if snapshot is None:
            raise AccountNotFoundError(f"Account {account_id} not found")
        return snapshot

    def _deduct(self, account_id: str, amount: int, idempotency_key: str) -> DeductionResult:
        if amount is None or amount <= 0:
            raise InvalidAmountError("Deduction amount must be greater than 0")
        if not idempotency_key:
            raise InvalidRequestError("Missing request key")

        snapshot = self._load(account_id)

        if snapshot.last_idempotency_key == idempotency_key:
            logging.info(
                "Duplicate deduction request skipped",
                extra={"account_id": account_id, "request_key": idempotency_key},
            )
            return DeductionResult(account_id=account_id, balance=snapshot.balance, duplicate=True)

        if snapshot.balance < amount:
            raise InsufficientBalanceError(
                f"Insufficient balance: {snapshot.balance} remaining, {amount} required"
            )

        new_balance = self.store.conditional_deduct(
            account_id,
            amount,
            expected_prior_key=snapshot.last_idempotency_key,
            new_key=idempotency_key,
        )
        if new_balance is not None:
            return DeductionResult(account_id=account_id, balance=new_balance, duplicate=False)

        current = self._load(account_id)
        if current.last_idempotency_key == idempotency_key:
            # A concurrent delivery of the same request deducted first
            return DeductionResult(account_id=account_id, balance=current.balance, duplicate=True)

        raise StorageConflictError(f"Account {account_id} changed during deduction, safe to retry")
