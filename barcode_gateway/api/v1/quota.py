"""Quota endpoints - idempotent deduction and balance lookup"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from barcode_gateway.api.v1.errors import http_error
from barcode_gateway.api.v1.schemas import BalanceResponse, DeductQuotaRequest, DeductQuotaResponse
from barcode_gateway.api.dependencies import get_quota_ledger, get_request_id
from barcode_gateway.domain.quota import QuotaLedger
from barcode_gateway.infrastructure.database.session import get_db
from barcode_gateway.infrastructure.observability.logging import log_deduction
from barcode_gateway.infrastructure.observability.metrics import record_deduction

router = APIRouter()


@router.post("/quota/deduct", response_model=DeductQuotaResponse)
def deduct_quota(
    request_body: DeductQuotaRequest,
    request: Request,
    db: Session = Depends(get_db),
    ledger: QuotaLedger = Depends(get_quota_ledger),
):
    """
    Deduct quota at most once per request_key.

    Flow:
    1. Ledger reads balance + last applied key
    2. Repeated key → current balance returned, nothing written
    3. Otherwise a single conditional UPDATE applies the deduction
    4. Commit on success, roll back on any failure
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = ledger.deduct(request_body.account_id, request_body.amount, request_body.request_key)
    except Exception as e:
        db.rollback()
        record_deduction("error")
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000

    if not result.is_ok:
        db.rollback()
        record_deduction(result.kind.value)
        log_deduction(
            request_id,
            request_body.account_id,
            result.kind.value,
            None,
            duration_ms,
            error_message=result.message,
        )
        raise http_error(result)

    deduction = result.value
    db.commit()

    outcome = "duplicate" if deduction.duplicate else "deducted"
    record_deduction(outcome)
    log_deduction(request_id, deduction.account_id, outcome, deduction.balance, duration_ms)

    return DeductQuotaResponse(
        account_id=deduction.account_id,
        balance=deduction.balance,
        duplicate=deduction.duplicate,
    )


@router.get("/quota/{account_id}", response_model=BalanceResponse)
def get_balance(account_id: str, ledger: QuotaLedger = Depends(get_quota_ledger)):
    """Current quota balance for an account"""
    result = ledger.balance(account_id)
    if not result.is_ok:
        raise http_error(result)

    return BalanceResponse(account_id=result.value.account_id, balance=result.value.balance)
