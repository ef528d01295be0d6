"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from barcode_gateway.domain.quota import QuotaLedger
from barcode_gateway.infrastructure.database.repositories import AccountRepository
from barcode_gateway.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_quota_ledger(db: Session = Depends(get_db)) -> QuotaLedger:
    """Provide a ledger bound to the request's database session"""
    return QuotaLedger(AccountRepository(db))
