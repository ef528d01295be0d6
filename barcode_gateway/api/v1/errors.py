"""Translate domain Err results into HTTP errors"""

from fastapi import HTTPException
from barcode_gateway.domain.exceptions import ErrorKind
from barcode_gateway.domain.result import Err

STATUS_BY_KIND = {
    ErrorKind.INVALID_DATE_FORMAT: 400,
    ErrorKind.INVALID_AMOUNT: 400,
    ErrorKind.INVALID_REQUEST: 400,
    ErrorKind.INSUFFICIENT_BALANCE: 400,
    ErrorKind.ACCOUNT_NOT_FOUND: 404,
    ErrorKind.STORAGE_CONFLICT: 409,
}


def http_error(err: Err) -> HTTPException:
    """Build the HTTPException for a failed result"""
    return HTTPException(
        status_code=STATUS_BY_KIND.get(err.kind, 500),
        detail={"error": err.kind.value, "message": err.message},
    )
