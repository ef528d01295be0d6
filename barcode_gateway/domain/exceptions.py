"""Domain-specific exceptions"""

from enum import Enum


class ErrorKind(str, Enum):
    """Stable error identifiers shared by exceptions and Err results"""

    INVALID_DATE_FORMAT = "invalid_date_format"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_REQUEST = "invalid_request"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    STORAGE_CONFLICT = "storage_conflict"
    ACCOUNT_NOT_FOUND = "account_not_found"


class DomainException(Exception):
    """Base exception for domain layer"""

    kind: ErrorKind = ErrorKind.INVALID_REQUEST


class InvalidDateFormatError(DomainException):
    """Due date is not a 7-digit ROC date string"""

    kind = ErrorKind.INVALID_DATE_FORMAT


class InvalidAmountError(DomainException):
    """Amount is non-positive or does not fit the barcode amount field"""

    kind = ErrorKind.INVALID_AMOUNT


class InvalidRequestError(DomainException):
    """Required field missing/empty or cycle count out of range"""

    kind = ErrorKind.INVALID_REQUEST


class InsufficientBalanceError(DomainException):
    """Deduction exceeds the account balance"""

    kind = ErrorKind.INSUFFICIENT_BALANCE


class StorageConflictError(DomainException):
    """Conditional write lost a race; the caller may safely retry"""

    kind = ErrorKind.STORAGE_CONFLICT


class AccountNotFoundError(DomainException):
    """No quota account exists for the given id"""

    kind = ErrorKind.ACCOUNT_NOT_FOUND


_EXCEPTIONS_BY_KIND = {
    exc.kind: exc
    for exc in (
        InvalidDateFormatError,
        InvalidAmountError,
        InvalidRequestError,
        InsufficientBalanceError,
        StorageConflictError,
        AccountNotFoundError,
    )
}


def exception_for(kind: ErrorKind) -> type[DomainException]:
    """Map an error kind back to its exception class"""
    return _EXCEPTIONS_BY_KIND.get(kind, DomainException)
