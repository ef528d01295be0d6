"""Pydantic schemas for API request/response validation"""

from datetime import date
from typing import Any, List
from pydantic import BaseModel, Field, field_validator
from barcode_gateway.domain.models import CycleType


class GenerateBarcodesRequest(BaseModel):
    """
    Request body for POST /v1/barcodes

    Only types are enforced here; value rules (empty segments, non-positive
    amounts, cycle limits) live in the domain so every caller gets the same
    error kinds.
    """

    segment_a: str = Field(..., description="First barcode segment (alphanumeric)")
    segment_b: str = Field(..., description="Second barcode segment (alphanumeric)")
    payment_due: str = Field(..., description="Due date as ROC YYYMMDD, e.g. 1130101")
    cycle_type: CycleType = Field(..., description="YYMM (monthly) or MMDD (daily), enum names also accepted")
    cycle_count: int = Field(..., description="Number of billing cycles to generate")
    payment_amount: int = Field(..., description="Amount of the first cycle")
    increment_amount: int = Field(0, description="Amount added after each cycle")
    request_key: str = Field(..., description="Client idempotency key, echoed back")

    @field_validator("cycle_type", mode="before")
    @classmethod
    def accept_enum_names(cls, value: Any) -> Any:
        if isinstance(value, str) and value in CycleType.__members__:
            return CycleType[value]
        return value


class CycleSchema(BaseModel):
    """Single generated billing cycle"""

    serial: int
    amount: int
    due_date: date
    barcodes: List[str]


class GenerateBarcodesResponse(BaseModel):
    """Response for POST /v1/barcodes"""

    request_key: str
    barcodes: List[CycleSchema]


class DeductQuotaRequest(BaseModel):
    """Request body for POST /v1/quota/deduct"""

    account_id: str = Field(..., min_length=1, description="Account identifier (already authenticated)")
    amount: int = Field(..., description="Quota units to deduct")
    request_key: str = Field(..., description="Idempotency key from the generation call")


class DeductQuotaResponse(BaseModel):
    """Response for POST /v1/quota/deduct"""

    account_id: str
    balance: int
    duplicate: bool = False


class BalanceResponse(BaseModel):
    """Response for GET /v1/quota/{account_id}"""

    account_id: str
    balance: int
