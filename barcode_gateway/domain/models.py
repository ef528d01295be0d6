"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import List, Optional, Tuple


class CycleType(str, Enum):
    """Which date slice appears in the barcode and which unit advances per cycle"""

    YEAR_MONTH = "YYMM"  # advance one month per cycle
    MONTH_DAY = "MMDD"  # advance one day per cycle


# (segment A, segment B, segment C)
BarcodeTriple = Tuple[str, str, str]


@dataclass(frozen=True)
class GenerationRequest:
    """Input for a barcode sequence generation call"""

    segment_a: str
    segment_b: str
    due_date_roc: str
    cycle_type: CycleType
    cycle_count: int
    initial_amount: int
    increment_amount: int = 0
    idempotency_key: str = ""


@dataclass(frozen=True)
class BillingCycle:
    """One generated billing period"""

    serial: int
    amount: int
    due_date: date
    barcodes: BarcodeTriple


@dataclass(frozen=True)
class GenerationResult:
    """Ordered billing cycles plus the echoed idempotency key"""

    cycles: List[BillingCycle]
    idempotency_key: str


@dataclass(frozen=True)
class AccountSnapshot:
    """Quota account state as read from storage"""

    account_id: str
    balance: int
    last_idempotency_key: Optional[str]


@dataclass(frozen=True)
class DeductionResult:
    """Outcome of a quota deduction"""

    account_id: str
    balance: int
    duplicate: bool  # True when the idempotency key was already applied
