"""Payment barcode generation - one three-segment barcode per billing cycle"""

from datetime import date, timedelta
from typing import List
from barcode_gateway.domain import roc_date
from barcode_gateway.domain.encoding import Parity, checksum_char, encode_alphanumeric, positional_sum
from barcode_gateway.domain.exceptions import InvalidAmountError, InvalidRequestError
from barcode_gateway.domain.models import BarcodeTriple, BillingCycle, CycleType, GenerationRequest, GenerationResult
from barcode_gateway.domain.result import Result, capture
from barcode_gateway.utils.date_utils import add_months

AMOUNT_WIDTH = 9
MAX_AMOUNT = 10**AMOUNT_WIDTH - 1
DEFAULT_MAX_CYCLES = 120


def build_cycle_barcodes(
    segment_a: str,
    segment_b: str,
    encoded_a: str,
    encoded_b: str,
    amount: int,
    due_date: date,
    cycle_type: CycleType,
) -> BarcodeTriple:
    """
    Build the barcode triple for a single billing cycle.

    Segment C layout (15 chars):
        date part (4) + odd checksum (1) + even checksum (1) + amount (9)

    The date part is YYMM or MMDD of the compact ROC date depending on
    cycle_type. Both checksums cover the digit-encoded segments A and B plus
    date part + padded amount.

    Raises:
        InvalidAmountError: amount does not fit in 9 digits
    """
    if amount < 0 or amount > MAX_AMOUNT:
        raise InvalidAmountError(f"Amount {amount} does not fit in {AMOUNT_WIDTH} digits")

    padded_amount = str(amount).zfill(AMOUNT_WIDTH)
    compact = roc_date.encode(due_date)
    date_part = compact[0:4] if cycle_type == CycleType.YEAR_MONTH else compact[2:6]
    tail = date_part + padded_amount

    odd_sum = sum(positional_sum(part, Parity.ODD) for part in (encoded_a, encoded_b, tail))
    even_sum = sum(positional_sum(part, Parity.EVEN) for part in (encoded_a, encoded_b, tail))

    segment_c = (
        date_part
        + checksum_char(odd_sum, Parity.ODD)
        + checksum_char(even_sum, Parity.EVEN)
        + padded_amount
    )
    return segment_a, segment_b, segment_c


def _validate(request: GenerationRequest, max_cycles: int) -> None:
    """Reject the whole request before any cycle is produced"""
    if not request.segment_a or not request.segment_b:
        raise InvalidRequestError("Both barcode segments are required")
    if not request.idempotency_key:
        raise InvalidRequestError("Missing request key")
    if not isinstance(request.cycle_type, CycleType):
        raise InvalidRequestError(f"Unknown cycle type: {request.cycle_type!r}")
    if request.cycle_count < 1:
        raise InvalidRequestError("Cycle count must be at least 1")
    if request.cycle_count > max_cycles:
        raise InvalidRequestError(f"Cycle count {request.cycle_count} exceeds limit of {max_cycles}")
    if request.initial_amount <= 0:
        raise InvalidAmountError("Payment amount must be greater than 0")

    # Amount is linear in the cycle index, so checking both ends covers every cycle
    last_amount = request.initial_amount + (request.cycle_count - 1) * request.increment_amount
    if last_amount <= 0:
        raise InvalidAmountError(f"Cycle {request.cycle_count} amount would be {last_amount}")
    if max(request.initial_amount, last_amount) > MAX_AMOUNT:
        raise InvalidAmountError(f"Cycle amounts exceed the {AMOUNT_WIDTH}-digit barcode limit")


def _generate(request: GenerationRequest, max_cycles: int, strict_dates: bool) -> GenerationResult:
    _validate(request, max_cycles)
    start_date = roc_date.decode(request.due_date_roc, strict=strict_dates)

    # Segments are fixed for the whole schedule
    encoded_a = encode_alphanumeric(request.segment_a)
    encoded_b = encode_alphanumeric(request.segment_b)

    cycles: List[BillingCycle] = []
    for i in range(request.cycle_count):
        amount = request.initial_amount + i * request.increment_amount

        # Offsets are taken from the start date so month-end days don't drift
        if request.cycle_type == CycleType.YEAR_MONTH:
            due_date = add_months(start_date, i)
        else:
            due_date = start_date + timedelta(days=i)

        barcodes = build_cycle_barcodes(
            request.segment_a,
            request.segment_b,
            encoded_a,
            encoded_b,
            amount,
            due_date,
            request.cycle_type,
        )
        cycles.append(BillingCycle(serial=i + 1, amount=amount, due_date=due_date, barcodes=barcodes))

    return GenerationResult(cycles=cycles, idempotency_key=request.idempotency_key)


def generate_barcode_sequence(
    request: GenerationRequest,
    max_cycles: int = DEFAULT_MAX_CYCLES,
    strict_dates: bool = False,
) -> Result[GenerationResult]:
    """
    Main entry point: generate the full barcode schedule for a request.

    Requirements:
    - Exactly cycle_count cycles, serials 1..N in order
    - Cycle i amount = initial_amount + i * increment_amount
    - Due date advances one month (YEAR_MONTH) or one day (MONTH_DAY) per cycle
    - All validation happens before the first cycle; never a partial schedule

    Returns:
        Ok(GenerationResult) or Err(kind, message)

    Example:
        AA / 11, due 1130101, MONTH_DAY, 20 (+10), 2 cycles
        → segment C "010126000000020", then "010228000000030"
    """
    return capture(_generate, request, max_cycles, strict_dates)
