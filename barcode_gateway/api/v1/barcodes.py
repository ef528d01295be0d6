"""POST /v1/barcodes - Payment barcode schedule generation"""

import time
from fastapi import APIRouter, Request

from barcode_gateway.api.v1.errors import http_error
from barcode_gateway.api.v1.schemas import CycleSchema, GenerateBarcodesRequest, GenerateBarcodesResponse
from barcode_gateway.api.dependencies import get_request_id
from barcode_gateway.config import settings
from barcode_gateway.domain.barcodes import generate_barcode_sequence
from barcode_gateway.domain.models import GenerationRequest
from barcode_gateway.infrastructure.observability.logging import log_generation
from barcode_gateway.infrastructure.observability.metrics import record_generation

router = APIRouter()


@router.post("/barcodes", response_model=GenerateBarcodesResponse)
def generate_barcodes(request_body: GenerateBarcodesRequest, request: Request):
    """
    Generate one three-segment payment barcode per billing cycle.

    Pure computation: no quota is consumed here. The client later calls
    POST /v1/quota/deduct with the same request_key once the barcodes are used.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    result = generate_barcode_sequence(
        GenerationRequest(
            segment_a=request_body.segment_a,
            segment_b=request_body.segment_b,
            due_date_roc=request_body.payment_due,
            cycle_type=request_body.cycle_type,
            cycle_count=request_body.cycle_count,
            initial_amount=request_body.payment_amount,
            increment_amount=request_body.increment_amount,
            idempotency_key=request_body.request_key,
        ),
        max_cycles=settings.max_cycle_count,
        strict_dates=settings.strict_due_date,
    )
    duration_ms = (time.time() - start_time) * 1000

    if not result.is_ok:
        record_generation(result.kind.value)
        log_generation(
            request_id,
            request_body.request_key,
            request_body.cycle_count,
            result.kind.value,
            duration_ms,
            error_message=result.message,
        )
        raise http_error(result)

    generated = result.value
    record_generation("ok", len(generated.cycles))
    log_generation(request_id, generated.idempotency_key, len(generated.cycles), "ok", duration_ms)

    return GenerateBarcodesResponse(
        request_key=generated.idempotency_key,
        barcodes=[
            CycleSchema(
                serial=cycle.serial,
                amount=cycle.amount,
                due_date=cycle.due_date,
                barcodes=list(cycle.barcodes),
            )
            for cycle in generated.cycles
        ],
    )
