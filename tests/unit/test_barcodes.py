"""Unit tests for barcode cycle and sequence generation"""

import pytest
from dataclasses import replace
from datetime import date, timedelta
from barcode_gateway.domain.barcodes import MAX_AMOUNT, build_cycle_barcodes, generate_barcode_sequence
from barcode_gateway.domain.exceptions import ErrorKind, InvalidAmountError
from barcode_gateway.domain.models import CycleType, GenerationRequest


@pytest.fixture
def base_request() -> GenerationRequest:
    """Hand-computed reference request"""
    return GenerationRequest(
        segment_a="AA",
        segment_b="11",
        due_date_roc="1130101",
        cycle_type=CycleType.MONTH_DAY,
        cycle_count=2,
        initial_amount=20,
        increment_amount=10,
        idempotency_key="req-1",
    )


def test_reference_scenario(base_request: GenerationRequest):
    """Test AA/11 from 2024-01-01, daily, 20 then 30"""
    result = generate_barcode_sequence(base_request)

    assert result.is_ok
    cycles = result.value.cycles
    assert [c.barcodes for c in cycles] == [
        ("AA", "11", "010126000000020"),
        ("AA", "11", "010228000000030"),
    ]
    assert cycles[1].due_date == date(2024, 1, 2)
    assert result.value.idempotency_key == "req-1"


def test_build_cycle_year_month_slice():
    """Test YEAR_MONTH uses YYMM of the compact ROC date"""
    _, _, segment_c = build_cycle_barcodes("AA", "11", "11", "11", 20, date(2024, 1, 1), CycleType.YEAR_MONTH)
    # tail "1301000000020": odd 1+0+0+0+0+0+0=1, even 3+1+0+0+0+2=6; plus 1 + 1 from each segment
    assert segment_c == "130138000000020"
    assert len(segment_c) == 15


def test_build_cycle_keeps_raw_segments():
    """Test segments A and B come back verbatim, not digit-encoded"""
    a, b, _ = build_cycle_barcodes("ab-1", "Z9", "121", "99", 1, date(2024, 5, 5), CycleType.MONTH_DAY)
    assert (a, b) == ("ab-1", "Z9")


def test_build_cycle_rejects_amount_overflow():
    with pytest.raises(InvalidAmountError):
        build_cycle_barcodes("A", "B", "1", "2", MAX_AMOUNT + 1, date(2024, 1, 1), CycleType.MONTH_DAY)


def test_build_cycle_max_amount_fits():
    _, _, segment_c = build_cycle_barcodes("A", "B", "1", "2", MAX_AMOUNT, date(2024, 1, 1), CycleType.MONTH_DAY)
    assert segment_c.endswith("999999999")


@pytest.mark.parametrize("count", [1, 5, 37])
def test_serials_and_amounts(base_request: GenerationRequest, count: int):
    """Test N cycles, serials 1..N, amount initial + i * increment"""
    result = generate_barcode_sequence(replace(base_request, cycle_count=count, increment_amount=7))

    cycles = result.value.cycles
    assert len(cycles) == count
    assert [c.serial for c in cycles] == list(range(1, count + 1))
    assert [c.amount for c in cycles] == [20 + i * 7 for i in range(count)]


def test_month_day_rolls_over_month_and_year(base_request: GenerationRequest):
    """Test daily cycles cross month and year boundaries one day at a time"""
    request = replace(base_request, due_date_roc="1121230", cycle_count=4)
    cycles = generate_barcode_sequence(request).value.cycles

    dates = [c.due_date for c in cycles]
    assert dates == [date(2023, 12, 30), date(2023, 12, 31), date(2024, 1, 1), date(2024, 1, 2)]
    assert all(b - a == timedelta(days=1) for a, b in zip(dates, dates[1:]))
    assert [c.barcodes[2][:4] for c in cycles] == ["1230", "1231", "0101", "0102"]


def test_year_month_advances_one_month(base_request: GenerationRequest):
    """Test monthly cycles keep month order even from a month-end start"""
    request = replace(base_request, due_date_roc="1121031", cycle_type=CycleType.YEAR_MONTH, cycle_count=5)
    cycles = generate_barcode_sequence(request).value.cycles

    months = [(c.due_date.year, c.due_date.month) for c in cycles]
    assert months == [(2023, 10), (2023, 11), (2023, 12), (2024, 1), (2024, 2)]
    assert [c.barcodes[2][:4] for c in cycles] == ["1210", "1211", "1212", "1301", "1302"]
    assert cycles[-1].due_date == date(2024, 2, 29)


def test_checksum_is_deterministic(base_request: GenerationRequest):
    first = generate_barcode_sequence(base_request).value
    second = generate_barcode_sequence(base_request).value
    assert first == second


def test_zero_increment_repeats_amount(base_request: GenerationRequest):
    cycles = generate_barcode_sequence(replace(base_request, increment_amount=0, cycle_count=3)).value.cycles
    assert {c.amount for c in cycles} == {20}


@pytest.mark.parametrize(
    "changes, kind",
    [
        ({"initial_amount": 0}, ErrorKind.INVALID_AMOUNT),
        ({"initial_amount": -5}, ErrorKind.INVALID_AMOUNT),
        ({"initial_amount": MAX_AMOUNT + 1}, ErrorKind.INVALID_AMOUNT),
        ({"initial_amount": 10, "increment_amount": -10}, ErrorKind.INVALID_AMOUNT),
        ({"initial_amount": MAX_AMOUNT, "increment_amount": 1}, ErrorKind.INVALID_AMOUNT),
        ({"cycle_count": 0}, ErrorKind.INVALID_REQUEST),
        ({"cycle_count": 121}, ErrorKind.INVALID_REQUEST),
        ({"segment_a": ""}, ErrorKind.INVALID_REQUEST),
        ({"segment_b": ""}, ErrorKind.INVALID_REQUEST),
        ({"idempotency_key": ""}, ErrorKind.INVALID_REQUEST),
        ({"due_date_roc": "2024-01-01"}, ErrorKind.INVALID_DATE_FORMAT),
    ],
)
def test_invalid_requests_return_err(base_request: GenerationRequest, changes: dict, kind: ErrorKind):
    """Test every rejection is reported as Err before any cycle is built"""
    result = generate_barcode_sequence(replace(base_request, **changes))

    assert not result.is_ok
    assert result.kind == kind
    assert result.message


def test_cycle_cap_is_configurable(base_request: GenerationRequest):
    assert not generate_barcode_sequence(replace(base_request, cycle_count=4), max_cycles=3).is_ok
    assert generate_barcode_sequence(replace(base_request, cycle_count=3), max_cycles=3).is_ok


def test_strict_dates(base_request: GenerationRequest):
    """Test strict mode turns a rolled-over due date into an error"""
    request = replace(base_request, due_date_roc="1130230")

    assert generate_barcode_sequence(request).value.cycles[0].due_date == date(2024, 3, 1)
    result = generate_barcode_sequence(request, strict_dates=True)
    assert result.kind == ErrorKind.INVALID_DATE_FORMAT


def test_err_unwrap_raises_matching_exception(base_request: GenerationRequest):
    result = generate_barcode_sequence(replace(base_request, initial_amount=0))
    with pytest.raises(InvalidAmountError):
        result.unwrap()
