"""Conversion between ROC (Republic of China) calendar strings and dates"""

import re
from datetime import date
from barcode_gateway.domain.exceptions import InvalidDateFormatError
from barcode_gateway.utils.date_utils import normalize_date

ROC_YEAR_OFFSET = 1911

# [0-9] rather than \d so full-width and other Unicode digits are rejected
_ROC_DATE_PATTERN = re.compile(r"[0-9]{7}")


def decode(roc_string: str, strict: bool = False) -> date:
    """
    Parse a YYYMMDD ROC date string.

    Lenient mode (default) rolls out-of-range months and days over into the
    adjacent period, e.g. "1131301" is 2025-01-01. Strict mode rejects them.

    Raises:
        InvalidDateFormatError: Not exactly 7 ASCII digits, or an invalid
            month/day while strict, or a rollover to before ROC year 0
    """
    if not isinstance(roc_string, str) or not _ROC_DATE_PATTERN.fullmatch(roc_string):
        raise InvalidDateFormatError(f"Invalid ROC date {roc_string!r}, expected YYYMMDD")

    year = int(roc_string[:3]) + ROC_YEAR_OFFSET
    month = int(roc_string[3:5])
    day = int(roc_string[5:7])

    if not strict:
        decoded = normalize_date(year, month, day)
        # "0000001" rolls back to 1910-12-01, which has no ROC year to encode
        if decoded.year < ROC_YEAR_OFFSET:
            raise InvalidDateFormatError(f"ROC date {roc_string!r} rolls over to before ROC year 0")
        return decoded

    try:
        return date(year, month, day)
    except ValueError as e:
        raise InvalidDateFormatError(f"Invalid ROC date {roc_string!r}: {e}") from e


def encode(value: date) -> str:
    """
    Format a date as compact YYMMDD (last two digits of the ROC year).

    Only defined from 1911 (ROC year 0) on; decode never produces earlier dates.
    """
    roc_year = f"{value.year - ROC_YEAR_OFFSET:03d}"
    return f"{roc_year[-2:]}{value.month:02d}{value.day:02d}"
