"""Alphanumeric-to-digit substitution and positional checksums for payment barcodes"""

from enum import Enum

# Not a 1-indexed alphabet position: S restarts at 2
LETTER_DIGITS = {
    "A": "1", "B": "2", "C": "3", "D": "4", "E": "5", "F": "6", "G": "7",
    "H": "8", "I": "9", "J": "1", "K": "2", "L": "3", "M": "4", "N": "5",
    "O": "6", "P": "7", "Q": "8", "R": "9", "S": "2", "T": "3", "U": "4",
    "V": "5", "W": "6", "X": "7", "Y": "8", "Z": "9",
}

ASCII_DIGITS = frozenset("0123456789")


class Parity(str, Enum):
    """Odd parity covers indices 0, 2, 4, ...; even covers 1, 3, 5, ..."""

    ODD = "odd"
    EVEN = "even"


# (character for remainder 0, character for remainder 10)
_CHECKSUM_ALPHABETS = {
    Parity.ODD: ("A", "B"),
    Parity.EVEN: ("X", "Y"),
}


def encode_alphanumeric(text: str) -> str:
    """
    Rewrite an identification segment as digits.

    Letters (case-insensitive) go through LETTER_DIGITS, ASCII digits pass
    through, everything else is dropped.
    """
    digits = []
    for char in text:
        upper = char.upper()
        if upper in LETTER_DIGITS:
            digits.append(LETTER_DIGITS[upper])
        elif char in ASCII_DIGITS:
            digits.append(char)
    return "".join(digits)


def positional_sum(digits: str, parity: Parity) -> int:
    """Sum the digits at the positions selected by parity, skipping non-digits"""
    start = 0 if parity == Parity.ODD else 1
    return sum(int(char) for char in digits[start::2] if char in ASCII_DIGITS)


def checksum_char(total: int, parity: Parity) -> str:
    """Map a positional sum to its checksum character (mod 11)"""
    remainder = total % 11
    zero_char, ten_char = _CHECKSUM_ALPHABETS[parity]
    if remainder == 0:
        return zero_char
    if remainder == 10:
        return ten_char
    return str(remainder)
