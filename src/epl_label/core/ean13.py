"""EAN-13 checksum computation and payload normalization.

Digits are weighted 1, 3, 1, 3, ... from the left (index 0 has weight 1);
the check digit brings the weighted sum up to a multiple of ten.
"""

from epl_label.exceptions import ChecksumMismatchError, InvalidLengthError

PAYLOAD_DIGITS = 12
CODE_DIGITS = 13
MODULES = 95

_ASCII_DIGITS = frozenset("0123456789")


def digits_only(code: str) -> str:
    """Drop every character that is not an ASCII digit."""
    return "".join(ch for ch in code if ch in _ASCII_DIGITS)


def compute_check_digit(digits: str) -> int:
    """Compute the EAN-13 check digit of a 12-digit payload.

    Args:
        digits: Exactly 12 ASCII digits

    Returns:
        Check digit in 0..9

    Raises:
        InvalidLengthError: If digits is not 12 ASCII digits
    """
    if len(digits) != PAYLOAD_DIGITS or any(ch not in _ASCII_DIGITS for ch in digits):
        raise InvalidLengthError(digits, len(digits_only(digits)))

    total = 0
    for index, ch in enumerate(digits):
        weight = 1 if index % 2 == 0 else 3
        total += int(ch) * weight
    return (10 - total % 10) % 10


def normalize(code: str) -> str:
    """Validate or complete an EAN-13 code.

    Non-digit characters are dropped first. 12 remaining digits get their
    check digit appended; 13 digits are returned unchanged if the check
    digit matches.

    Args:
        code: Raw barcode string

    Returns:
        Validated 13-digit code

    Raises:
        InvalidLengthError: If neither 12 nor 13 digits remain
        ChecksumMismatchError: If a 13-digit code has a wrong check digit
    """
    digits = digits_only(code)

    if len(digits) == PAYLOAD_DIGITS:
        return digits + str(compute_check_digit(digits))

    if len(digits) == CODE_DIGITS:
        expected = compute_check_digit(digits[:PAYLOAD_DIGITS])
        actual = int(digits[-1])
        if expected != actual:
            raise ChecksumMismatchError(digits, expected, actual)
        return digits

    raise InvalidLengthError(code, len(digits))


def is_valid(code: str) -> bool:
    """Check whether code is a complete 13-digit EAN-13 with a correct check digit."""
    digits = digits_only(code)
    if len(digits) != CODE_DIGITS:
        return False
    try:
        normalize(digits)
    except (ChecksumMismatchError, InvalidLengthError):
        return False
    return True


def coerce_payload(code: str) -> str:
    """Force a raw barcode into a 12-digit printer payload.

    Used when validation failed but printing should go ahead: the first 12
    digits are kept, shorter codes are right-padded with zeros. The printer
    computes the check digit itself.
    """
    digits = digits_only(code)
    if len(digits) >= PAYLOAD_DIGITS:
        return digits[:PAYLOAD_DIGITS]
    return digits.ljust(PAYLOAD_DIGITS, "0")
