"""
Truthiness Classifiers

Map typed scalar values onto a secondary boolean interpretation. Each
classifier returns a (recognized, value) pair; when recognized is False the
value carries no meaning and is always False.
"""

from typing import Tuple

# Strings this long or longer are never literal booleans
MAX_LITERAL_LENGTH = 10

TRUTHY_LITERALS = {
    "true": True,
    "t": True,
    "false": False,
    "f": False,
    "": False,
    "0": False,
    "-0": False,
    "1": True,
    "null": False,
    "nil": False,
    "none": False,
    "undefined": False,
    "nan": False,
}

UNRECOGNIZED = (False, False)


def truthy_int(value: int) -> Tuple[bool, bool]:
    """Recognize 0 and 1"""
    if value == 0:
        return True, False
    if value == 1:
        return True, True
    return UNRECOGNIZED


def truthy_float(value: float) -> Tuple[bool, bool]:
    """Recognize 0.0 and 1.0 (exact equality)"""
    if value == 0.0:
        return True, False
    if value == 1.0:
        return True, True
    return UNRECOGNIZED


def truthy_string(value: str) -> Tuple[bool, bool]:
    """
    Recognize common boolean-ish literals, case-insensitively

    Args:
        value: Raw text

    Returns:
        Tuple of (recognized, truthy_value)
    """
    folded = value.casefold()
    if len(folded) >= MAX_LITERAL_LENGTH:
        return UNRECOGNIZED

    if folded in TRUTHY_LITERALS:
        return True, TRUTHY_LITERALS[folded]

    return UNRECOGNIZED
