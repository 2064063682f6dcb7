"""
Type Asserter Module

Classifies a single raw field into one of a closed set of kinds:
- Numeric coercion of text (integer first, then float)
- Closed match over already-typed representations
- Truthiness and shallow structure flags attached per kind
"""

import logging
import math
import re
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

import numpy as np
import pandas as pd

from ..errors import ClassifierError, UnsupportedValueError
from .sniffers import looks_like_array, looks_like_object
from .truthiness import UNRECOGNIZED, truthy_float, truthy_int, truthy_string

logger = logging.getLogger(__name__)


class Kind(str, Enum):
    """Classified scalar category of a field"""
    NIL = "nil"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"
    JSON_OBJECT = "json-object"


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_INT_LITERAL = re.compile(r"[+-]?[0-9]+")
_FLOAT_LITERAL = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)
_INFINITY_WORD = re.compile(r"[+-]?inf(?:inity)?", re.IGNORECASE)
_HEX_FLOAT_LITERAL = re.compile(r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)[pP][+-]?[0-9]+")


@dataclass
class TypeAssertion:
    """Result of classifying one raw field"""
    value: Any
    kind: Kind
    converted_value: Any = None
    is_array: bool = False
    is_json: bool = False
    is_truthy: bool = False
    truthy_value: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary"""
        data = asdict(self)
        data["value"] = _plain(self.value)
        data["kind"] = self.kind.value
        return data


def _coerce_int(text: str) -> Optional[int]:
    if not _INT_LITERAL.fullmatch(text):
        return None
    number = int(text)
    if not INT64_MIN <= number <= INT64_MAX:
        # Out of range integers are left to float coercion
        return None
    return number


def _coerce_float(text: str) -> Optional[float]:
    if _HEX_FLOAT_LITERAL.fullmatch(text):
        try:
            return float.fromhex(text)
        except OverflowError:
            return None
    if not _FLOAT_LITERAL.fullmatch(text):
        return None
    number = float(text)
    if math.isinf(number) and not _INFINITY_WORD.fullmatch(text):
        return None
    return number


# Ordered decision list: the first coercion that succeeds decides the kind
COERCIONS: Tuple[Tuple[Kind, Callable[[str], Optional[Any]]], ...] = (
    (Kind.INT, _coerce_int),
    (Kind.FLOAT, _coerce_float),
)


def coerce_text(text: str) -> Optional[Tuple[Kind, Any]]:
    """
    Try each numeric coercion in priority order

    Args:
        text: Raw field text (not stripped)

    Returns:
        (kind, number) for the first coercion that succeeds, None otherwise
    """
    for kind, coerce in COERCIONS:
        number = coerce(text)
        if number is not None:
            return kind, number
    return None


def kind_of(value: Any) -> Kind:
    """
    Closed match of an already-typed value onto a kind

    Raises:
        UnsupportedValueError: for representations outside the known set
    """
    if isinstance(value, (str, bytes)):
        return Kind.STRING
    if isinstance(value, dict):
        return Kind.JSON_OBJECT
    if isinstance(value, (list, tuple)):
        return Kind.ARRAY
    # bool is checked before int because bool subclasses int
    if isinstance(value, (bool, np.bool_)):
        return Kind.BOOL
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return Kind.NIL
    if isinstance(value, (int, np.integer)):
        return Kind.INT
    if isinstance(value, (float, np.floating)):
        return Kind.FLOAT

    logger.error(f"Cannot classify value of type {type(value).__name__}")
    raise UnsupportedValueError(value)


def classify_value(value: Any) -> TypeAssertion:
    """
    Classify one raw field

    Text is coerced to int, then float; anything that does not coerce is
    classified by its representation. Truthiness is resolved for bool, int,
    float and string kinds, and strings are sniffed for array/object
    envelopes.

    Args:
        value: Raw field (normally text; pre-parsed values are accepted)

    Returns:
        TypeAssertion

    Raises:
        ClassifierError: on an internal numeric inconsistency or an
            unsupported value representation
    """
    text = value.decode("utf-8", errors="replace") if isinstance(value, bytes) else value

    coerced = coerce_text(text) if isinstance(text, str) else None
    if coerced is not None:
        kind, converted = coerced
    else:
        kind = kind_of(text)
        converted = text

    assertion = TypeAssertion(value=value, kind=kind)

    if kind == Kind.NIL:
        assertion.converted_value = None
        assertion.is_truthy, assertion.truthy_value = True, False
    elif kind == Kind.BOOL:
        assertion.converted_value = bool(converted)
        assertion.is_truthy, assertion.truthy_value = True, assertion.converted_value
    elif kind == Kind.INT:
        assertion.converted_value = _normalize(int, converted)
        assertion.is_truthy, assertion.truthy_value = truthy_int(assertion.converted_value)
    elif kind == Kind.FLOAT:
        assertion.converted_value = _normalize(float, converted)
        assertion.is_truthy, assertion.truthy_value = truthy_float(assertion.converted_value)
    elif kind == Kind.STRING:
        assertion.converted_value = converted
        assertion.is_truthy, assertion.truthy_value = truthy_string(converted)
        assertion.is_array = looks_like_array(converted)
        assertion.is_json = looks_like_object(converted)
    elif kind == Kind.ARRAY:
        assertion.converted_value = list(converted)
        assertion.is_truthy, assertion.truthy_value = UNRECOGNIZED
    elif kind == Kind.JSON_OBJECT:
        assertion.converted_value = converted
        assertion.is_truthy, assertion.truthy_value = UNRECOGNIZED

    return assertion


def _normalize(number_type: type, value: Any) -> Any:
    try:
        return number_type(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ClassifierError(
            f"value {value!r} passed numeric coercion but cannot be read back as {number_type.__name__}",
            context={"value": repr(value)},
        ) from e


def _plain(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, np.generic):
        return value.item()
    if value is not None and pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    return value
