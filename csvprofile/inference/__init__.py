"""
Type Inference Module

Provides field classification, truthiness heuristics, shallow array/object
sniffing, row profiling and header detection.
"""

from .asserter import (
    Kind,
    TypeAssertion,
    classify_value,
    coerce_text,
    kind_of,
)
from .header import is_header_row, kind_profile
from .profiler import RowTypeProfile, TypeTally, profile_row
from .sniffers import looks_like_array, looks_like_object
from .truthiness import truthy_float, truthy_int, truthy_string

__all__ = [
    "Kind",
    "TypeAssertion",
    "classify_value",
    "coerce_text",
    "kind_of",
    "is_header_row",
    "kind_profile",
    "RowTypeProfile",
    "TypeTally",
    "profile_row",
    "looks_like_array",
    "looks_like_object",
    "truthy_float",
    "truthy_int",
    "truthy_string",
]
