"""
Row Type Profiler

Applies the type asserter to every field of a row and tallies the kinds.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from .asserter import Kind, TypeAssertion, classify_value

logger = logging.getLogger(__name__)

RowTypeProfile = List[TypeAssertion]


@dataclass
class TypeTally:
    """Count of each kind across one row"""
    counts: Dict[Kind, int] = field(default_factory=lambda: {kind: 0 for kind in Kind})

    def add(self, kind: Kind):
        """Count one more field of the given kind"""
        self.counts[kind] += 1

    def count(self, kind: Kind) -> int:
        return self.counts[kind]

    @property
    def total(self) -> int:
        """Number of fields tallied"""
        return sum(self.counts.values())

    def to_dict(self) -> Dict[str, int]:
        return {kind.value: self.counts[kind] for kind in Kind}


def profile_row(row: Sequence[Any]) -> Tuple[TypeTally, RowTypeProfile]:
    """
    Classify each field of a row in order

    Args:
        row: Sequence of raw fields

    Returns:
        Tuple of (tally, per-field assertions)
    """
    tally = TypeTally()
    profile: RowTypeProfile = []

    for field_value in row:
        assertion = classify_value(field_value)
        tally.add(assertion.kind)
        profile.append(assertion)

    logger.debug(f"Profiled row with {len(profile)} fields: {tally.to_dict()}")
    return tally, profile
