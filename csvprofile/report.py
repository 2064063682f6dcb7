"""
Report Module

Structured result of profiling one file, plus rendering helpers used at the
command line and HTTP boundaries.
"""

import json
import math
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
import yaml

from .inference import Kind, TypeAssertion, TypeTally

logger = logging.getLogger(__name__)


@dataclass
class FileReport:
    """Structure and type profile of one delimited file"""
    path: str
    total_row_count: int
    first_row_is_header: bool
    field_counts: Dict[int, int]
    type_tally: TypeTally
    type_details: List[TypeAssertion] = field(default_factory=list)
    malformed_row_count: int = 0
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    elapsed_seconds: float = 0.0

    @property
    def is_regular(self) -> bool:
        """Every well-formed row has the same number of fields and none were malformed"""
        return len(self.field_counts) == 1 and self.malformed_row_count == 0

    @property
    def column_count(self) -> Optional[int]:
        """Most common field count"""
        if not self.field_counts:
            return None
        return max(self.field_counts.items(), key=lambda item: (item[1], -item[0]))[0]

    def to_dict(self, include_details: bool = True) -> Dict[str, Any]:
        """Convert report to a JSON-serializable dictionary"""
        data = {
            'path': self.path,
            'total_row_count': self.total_row_count,
            'first_row_is_header': self.first_row_is_header,
            'is_regular': self.is_regular,
            'malformed_row_count': self.malformed_row_count,
            'field_counts': {str(count): rows for count, rows in sorted(self.field_counts.items())},
            'type_counts': self.type_tally.to_dict(),
            'parse_started_at': self.started_at.isoformat() if self.started_at else None,
            'parse_finished_at': self.finished_at.isoformat() if self.finished_at else None,
            'elapsed_seconds': self.elapsed_seconds,
        }
        if include_details:
            data['type_details'] = [assertion.to_dict() for assertion in self.type_details]
        return data

    def summary_row(self) -> Dict[str, Any]:
        """Flat one-line summary used for multi-file tables"""
        row = {
            'path': self.path,
            'total_row_count': self.total_row_count,
            'first_row_is_header': self.first_row_is_header,
            'is_regular': self.is_regular,
            'column_count': self.column_count,
            'distinct_field_counts': len(self.field_counts),
            'malformed_row_count': self.malformed_row_count,
            'elapsed_seconds': self.elapsed_seconds,
        }
        for kind in Kind:
            row[f'{kind.value}_fields'] = self.type_tally.count(kind)
        return row


def render_report(document: Any, fmt: str = "json", indent: int = 2) -> str:
    """
    Serialize a report dictionary (or list of them)

    Args:
        document: Output of FileReport.to_dict, or a list of them
        fmt: 'json' or 'yaml'
        indent: JSON indentation

    Returns:
        Serialized text
    """
    if fmt == "json":
        return json.dumps(document, indent=indent)
    if fmt == "yaml":
        return yaml.safe_dump(document, default_flow_style=False, sort_keys=False)
    raise ValueError(f"Unknown report format: {fmt}")


def reports_to_frame(reports: Sequence[FileReport]) -> pd.DataFrame:
    """Build a one-row-per-file summary DataFrame"""
    frame = pd.DataFrame([report.summary_row() for report in reports])
    logger.debug(f"Built summary frame with shape {frame.shape}")
    return frame


def json_safe(document: Any) -> Any:
    """Replace non-finite floats with their text form for strict JSON encoders"""
    if isinstance(document, float) and not math.isfinite(document):
        return repr(document)
    if isinstance(document, dict):
        return {key: json_safe(value) for key, value in document.items()}
    if isinstance(document, list):
        return [json_safe(value) for value in document]
    return document
