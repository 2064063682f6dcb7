"""
Delimited Row Reader

Thin adapter over the stdlib csv module that reports field-count mismatches
per row instead of silently accepting ragged input:
- Lenient quote handling and leading-space trimming are configurable
- The first non-empty row fixes the expected number of fields
- Tokenizer failures are raised with the offending line attached
"""

import csv
import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from .errors import FieldCountError, ReaderError

logger = logging.getLogger(__name__)

# Largest value accepted by csv.field_size_limit on every platform
MAX_FIELD_SIZE = 2 ** 31 - 1


@dataclass
class RowRead:
    """One row yielded by the reader"""
    row: List[str]
    line_number: int
    error: Optional[FieldCountError] = None

    @property
    def field_count(self) -> int:
        return len(self.row)


class _LineTracker:
    """Iterator over raw lines that remembers the last one handed out"""

    def __init__(self, lines: Iterable[str]):
        self._lines = iter(lines)
        self.last_line: Optional[str] = None

    def __iter__(self):
        return self

    def __next__(self) -> str:
        self.last_line = next(self._lines)
        return self.last_line


class DelimitedRowReader:
    """
    Iterates rows of delimited text as RowRead items

    Blank lines come back as rows with zero fields. Rows whose field count
    differs from the first non-empty row carry a FieldCountError.
    """

    def __init__(
        self,
        lines: Iterable[str],
        delimiter: str = ",",
        quotechar: str = '"',
        lazy_quotes: bool = True,
        trim_leading_space: bool = True,
        field_size_limit: int = MAX_FIELD_SIZE,
    ):
        """
        Initialize the reader

        Args:
            lines: Text lines (an open file handle or any iterable of str)
            delimiter: Field separator
            quotechar: Quote character
            lazy_quotes: Tolerate stray quotes instead of failing
            trim_leading_space: Drop whitespace following a delimiter
            field_size_limit: Longest field accepted before the tokenizer fails
        """
        # The csv module keeps this limit process-wide
        csv.field_size_limit(field_size_limit)

        self._lines = _LineTracker(lines)
        self._reader = csv.reader(
            self._lines,
            delimiter=delimiter,
            quotechar=quotechar,
            skipinitialspace=trim_leading_space,
            strict=not lazy_quotes,
        )
        self.expected_fields: Optional[int] = None

    def __iter__(self) -> Iterator[RowRead]:
        while True:
            try:
                row = next(self._reader)
            except StopIteration:
                return
            except csv.Error as e:
                line_number = self._reader.line_num
                raw_line = self._lines.last_line
                logger.error(f"Tokenizer failed on line {line_number}: {e}")
                raise ReaderError(
                    f"line {line_number}: {e}",
                    line_number=line_number,
                    raw_line=raw_line.rstrip("\r\n") if raw_line is not None else None,
                ) from e

            yield self._check(row)

    def _check(self, row: List[str]) -> RowRead:
        line_number = self._reader.line_num
        if not row:
            return RowRead(row=row, line_number=line_number)

        if self.expected_fields is None:
            self.expected_fields = len(row)
        elif len(row) != self.expected_fields:
            return RowRead(
                row=row,
                line_number=line_number,
                error=FieldCountError(line_number, self.expected_fields, len(row)),
            )

        return RowRead(row=row, line_number=line_number)
