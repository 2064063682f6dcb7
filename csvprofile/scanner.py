"""
File Structure Scanner

Streams rows from the delimited reader, tallies field counts, keeps a small
sample window, and runs header detection and row profiling once the input is
exhausted. Scanning never prints; fatal conditions propagate as exceptions.
"""

import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .config import ScanConfig
from .errors import ProfilerError, ReaderError
from .inference import RowTypeProfile, TypeTally, is_header_row, profile_row
from .reader import DelimitedRowReader, RowRead
from .report import FileReport

logger = logging.getLogger(__name__)


@dataclass
class StructuralSummary:
    """Accumulated structure of a row stream"""
    total_rows: int = 0
    field_counts: Counter = field(default_factory=Counter)
    malformed_rows: int = 0
    sample_rows: List[List[str]] = field(default_factory=list)
    representative_row: Optional[List[str]] = None
    first_row_is_header: bool = False
    type_tally: TypeTally = field(default_factory=TypeTally)
    type_details: RowTypeProfile = field(default_factory=list)


class FileScanner:
    """
    Profiles the structure of delimited text

    Consumes reader output strictly in order; the accumulators live on the
    summary being built and are only touched by the scan loop.
    """

    def __init__(self, config: Optional[ScanConfig] = None):
        """
        Initialize the scanner

        Args:
            config: Scan configuration (defaults to ScanConfig())
        """
        self.config = config or ScanConfig()

    def make_reader(self, lines: Iterable[str]) -> DelimitedRowReader:
        """Reader configured from the scan settings"""
        return DelimitedRowReader(
            lines,
            delimiter=self.config.delimiter,
            quotechar=self.config.quotechar,
            lazy_quotes=self.config.lazy_quotes,
            trim_leading_space=self.config.trim_leading_space,
            field_size_limit=self.config.field_size_limit,
        )

    def scan_rows(self, reads: Iterable[RowRead]) -> StructuralSummary:
        """
        Scan already-tokenized rows

        Args:
            reads: RowRead items in file order

        Returns:
            StructuralSummary with header flag and row profile filled in

        Raises:
            ReaderError: propagated from the reader on tokenizer failures
            HeaderDetectionError: if the stream holds no well-formed rows
        """
        summary = StructuralSummary()
        well_formed = 0

        for read in reads:
            if read.field_count == 0:
                continue

            summary.total_rows += 1

            if read.error is not None:
                summary.malformed_rows += 1
                logger.debug(f"Skipping malformed row: {read.error}")
                continue

            summary.field_counts[read.field_count] += 1

            if well_formed < self.config.header_window:
                summary.sample_rows.append(read.row)
            if well_formed <= self.config.sample_row_index:
                summary.representative_row = read.row

            well_formed += 1

        summary.first_row_is_header = is_header_row(summary.sample_rows, self.config.header_window)
        summary.type_tally, summary.type_details = profile_row(summary.representative_row or [])

        logger.info(
            f"Scanned {summary.total_rows} rows "
            f"({summary.malformed_rows} malformed, field counts {dict(summary.field_counts)})"
        )
        return summary

    def scan_lines(self, lines: Iterable[str]) -> StructuralSummary:
        """Tokenize and scan raw text lines"""
        return self.scan_rows(self.make_reader(lines))

    def scan_file(self, filepath: Union[str, Path]) -> FileReport:
        """
        Scan a delimited file and build its report

        Args:
            filepath: Path to the file

        Returns:
            FileReport

        Raises:
            ProfilerError: if the file cannot be opened or decoded
            ReaderError: on tokenizer failures
            HeaderDetectionError: if the file holds no well-formed rows
        """
        filepath = Path(filepath)
        logger.info(f"Scanning {filepath}")

        started_at = datetime.now()
        start = time.perf_counter()

        try:
            with open(filepath, 'r', encoding=self.config.encoding, newline='') as handle:
                summary = self.scan_lines(handle)
        except UnicodeDecodeError as e:
            raise ReaderError(f"{filepath} is not valid {self.config.encoding}: {e}") from e
        except OSError as e:
            logger.error(f"Failed to open {filepath}: {e}")
            raise ProfilerError(f"Failed to open {filepath}: {e}") from e

        elapsed = time.perf_counter() - start

        return build_report(
            summary,
            path=str(filepath),
            started_at=started_at,
            finished_at=datetime.now(),
            elapsed_seconds=elapsed,
        )


def build_report(
    summary: StructuralSummary,
    path: str,
    started_at: Optional[datetime] = None,
    finished_at: Optional[datetime] = None,
    elapsed_seconds: float = 0.0,
) -> FileReport:
    """Combine a scan summary with timing into a FileReport"""
    return FileReport(
        path=path,
        total_row_count=summary.total_rows,
        first_row_is_header=summary.first_row_is_header,
        field_counts=dict(summary.field_counts),
        type_tally=summary.type_tally,
        type_details=summary.type_details,
        malformed_row_count=summary.malformed_rows,
        started_at=started_at,
        finished_at=finished_at,
        elapsed_seconds=elapsed_seconds,
    )


def scan_file(filepath: Union[str, Path], config: Optional[ScanConfig] = None) -> FileReport:
    """Quick file scan"""
    return FileScanner(config).scan_file(filepath)
