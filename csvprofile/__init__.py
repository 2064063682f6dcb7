"""
CSV Structure Profiler Package

Infers the structure and field types of delimited text files without a
declared schema: field-count regularity, header detection and per-field
type / truthiness classification.
"""

__version__ = "1.0.0"
__author__ = "CSV Profiler Team"

from .config import Config, ConfigLoader, ConfigValidator, get_default_config
from .errors import ErrorCode, ProfilerError
from .report import FileReport
from .scanner import FileScanner, StructuralSummary, scan_file

__all__ = [
    "Config",
    "ConfigLoader",
    "ConfigValidator",
    "get_default_config",
    "ErrorCode",
    "ProfilerError",
    "FileReport",
    "FileScanner",
    "StructuralSummary",
    "scan_file",
]
