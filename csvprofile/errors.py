"""
Error Types Module

Structured exceptions shared by the scanner, the inference engine and the
command line / HTTP boundaries. Every error carries an ErrorCode so callers
can render a single diagnostic without inspecting exception classes.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(str, Enum):
    """Machine readable error categories"""
    FIELD_COUNT = "FIELD_COUNT"
    READER_ERROR = "READER_ERROR"
    CLASSIFIER_ERROR = "CLASSIFIER_ERROR"
    UNSUPPORTED_VALUE = "UNSUPPORTED_VALUE"
    PRECONDITION = "PRECONDITION"
    CONFIG_ERROR = "CONFIG_ERROR"
    IO_ERROR = "IO_ERROR"


class ProfilerError(RuntimeError):
    """Base exception carrying a structured error code"""

    code = ErrorCode.IO_ERROR

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}

    def __str__(self) -> str:
        base = super().__str__()
        return f"[{self.code.value}] {base}" if base else self.code.value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code.value,
            "message": super().__str__(),
            "context": self.context,
        }


class FieldCountError(ProfilerError):
    """A row reported a different number of fields than the first row (recoverable)"""

    code = ErrorCode.FIELD_COUNT

    def __init__(self, line_number: int, expected: int, actual: int):
        super().__init__(
            f"line {line_number}: wrong number of fields (expected {expected}, got {actual})",
            context={"line_number": line_number, "expected": expected, "actual": actual},
        )
        self.line_number = line_number
        self.expected = expected
        self.actual = actual


class ReaderError(ProfilerError):
    """Unrecoverable failure while tokenizing the input"""

    code = ErrorCode.READER_ERROR

    def __init__(self, message: str, *, line_number: Optional[int] = None, row: Optional[List[str]] = None,
                 raw_line: Optional[str] = None):
        super().__init__(
            message,
            context={"line_number": line_number, "row": row, "raw_line": raw_line},
        )
        self.line_number = line_number
        self.row = row
        self.raw_line = raw_line


class ClassifierError(ProfilerError):
    """Internal inconsistency while classifying a value"""

    code = ErrorCode.CLASSIFIER_ERROR


class UnsupportedValueError(ClassifierError):
    """Value representation outside the closed set of kinds"""

    code = ErrorCode.UNSUPPORTED_VALUE

    def __init__(self, value: Any):
        super().__init__(
            f"unsupported value representation ({type(value).__name__}): {value!r}",
            context={"python_type": type(value).__name__},
        )
        self.value = value


class HeaderDetectionError(ProfilerError):
    """Header detection was invoked without any sample rows"""

    code = ErrorCode.PRECONDITION


class ConfigError(ProfilerError):
    """Invalid or unreadable configuration"""

    code = ErrorCode.CONFIG_ERROR
