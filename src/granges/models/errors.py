"""Exceptions raised while assembling a genomic range set."""

from __future__ import annotations

from typing import Optional


def _location(row: Optional[int], line: Optional[int] = None) -> str:
    if line is not None:
        return f"Line {line} (row {row}): "
    if row is not None:
        return f"Row {row}: "
    return ""


class RangeSetError(ValueError):
    """Base class for fatal data-integrity errors during construction."""


class EmptySequenceError(RangeSetError):
    """Raised when a run-length column would be built from no values."""


class RunLengthOverflowError(RangeSetError):
    """Raised when a single run is longer than a uint32 count can hold."""


class ColumnLengthError(RangeSetError):
    """Raised when parallel input columns do not describe the same intervals."""

    def __init__(self, lengths: dict):
        self.lengths = dict(lengths)
        described = ", ".join(f"{name}={n}" for name, n in self.lengths.items())
        super().__init__(f"Input columns differ in length: {described}")


class CoordinateParseError(RangeSetError):
    """Raised when a start/end field is not an unsigned 64-bit integer."""

    def __init__(self, row: Optional[int], field: str, value: object, line: Optional[int] = None):
        self.row = row
        self.field = field
        self.value = value
        self.line = line
        super().__init__(f"{_location(row, line)}invalid {field} coordinate {value!r}")


class IntervalOrderError(RangeSetError):
    """Raised when an interval ends before it starts."""

    def __init__(self, row: Optional[int], start: int, end: int, line: Optional[int] = None):
        self.row = row
        self.start = start
        self.end = end
        self.line = line
        super().__init__(f"{_location(row, line)}end ({end}) is less than start ({start})")


class WidthMismatchError(RangeSetError):
    """Raised when a supplied width column disagrees with end - start."""

    def __init__(self, row: int, width: int, expected: int):
        self.row = row
        self.width = width
        self.expected = expected
        super().__init__(f"{_location(row)}width {width} does not equal end - start ({expected})")


class RowExtractionError(RangeSetError):
    """Raised when a delimited row cannot supply the required fields."""

    def __init__(self, row: int, line: int, reason: str):
        self.row = row
        self.line = line
        self.reason = reason
        super().__init__(f"{_location(row, line)}{reason}")
