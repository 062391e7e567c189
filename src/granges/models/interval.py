from __future__ import annotations

import numbers
import re
from dataclasses import dataclass, field
from typing import ClassVar, Optional

from .errors import CoordinateParseError, IntervalOrderError

UINT64_MAX = 2**64 - 1

_COORDINATE_PATTERN = re.compile(r'\+?[0-9]+')


def parse_coordinate(text: str, field_name: str, row: int) -> int:
    """Parse an unsigned 64-bit coordinate from a raw string field.

    Raises:
        CoordinateParseError: if the text is not an optionally '+'-prefixed
            run of ASCII digits, or the value overflows 64 bits
    """
    if not isinstance(text, str) or not _COORDINATE_PATTERN.fullmatch(text):
        raise CoordinateParseError(row, field_name, text)
    value = int(text)
    if value > UINT64_MAX:
        raise CoordinateParseError(row, field_name, text)
    return value


@dataclass(frozen=True)
class Interval:
    """Half-open interval [start, end) with its width derived on construction."""
    start: int
    end: int
    row: Optional[int] = field(default=None, compare=False, repr=False)
    width: int = field(init=False)

    MAX_COORDINATE: ClassVar[int] = UINT64_MAX

    def __post_init__(self):
        for name in ("start", "end"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise CoordinateParseError(self.row, name, value)
            value = int(value)
            object.__setattr__(self, name, value)
            if value < 0 or value > UINT64_MAX:
                raise CoordinateParseError(self.row, name, value)
        if self.end < self.start:
            raise IntervalOrderError(self.row, self.start, self.end)
        object.__setattr__(self, 'width', self.end - self.start)

    @classmethod
    def from_strings(cls, start: str, end: str, row: int) -> "Interval":
        return cls(
            start=parse_coordinate(start, 'start', row),
            end=parse_coordinate(end, 'end', row),
            row=row,
        )

    def to_dict(self) -> dict:
        return {
            'start': self.start,
            'end': self.end,
            'width': self.width,
        }
