"""Columnar genomic range set with run-length encoded categorical columns."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterator, List, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .categorical import CHROMOSOME_CODEC, STRAND_CODEC, Chromosome, Strand
from .errors import (
    ColumnLengthError,
    CoordinateParseError,
    EmptySequenceError,
    IntervalOrderError,
    WidthMismatchError,
)
from .interval import Interval
from .rle import RleColumn, encode_runs, encode_runs_sharded
from .summary import RangeSetSummary, RunSummary

logger = logging.getLogger(__name__)

RangeLike = Union[Interval, Tuple[int, int]]


class GenomicRange(NamedTuple):
    """One row of a GenomicRangeSet."""
    seqname: Chromosome
    interval: Interval
    strand: Strand


def _check_lengths(**columns: Sequence[Any]) -> int:
    lengths = {name: len(column) for name, column in columns.items()}
    if len(set(lengths.values())) > 1:
        raise ColumnLengthError(lengths)
    n = next(iter(lengths.values()))
    if n == 0:
        raise EmptySequenceError("A genomic range set needs at least one interval")
    return n


def _encode_column(tags: Sequence[Any], n_shards: int) -> RleColumn:
    if n_shards > 1:
        return RleColumn(tuple(encode_runs_sharded(tags, n_shards=n_shards)))
    return RleColumn(tuple(encode_runs(tags)))


def _value_at(column: RleColumn, index: int) -> Any:
    ends = np.cumsum(column.lengths, dtype=np.uint64)
    return column.runs[int(np.searchsorted(ends, index, side='right'))].value


def _readonly_uint64(name: str, values: Sequence[int]) -> np.ndarray:
    """Copy a coordinate column into a read-only uint64 array."""
    source = np.asarray(values)
    if source.ndim != 1:
        raise CoordinateParseError(None, name, f"array of shape {source.shape}")
    if source.dtype.kind == 'i' and (source < 0).any():
        row = int(np.flatnonzero(source < 0)[0])
        raise CoordinateParseError(row, name, int(source[row]))
    try:
        array = np.array(source, dtype=np.uint64)
    except (OverflowError, TypeError, ValueError):
        raise CoordinateParseError(None, name, values)
    array.flags.writeable = False
    return array


@dataclass(frozen=True, eq=False)
class GenomicRangeSet:
    """Immutable set of N genomic intervals stored column-wise.

    ``seqnames`` and ``strand`` are run-length encoded; ``start``, ``end`` and
    ``width`` are parallel uint64 arrays. Every column describes the same N
    intervals in input order.
    """
    seqnames: RleColumn
    strand: RleColumn
    start: np.ndarray
    end: np.ndarray
    width: np.ndarray

    def __post_init__(self):
        for name in ('seqnames', 'strand'):
            if not isinstance(getattr(self, name), RleColumn):
                raise TypeError(f"{name} must be an RleColumn, got {type(getattr(self, name)).__name__}")
        _check_lengths(
            seqnames=self.seqnames,
            strand=self.strand,
            start=self.start,
            end=self.end,
            width=self.width,
        )
        # the set owns private read-only copies of its coordinate columns
        for name in ('start', 'end', 'width'):
            object.__setattr__(self, name, _readonly_uint64(name, getattr(self, name)))

        reversed_rows = np.flatnonzero(self.end < self.start)
        if reversed_rows.size:
            row = int(reversed_rows[0])
            raise IntervalOrderError(row, int(self.start[row]), int(self.end[row]))
        bad_widths = np.flatnonzero(self.width != self.end - self.start)
        if bad_widths.size:
            row = int(bad_widths[0])
            raise WidthMismatchError(row, int(self.width[row]), int(self.end[row] - self.start[row]))

    @classmethod
    def build(cls, chromosomes: Sequence[str], starts: Sequence[str], ends: Sequence[str],
              n_shards: int = 1) -> "GenomicRangeSet":
        """Build an unstranded set from raw string columns.

        Every strand is UNKNOWN. Coordinates are parsed and validated row by
        row; the first bad row aborts construction.

        Raises:
            ColumnLengthError: if the columns differ in length
            EmptySequenceError: if there are no rows
            CoordinateParseError: if a start/end field is not an unsigned integer
            IntervalOrderError: if a row has end < start
        """
        n = _check_lengths(seqnames=chromosomes, start=starts, end=ends)
        intervals = [
            Interval.from_strings(start, end, row)
            for row, (start, end) in enumerate(zip(starts, ends))
        ]
        return cls._assemble(
            CHROMOSOME_CODEC.encode(chromosomes),
            intervals,
            [Strand.UNKNOWN] * n,
            n_shards,
        )

    @classmethod
    def build_with_ranges(cls, chromosomes: Sequence[str], ranges: Sequence[RangeLike],
                          strands: Sequence[str], n_shards: int = 1) -> "GenomicRangeSet":
        """Build a stranded set from (start, end) pairs or Interval objects.

        Raises:
            ColumnLengthError: if the inputs differ in length
            EmptySequenceError: if there are no rows
            CoordinateParseError: if a coordinate is not an unsigned 64-bit integer
            IntervalOrderError: if a row has end < start
        """
        _check_lengths(seqnames=chromosomes, ranges=ranges, strand=strands)
        intervals = []
        for row, item in enumerate(ranges):
            if isinstance(item, Interval):
                intervals.append(Interval(item.start, item.end, row=row))
            else:
                try:
                    start, end = item
                except (TypeError, ValueError):
                    raise CoordinateParseError(row, "range", item)
                intervals.append(Interval(start, end, row=row))
        return cls._assemble(
            CHROMOSOME_CODEC.encode(chromosomes),
            intervals,
            STRAND_CODEC.encode(strands),
            n_shards,
        )

    @classmethod
    def _assemble(cls, seqname_tags: List[Chromosome], intervals: List[Interval],
                  strand_tags: List[Strand], n_shards: int) -> "GenomicRangeSet":
        ranges = cls(
            seqnames=_encode_column(seqname_tags, n_shards),
            strand=_encode_column(strand_tags, n_shards),
            start=[iv.start for iv in intervals],
            end=[iv.end for iv in intervals],
            width=[iv.width for iv in intervals],
        )
        logger.debug(f"Built {ranges!r}")
        return ranges

    def __len__(self) -> int:
        return len(self.start)

    def __repr__(self) -> str:
        return (f"GenomicRangeSet(n={len(self)}, seqnames_runs={self.seqnames.n_runs}, "
                f"strand_runs={self.strand.n_runs})")

    def __iter__(self) -> Iterator[GenomicRange]:
        rows = zip(self.seqnames, self.start.tolist(), self.end.tolist(), self.strand)
        for seqname, start, end, strand in rows:
            yield GenomicRange(seqname, Interval(start, end), strand)

    def __getitem__(self, index: int) -> GenomicRange:
        """Row at ordinal position ``index`` (negative indices count from the end)."""
        n = len(self)
        if index < 0:
            index += n
        if not 0 <= index < n:
            raise IndexError(f"Index {index} out of range for {n} intervals")
        return GenomicRange(
            _value_at(self.seqnames, index),
            Interval(int(self.start[index]), int(self.end[index])),
            _value_at(self.strand, index),
        )

    def intervals(self) -> List[Interval]:
        return [Interval(start, end) for start, end in zip(self.start.tolist(), self.end.tolist())]

    def to_dataframe(self) -> pd.DataFrame:
        """Expand all columns into a table with literal seqname/strand strings."""
        return pd.DataFrame({
            'seqnames': CHROMOSOME_CODEC.decode(self.seqnames),
            'start': self.start,
            'end': self.end,
            'width': self.width,
            'strand': STRAND_CODEC.decode(self.strand),
        })

    def summary(self, source: Optional[str] = None) -> RangeSetSummary:
        per_seqname: Counter = Counter()
        for value, count in self.seqnames.runs:
            per_seqname[CHROMOSOME_CODEC.decode_one(value)] += count

        return RangeSetSummary(
            n_intervals=len(self),
            seqnames_runs=self.seqnames.n_runs,
            strand_runs=self.strand.n_runs,
            total_width=sum(self.width.tolist()),
            min_start=min(self.start.tolist()),
            max_end=max(self.end.tolist()),
            intervals_per_seqname=dict(per_seqname),
            seqnames=RunSummary(
                values=CHROMOSOME_CODEC.decode(self.seqnames.values),
                lengths=self.seqnames.lengths.tolist(),
            ),
            strand=RunSummary(
                values=STRAND_CODEC.decode(self.strand.values),
                lengths=self.strand.lengths.tolist(),
            ),
            source=source,
        )
