from __future__ import annotations

import gzip
import logging
from pathlib import Path
from typing import Iterator, List, NamedTuple, Optional, TextIO, Tuple, Union

from ..models.errors import CoordinateParseError, IntervalOrderError, RowExtractionError
from ..models.interval import Interval
from ..models.ranges import GenomicRangeSet


class RawRow(NamedTuple):
    """String fields extracted from one data row of a delimited file."""
    row: int  # 0-based data row index
    line: int  # 1-based line number in the file
    chrom: str
    start: str
    end: str
    strand: Optional[str] = None


class DelimitedProcessor:
    """Reads chromosome/start/end columns from a delimited text file.

    Columns are positional: the first three fields are chromosome, start and
    end. An optional 0-based ``strand_column`` supplies strand literals.
    """

    def __init__(self, filepath: Union[str, Path], delimiter: str = '\t', header: bool = False,
                 strand_column: Optional[int] = None, comment_prefix: Optional[str] = None,
                 test_mode: Optional[int] = None):
        if len(delimiter) != 1:
            raise ValueError(f"Delimiter must be a single character, got {delimiter!r}")
        if strand_column is not None and strand_column < 3:
            raise ValueError("Strand column must come after the chromosome, start and end columns")
        self.filepath = Path(filepath)
        self.delimiter = delimiter
        self.header = header
        self.strand_column = strand_column
        self.comment_prefix = comment_prefix
        self.test_mode = test_mode
        self.logger = logging.getLogger(__name__)
        self._handle: Optional[TextIO] = None
        self.line_numbers: List[int] = []

    def __enter__(self):
        if not self.filepath.exists():
            raise FileNotFoundError(f"Input file not found: {self.filepath}")

        if str(self.filepath).endswith(('.gz', '.gzip')):
            self._handle = gzip.open(self.filepath, 'rt', encoding='utf-8')
        else:
            self._handle = open(self.filepath, 'r', encoding='utf-8')
        self.logger.debug(f"Opened delimited file: {self.filepath}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._handle:
            self._handle.close()
            self.logger.debug(f"Closed delimited file: {self.filepath}")
            self._handle = None

    @property
    def stranded(self) -> bool:
        return self.strand_column is not None

    def iter_rows(self) -> Iterator[RawRow]:
        """Yield one RawRow per data line, in file order.

        When ``header`` is set, the first non-blank line is the header even if
        it starts with the comment prefix (e.g. a BED ``#chrom`` line).

        Raises:
            RuntimeError: if the file is not opened
            RowExtractionError: if a line lacks a required field, or the file
                cannot be decoded as (gzipped) UTF-8 text
        """
        if not self._handle:
            raise RuntimeError("File not opened. Use with-statement to open file.")

        header_pending = self.header
        row = 0
        i = 0
        try:
            for i, line in enumerate(self._handle, start=1):  # 1-based line counting for error messages
                line = line.rstrip('\r\n')
                if not line.strip():
                    continue
                if header_pending:
                    header_pending = False
                    self.logger.debug(f"Skipping header line {i}: {line}")
                    continue
                if self.comment_prefix and line.startswith(self.comment_prefix):
                    continue
                if self.test_mode is not None and row >= self.test_mode:
                    break

                fields = line.split(self.delimiter)
                required = 3 if self.strand_column is None else self.strand_column + 1
                if len(fields) < required:
                    raise RowExtractionError(row, i, f"expected at least {required} fields, found {len(fields)}")

                for idx, field in enumerate(fields[:3]):
                    if not field.strip():
                        raise RowExtractionError(row, i, f"mandatory field {idx + 1} is empty")

                strand = fields[self.strand_column].strip() if self.stranded else None
                yield RawRow(row, i, fields[0].strip(), fields[1].strip(), fields[2].strip(), strand)
                row += 1
        except (UnicodeDecodeError, EOFError, OSError) as e:
            # decoding is buffered, so the failure lies at or after the next line
            raise RowExtractionError(row, i + 1, f"unreadable input in {self.filepath.name}: {e}") from e

    def columns(self) -> Tuple[List[str], List[str], List[str], Optional[List[str]]]:
        """Materialize the chromosome, start, end (and strand) columns.

        File line numbers of the rows are kept in ``line_numbers``.
        """
        chroms, starts, ends = [], [], []
        strands = [] if self.stranded else None
        self.line_numbers = []
        for raw in self.iter_rows():
            chroms.append(raw.chrom)
            starts.append(raw.start)
            ends.append(raw.end)
            self.line_numbers.append(raw.line)
            if strands is not None:
                strands.append(raw.strand)
        self.logger.info(f"Read {len(chroms)} rows from {self.filepath}")
        return chroms, starts, ends, strands

    def to_range_set(self, n_shards: int = 1) -> GenomicRangeSet:
        """Build a GenomicRangeSet from the whole file.

        Coordinate errors report both the data row and the file line.
        """
        chroms, starts, ends, strands = self.columns()
        try:
            if strands is None:
                return GenomicRangeSet.build(chroms, starts, ends, n_shards=n_shards)

            ranges = [Interval.from_strings(start, end, row) for row, (start, end) in enumerate(zip(starts, ends))]
            return GenomicRangeSet.build_with_ranges(chroms, ranges, strands, n_shards=n_shards)
        except CoordinateParseError as e:
            raise CoordinateParseError(e.row, e.field, e.value, line=self._line_of(e.row)) from None
        except IntervalOrderError as e:
            raise IntervalOrderError(e.row, e.start, e.end, line=self._line_of(e.row)) from None

    def _line_of(self, row: Optional[int]) -> Optional[int]:
        if row is None or not 0 <= row < len(self.line_numbers):
            return None
        return self.line_numbers[row]
