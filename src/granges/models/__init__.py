from .categorical import Chromosome, Strand, CategoricalCodec, CHROMOSOME_CODEC, STRAND_CODEC
from .errors import (
    RangeSetError,
    EmptySequenceError,
    ColumnLengthError,
    CoordinateParseError,
    IntervalOrderError,
    RowExtractionError,
    RunLengthOverflowError,
    WidthMismatchError,
)
from .interval import Interval, parse_coordinate
from .rle import Run, RleColumn, encode_runs, decode_runs, merge_runs, encode_runs_sharded
from .ranges import GenomicRange, GenomicRangeSet
from .summary import RangeSetSummary, RunSummary

__all__ = [
    'Chromosome',
    'Strand',
    'CategoricalCodec',
    'CHROMOSOME_CODEC',
    'STRAND_CODEC',
    'RangeSetError',
    'EmptySequenceError',
    'ColumnLengthError',
    'CoordinateParseError',
    'IntervalOrderError',
    'RowExtractionError',
    'RunLengthOverflowError',
    'WidthMismatchError',
    'Interval',
    'parse_coordinate',
    'Run',
    'RleColumn',
    'encode_runs',
    'decode_runs',
    'merge_runs',
    'encode_runs_sharded',
    'GenomicRange',
    'GenomicRangeSet',
    'RangeSetSummary',
    'RunSummary',
]
