from __future__ import annotations

import logging
import sys
from typing import TextIO

from granges.utils.config import SummarizeConfig
from granges.utils.common import load_range_set


def _format_runs(label: str, pairs) -> str:
    runs = " ".join(f"{value}:{count}" for value, count in pairs)
    return f"{label}\t{runs}\n"


def run_summarize(config: SummarizeConfig, logger: logging.Logger, output: TextIO = None) -> None:
    """Print the run-length columns and the JSON summary of a delimited file."""
    if not config.input_path.exists():
        raise FileNotFoundError(f"Input file not found: {config.input_path}")

    output = output or sys.stdout
    ranges = load_range_set(
        config.input_path,
        delimiter=config.delimiter,
        header=config.header,
        strand_column=config.strand_column,
        comment_prefix=config.comment_prefix,
        logger=logger,
    )
    summary = ranges.summary(source=str(config.input_path))

    output.write(_format_runs("seqnames", summary.run_pairs("seqnames")))
    output.write(_format_runs("strand", summary.run_pairs("strand")))
    output.write(summary.model_dump_json(indent=2) + "\n")
