"""Command module for building a range set from a delimited file."""

from __future__ import annotations

import logging
import time

from granges.utils.config import BuildConfig
from granges.utils.common import load_range_set, setup_output_directory, write_ranges_tsv


def run_build(config: BuildConfig, logger: logging.Logger) -> None:
    """Build a GenomicRangeSet and write the expanded table plus a JSON summary."""
    if not config.input_path.exists():
        raise FileNotFoundError(f"Input file not found: {config.input_path}")

    setup_output_directory(config.output_dir, logger)
    start_time = time.time()

    ranges = load_range_set(
        config.input_path,
        delimiter=config.delimiter,
        header=config.header,
        strand_column=config.strand_column,
        comment_prefix=config.comment_prefix,
        test_mode=config.test_mode,
        shards=config.shards,
        logger=logger,
    )

    write_ranges_tsv(config.tsv_path, ranges, logger)

    summary = ranges.summary(source=str(config.input_path))
    logger.info(f"Writing summary to {config.summary_path}")
    config.summary_path.write_text(summary.model_dump_json(indent=2), encoding="utf-8")

    logger.info(f"Build completed in {time.time() - start_time:.2f} seconds")
    print(f"Wrote {len(ranges)} intervals to {config.tsv_path}")
