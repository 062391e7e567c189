"""Pipeline utilities shared between commands."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from rich.progress import Progress, TextColumn, BarColumn, TaskProgressColumn, TimeElapsedColumn, TimeRemainingColumn

from granges.models.ranges import GenomicRangeSet
from granges.processors.delimited import DelimitedProcessor


def load_range_set(input_path: Path, delimiter: str = '\t', header: bool = False, strand_column: int = None,
                   comment_prefix: str = None, test_mode: int = None, shards: int = 1,
                   logger: logging.Logger = None) -> GenomicRangeSet:
    """Read a delimited file and build a GenomicRangeSet from it."""
    if logger:
        logger.info(f"Loading intervals from {input_path}")

    start_time = time.time()
    with DelimitedProcessor(input_path, delimiter=delimiter, header=header, strand_column=strand_column,
                            comment_prefix=comment_prefix, test_mode=test_mode) as proc:
        ranges = proc.to_range_set(n_shards=shards)

    if logger:
        logger.info(f"Built {len(ranges)} intervals ({ranges.seqnames.n_runs} seqname runs, "
                    f"{ranges.strand.n_runs} strand runs) in {time.time() - start_time:.2f} seconds")
    return ranges


def setup_output_directory(output_dir: Path, logger: logging.Logger = None) -> None:
    """Create output directory if it doesn't exist."""
    if not output_dir.exists():
        output_dir.mkdir(parents=True)
        if logger:
            logger.info(f"Created output directory: {output_dir}")


def write_ranges_tsv(output_path: Path, ranges: GenomicRangeSet, logger: logging.Logger = None,
                     chunk_size: int = 100000) -> None:
    """Write the expanded range set as a tab-separated table with a progress bar."""
    if logger:
        logger.info(f"Writing {len(ranges)} intervals to {output_path}")

    table = ranges.to_dataframe()
    with Progress(
        TextColumn("[bold blue]{task.description}"),
        BarColumn(complete_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        TimeRemainingColumn()
    ) as progress, open(output_path, 'w', newline='') as handle:
        task = progress.add_task("[cyan]Writing intervals...", total=len(table))
        for offset in range(0, len(table), chunk_size):
            chunk = table.iloc[offset:offset + chunk_size]
            chunk.to_csv(handle, sep="\t", index=False, header=offset == 0)
            progress.update(task, advance=len(chunk))
            if logger:
                logger.debug(f"Wrote {offset + len(chunk)}/{len(table)} intervals")
