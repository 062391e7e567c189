from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

_DELIMITER_ALIASES = {
    '\\t': '\t',
    'tab': '\t',
    'comma': ',',
    'space': ' ',
}


def parse_delimiter(value: str) -> str:
    """Resolve CLI delimiter spellings (e.g. '\\t', 'tab') to one character."""
    delimiter = _DELIMITER_ALIASES.get(value, value)
    if len(delimiter) != 1:
        raise ValueError(f"Delimiter must be a single character, got {value!r}")
    return delimiter


@dataclass
class BuildConfig:
    """Configuration for the build command."""
    # Required arguments
    input_path: Path
    output_dir: Path

    # Optional arguments
    delimiter: str = '\t'
    header: bool = False
    strand_column: Optional[int] = None  # 1-based on the command line, stored 0-based
    comment_prefix: Optional[str] = None
    shards: int = 1
    log_dir: Optional[Path] = None  # output_dir/logs if not specified
    debug: bool = False
    console_output: bool = False
    test_mode: Optional[int] = None

    def __post_init__(self):
        if self.shards < 1:
            raise ValueError("Number of shards must be at least 1")

    @property
    def output_stem(self) -> str:
        name = self.input_path.name
        for suffix in ('.gz', '.gzip'):
            if name.endswith(suffix):
                name = name[: -len(suffix)]
        return Path(name).stem

    @property
    def tsv_path(self) -> Path:
        return self.output_dir / f"{self.output_stem}.ranges.tsv"

    @property
    def summary_path(self) -> Path:
        return self.output_dir / f"{self.output_stem}.summary.json"

    @classmethod
    def from_args(cls, args):
        """Create BuildConfig instance from parsed command line arguments."""
        strand_column = getattr(args, 'strand_column', None)
        return cls(
            input_path=Path(args.input),
            output_dir=Path(args.output_dir),
            delimiter=parse_delimiter(args.delimiter),
            header=args.header,
            strand_column=strand_column - 1 if strand_column is not None else None,
            comment_prefix=getattr(args, 'comment', None),
            shards=getattr(args, 'shards', 1),
            log_dir=Path(args.logging) if args.logging else Path(args.output_dir) / 'logs',
            debug=args.debug,
            console_output=getattr(args, 'console_output', False),
            test_mode=getattr(args, 'test_mode', None),
        )


@dataclass
class SummarizeConfig:
    """Configuration for the summarize command."""
    input_path: Path
    delimiter: str = '\t'
    header: bool = False
    strand_column: Optional[int] = None
    comment_prefix: Optional[str] = None
    debug: bool = False

    @classmethod
    def from_args(cls, args):
        """Create SummarizeConfig instance from parsed command line arguments."""
        strand_column = getattr(args, 'strand_column', None)
        return cls(
            input_path=Path(args.input),
            delimiter=parse_delimiter(args.delimiter),
            header=args.header,
            strand_column=strand_column - 1 if strand_column is not None else None,
            comment_prefix=getattr(args, 'comment', None),
            debug=getattr(args, 'debug', False),
        )
