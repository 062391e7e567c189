from .config import BuildConfig, SummarizeConfig, parse_delimiter
from .logging import setup_file_logging, setup_console_logging
from .common import load_range_set, setup_output_directory, write_ranges_tsv

__all__ = ['BuildConfig', 'SummarizeConfig', 'parse_delimiter', 'setup_file_logging', 'setup_console_logging', 'load_range_set', 'setup_output_directory', 'write_ranges_tsv']
