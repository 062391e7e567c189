#!/usr/bin/env python3
import argparse
import sys
from pathlib import Path

from rich_argparse import RawDescriptionRichHelpFormatter

from granges.commands import run_build, run_summarize
from granges.models.errors import RangeSetError
from granges.utils import BuildConfig, SummarizeConfig, parse_delimiter, setup_console_logging, setup_file_logging


class GrangesArgumentParser(argparse.ArgumentParser):
    """Custom argument parser that shows program-specific help on error."""

    def error(self, message):
        """Upon error, prints help message and error."""
        self.print_help()
        self.exit(2, f'\n\033[31mERROR\033[0m: {message}\n')


def add_input_arguments(subparser):
    subparser.add_argument("--input", "-i", required=True,
                           help="Delimited interval file, optionally gzipped (required)")
    subparser.add_argument("--delimiter", "-d", default="\\t",
                           help="Single-character column delimiter; '\\t', 'tab', 'comma' and 'space' are accepted (default: tab)")
    subparser.add_argument("--header", action="store_true",
                           help="Skip the first data line as a header row")
    subparser.add_argument("--strand-column", type=int, default=None,
                           help="1-based column holding strand literals (+/-). Strand is unknown if omitted")
    subparser.add_argument("--comment",
                           help="Skip lines starting with this prefix (e.g. '#')")
    subparser.add_argument("--debug", action="store_true",
                           help="Enable debug logging")


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = GrangesArgumentParser(
        prog='granges',
        formatter_class=RawDescriptionRichHelpFormatter,
        epilog="""
    - granges build: encode a delimited interval file and write the expanded table plus a JSON summary.
    - granges summarize: print the run-length encoded seqname/strand columns of a delimited interval file.

    View inputs & arguments for each command with granges {command} --help.
        """
    )
    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    # granges build
    build_parser = subparsers.add_parser('build',
        help='Build a run-length encoded range set from a delimited file',
        description='Build a run-length encoded range set from chromosome/start/end columns.',
        formatter_class=parser.formatter_class,
        epilog="""
Examples:
granges build --input peaks.bed --output-dir output/
granges build --input regions.csv --delimiter comma --header --strand-column 4 --output-dir output/
        """
        )
    add_input_arguments(build_parser)
    build_parser.add_argument("--output-dir", "-o", required=True,
                              help="Output directory (required)")
    build_parser.add_argument("--shards", type=int, default=1,
                              help="Number of shards for run-length encoding (default: 1)")
    build_parser.add_argument("--test-mode", type=int, default=None,
                              help="Only read this many data rows (default: disabled)")
    build_parser.add_argument("--logging",
                              help="Log directory (default: output/logs)")
    build_parser.add_argument("--console-output", action="store_true",
                              help="Enable logging to console (default: False)")

    # granges summarize
    summarize_parser = subparsers.add_parser('summarize',
        help='Print run-length columns and a JSON summary',
        description='Print the run-length encoded columns and a JSON summary of a delimited interval file.',
        formatter_class=parser.formatter_class,
        epilog="""
Example:
  granges summarize --input peaks.bed --strand-column 6
        """)
    add_input_arguments(summarize_parser)

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.strand_column is not None and args.strand_column < 4:
        subparsers.choices[args.command].error(
            "ERROR: --strand-column must be 4 or greater (columns 1-3 are chrom, start, end)")
    try:
        args.delimiter = parse_delimiter(args.delimiter)
    except ValueError as e:
        subparsers.choices[args.command].error(f"ERROR: {e}")
    if args.command == 'build' and args.shards < 1:
        build_parser.error("ERROR: --shards must be at least 1")
    if not Path(args.input).exists():
        subparsers.choices[args.command].error(f"ERROR: File does not exist: {args.input}")

    return args


def main(argv=None):
    args = parse_args(argv)

    if args.command == 'build':
        config = BuildConfig.from_args(args)
        logger = setup_file_logging(config.log_dir, 'build', config.debug, config.console_output,
                                    input_path=config.input_path)
        try:
            run_build(config, logger)
        except RangeSetError as e:
            logger.error(str(e))
            print(f'\033[31mERROR\033[0m: {e}', file=sys.stderr)
            sys.exit(1)

    elif args.command == 'summarize':
        config = SummarizeConfig.from_args(args)
        logger = setup_console_logging(config.debug)
        try:
            run_summarize(config, logger)
        except RangeSetError as e:
            print(f'\033[31mERROR\033[0m: {e}', file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
