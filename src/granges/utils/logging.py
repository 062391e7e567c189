"""Logging utilities for granges."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _install_root_handlers(handlers: List[logging.Handler], debug: bool) -> logging.Logger:
    """Replace the root handlers and return the package logger."""
    level = logging.DEBUG if debug else logging.INFO
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)
    return logging.getLogger('granges')


def log_file_path(log_dir: Path, command_name: str, input_path: Optional[Path] = None) -> Path:
    """Timestamped log path, e.g. ``20260101T120000.peaks.build.log``."""
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    if input_path is None:
        return log_dir / f"{timestamp}.{command_name}.log"
    stem = input_path.name.split('.')[0] or 'input'
    return log_dir / f"{timestamp}.{stem}.{command_name}.log"


def setup_file_logging(log_dir: Path, command_name: str, debug: bool = False, console_output: bool = False,
                       input_path: Optional[Path] = None) -> logging.Logger:
    """Log to a timestamped file in ``log_dir`` and optionally mirror to stdout.

    Args:
        log_dir: Directory to write log files to (created if missing)
        command_name: Name of the command being run (e.g., 'build')
        debug: Whether to enable debug logging
        console_output: Whether to also log to console (default: False)
        input_path: Interval file being processed; its stem is added to the log name

    Returns:
        The 'granges' logger
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_file_path(log_dir, command_name, input_path)

    handlers: List[logging.Handler] = [logging.FileHandler(log_file, encoding='utf-8')]
    if console_output:
        handlers.append(logging.StreamHandler(sys.stdout))

    logger = _install_root_handlers(handlers, debug)
    logger.debug(f"Logging to file: {log_file}")
    return logger


def setup_console_logging(debug: bool = False) -> logging.Logger:
    """Log warnings (or everything with ``debug``) to stderr, keeping stdout for results."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    return _install_root_handlers([handler], debug)
