"""Command modules for the granges CLI."""

from __future__ import annotations

from granges.commands.build import run_build
from granges.commands.summarize import run_summarize

__all__ = ['run_build', 'run_summarize']
