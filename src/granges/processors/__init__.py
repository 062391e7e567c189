from __future__ import annotations

from .delimited import DelimitedProcessor, RawRow

__all__ = [
    'DelimitedProcessor',
    'RawRow',
]
