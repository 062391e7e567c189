"""Run-length encoding of categorical columns."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from .errors import EmptySequenceError, RunLengthOverflowError

MAX_RUN_LENGTH = 2**32 - 1


class Run(NamedTuple):
    """``value`` repeated ``count`` times at this position of the column."""
    value: Any
    count: int


def encode_runs(values: Sequence[Any]) -> List[Run]:
    """Collapse consecutive equal values into runs.

    Args:
        values: Non-empty sequence of values supporting ``==``

    Returns:
        List of Run in input order; counts sum to ``len(values)``

    Raises:
        EmptySequenceError: if ``values`` is empty
    """
    if len(values) == 0:
        raise EmptySequenceError("Cannot run-length encode an empty sequence")

    runs = []
    current = values[0]
    count = 1
    for value in values[1:]:
        if value == current:
            count += 1
        else:
            runs.append(Run(current, count))
            current = value
            count = 1
    runs.append(Run(current, count))
    return runs


def decode_runs(runs: Iterable[Tuple[Any, int]]) -> List[Any]:
    """Expand runs back into the original sequence."""
    decoded = []
    for i, (value, count) in enumerate(runs):
        if count < 1:
            raise ValueError(f"Run {i} has count {count}; counts must be >= 1")
        decoded.extend([value] * count)
    return decoded


def merge_runs(left: Sequence[Run], right: Sequence[Run]) -> List[Run]:
    """Concatenate two encodings, fusing the boundary runs if their values match."""
    if not left:
        return list(right)
    if not right:
        return list(left)

    merged = list(left)
    head = right[0]
    if merged[-1].value == head.value:
        merged[-1] = Run(head.value, merged[-1].count + head.count)
        merged.extend(right[1:])
    else:
        merged.extend(right)
    return merged


def encode_runs_sharded(values: Sequence[Any], n_shards: int = 4, max_workers: Optional[int] = None) -> List[Run]:
    """Encode contiguous shards in a thread pool and merge their boundaries.

    The result is identical to ``encode_runs(values)``.
    """
    if len(values) == 0:
        raise EmptySequenceError("Cannot run-length encode an empty sequence")
    if n_shards < 1:
        raise ValueError("n_shards must be at least 1")

    shard_size = max(1, -(-len(values) // n_shards))
    shards = [values[i:i + shard_size] for i in range(0, len(values), shard_size)]
    if len(shards) == 1:
        return encode_runs(values)

    with ThreadPoolExecutor(max_workers=max_workers or len(shards)) as executor:
        encoded = list(executor.map(encode_runs, shards))

    runs: List[Run] = []
    for shard_runs in encoded:
        runs = merge_runs(runs, shard_runs)
    return runs


@dataclass(frozen=True)
class RleColumn:
    """Immutable run-length encoded column."""
    runs: Tuple[Run, ...]

    def __post_init__(self):
        for i, run in enumerate(self.runs):
            if run.count < 1:
                raise ValueError(f"Run {i} has count {run.count}; counts must be >= 1")
            if run.count > MAX_RUN_LENGTH:
                raise RunLengthOverflowError(f"Run {i} has count {run.count}; counts are stored as uint32")

    @classmethod
    def encode(cls, values: Sequence[Any]) -> "RleColumn":
        return cls(tuple(encode_runs(values)))

    def __len__(self) -> int:
        return sum(run.count for run in self.runs)

    def __iter__(self) -> Iterator[Any]:
        for value, count in self.runs:
            for _ in range(count):
                yield value

    def __repr__(self) -> str:
        shown = ", ".join(f"{run.value!r}x{run.count}" for run in self.runs[:5])
        if len(self.runs) > 5:
            shown += ", ..."
        return f"RleColumn(n_runs={self.n_runs}, length={len(self)}, runs=[{shown}])"

    @property
    def n_runs(self) -> int:
        return len(self.runs)

    @property
    def values(self) -> List[Any]:
        return [run.value for run in self.runs]

    @property
    def lengths(self) -> np.ndarray:
        return np.array([run.count for run in self.runs], dtype=np.uint32)

    def decode(self) -> List[Any]:
        return decode_runs(self.runs)

    def to_pairs(self) -> List[Tuple[Any, int]]:
        return [tuple(run) for run in self.runs]
