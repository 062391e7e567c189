from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Tuple


class RunSummary(BaseModel):
    """Run-length view of one categorical column, as literal strings."""
    values: List[str]
    lengths: List[int]

    model_config = ConfigDict(frozen=True)


class RangeSetSummary(BaseModel):
    """Metadata about an entire genomic range set."""
    n_intervals: int
    seqnames_runs: int
    strand_runs: int
    total_width: int
    min_start: int
    max_end: int
    intervals_per_seqname: Dict[str, int] = Field(default_factory=dict)
    seqnames: Optional[RunSummary] = None
    strand: Optional[RunSummary] = None
    source: Optional[str] = None  # input path when loaded from a file

    model_config = ConfigDict(frozen=True)

    def run_pairs(self, column: str) -> List[Tuple[str, int]]:
        runs = getattr(self, column)
        if runs is None:
            return []
        return list(zip(runs.values, runs.lengths))
