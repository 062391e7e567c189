"""Closed categorical domains for chromosome names and strands."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Generic, Iterable, List, Mapping, Type, TypeVar

E = TypeVar("E", bound=Enum)


class Chromosome(Enum):
    """Human chromosome names; anything unrecognized is UNKNOWN."""
    CHR1 = "chr1"
    CHR2 = "chr2"
    CHR3 = "chr3"
    CHR4 = "chr4"
    CHR5 = "chr5"
    CHR6 = "chr6"
    CHR7 = "chr7"
    CHR8 = "chr8"
    CHR9 = "chr9"
    CHR10 = "chr10"
    CHR11 = "chr11"
    CHR12 = "chr12"
    CHR13 = "chr13"
    CHR14 = "chr14"
    CHR15 = "chr15"
    CHR16 = "chr16"
    CHR17 = "chr17"
    CHR18 = "chr18"
    CHR19 = "chr19"
    CHR20 = "chr20"
    CHR21 = "chr21"
    CHR22 = "chr22"
    CHRX = "chrX"
    CHRY = "chrY"
    UNKNOWN = "unknown"

    def __repr__(self) -> str:
        return f"Chromosome.{self.name}"


class Strand(Enum):
    """Strand of an interval; unstranded or unrecognized input is UNKNOWN."""
    FORWARD = "+"
    REVERSE = "-"
    UNKNOWN = "*"

    def __repr__(self) -> str:
        return f"Strand.{self.name}"


class CategoricalCodec(Generic[E]):
    """Table-driven mapping between literal strings and a closed enumeration.

    Lookups are exact and case-sensitive. Strings missing from the table map
    to ``unknown``, so encoding never fails.
    """

    def __init__(self, enum_type: Type[E], table: Mapping[str, E], unknown: E):
        if not isinstance(unknown, enum_type):
            raise ValueError(f"{unknown!r} is not a member of {enum_type.__name__}")
        self.enum_type = enum_type
        self.unknown = unknown
        self._table: Dict[str, E] = dict(table)
        self._reverse: Dict[E, str] = {tag: literal for literal, tag in self._table.items()}

    def __repr__(self) -> str:
        return f"CategoricalCodec({self.enum_type.__name__}, {len(self._table)} literals)"

    @property
    def literals(self) -> List[str]:
        return list(self._table)

    def encode_one(self, raw: str) -> E:
        return self._table.get(raw, self.unknown)

    def encode(self, raw: Iterable[str]) -> List[E]:
        """Map each string to its tag, preserving order and length."""
        return [self._table.get(value, self.unknown) for value in raw]

    def decode_one(self, tag: E) -> str:
        if tag not in self._reverse and tag is not self.unknown:
            raise ValueError(f"{tag!r} is not a {self.enum_type.__name__} tag")
        return self._reverse.get(tag, tag.value)

    def decode(self, tags: Iterable[E]) -> List[str]:
        """Map tags back to their literal strings (UNKNOWN to its placeholder)."""
        return [self.decode_one(tag) for tag in tags]


CHROMOSOME_CODEC: CategoricalCodec[Chromosome] = CategoricalCodec(
    Chromosome,
    {tag.value: tag for tag in Chromosome if tag is not Chromosome.UNKNOWN},
    Chromosome.UNKNOWN,
)

STRAND_CODEC: CategoricalCodec[Strand] = CategoricalCodec(
    Strand,
    {"+": Strand.FORWARD, "-": Strand.REVERSE},
    Strand.UNKNOWN,
)
