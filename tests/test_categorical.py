import pytest

from granges.models.categorical import (
    CHROMOSOME_CODEC,
    STRAND_CODEC,
    CategoricalCodec,
    Chromosome,
    Strand,
)


def test_every_recognized_chromosome_literal():
    literals = [f"chr{i}" for i in range(1, 23)] + ["chrX", "chrY"]
    tags = CHROMOSOME_CODEC.encode(literals)
    assert len(tags) == 24
    assert Chromosome.UNKNOWN not in tags
    assert len(set(tags)) == 24
    assert tags[0] is Chromosome.CHR1
    assert tags[21] is Chromosome.CHR22
    assert tags[-2:] == [Chromosome.CHRX, Chromosome.CHRY]


def test_unrecognized_chromosomes_map_to_unknown():
    raw = ["chr1", "bogus", "+", "??", "", "Chr1", "chrx", "1", "chrUn_gl000220", "chr23", "unknown"]
    tags = CHROMOSOME_CODEC.encode(raw)
    assert tags == [Chromosome.CHR1] + [Chromosome.UNKNOWN] * 10


def test_strand_literals():
    assert STRAND_CODEC.encode(["+", "-", ".", "*", "z", "", "++"]) == [
        Strand.FORWARD,
        Strand.REVERSE,
        Strand.UNKNOWN,
        Strand.UNKNOWN,
        Strand.UNKNOWN,
        Strand.UNKNOWN,
        Strand.UNKNOWN,
    ]


def test_encode_preserves_order_and_length():
    raw = ["chrY", "chr2", "chrY", "nope", "chr2"]
    tags = CHROMOSOME_CODEC.encode(raw)
    assert len(tags) == len(raw)
    assert tags == [Chromosome.CHRY, Chromosome.CHR2, Chromosome.CHRY, Chromosome.UNKNOWN, Chromosome.CHR2]


def test_encode_accepts_any_iterable():
    assert CHROMOSOME_CODEC.encode(iter(["chr5"])) == [Chromosome.CHR5]
    assert CHROMOSOME_CODEC.encode([]) == []


def test_decode_inverts_encode_on_recognized_literals():
    literals = CHROMOSOME_CODEC.literals
    assert CHROMOSOME_CODEC.decode(CHROMOSOME_CODEC.encode(literals)) == literals
    assert STRAND_CODEC.decode(STRAND_CODEC.encode(["+", "-"])) == ["+", "-"]


def test_decode_unknown_placeholders():
    assert CHROMOSOME_CODEC.decode([Chromosome.UNKNOWN]) == ["unknown"]
    assert STRAND_CODEC.decode([Strand.UNKNOWN]) == ["*"]


def test_decode_rejects_foreign_tags():
    with pytest.raises(ValueError):
        CHROMOSOME_CODEC.decode([Strand.FORWARD])


def test_custom_codec_over_another_enum():
    codec = CategoricalCodec(Strand, {"fwd": Strand.FORWARD, "rev": Strand.REVERSE}, Strand.UNKNOWN)
    assert codec.encode(["fwd", "rev", "+"]) == [Strand.FORWARD, Strand.REVERSE, Strand.UNKNOWN]
    assert codec.encode_one("rev") is Strand.REVERSE


def test_codec_unknown_must_belong_to_enum():
    with pytest.raises(ValueError):
        CategoricalCodec(Strand, {"+": Strand.FORWARD}, Chromosome.UNKNOWN)
