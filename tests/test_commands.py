import io
import json
import logging
from types import SimpleNamespace

import pandas as pd
import pytest

from granges.cli import main
from granges.commands import run_build, run_summarize
from granges.models.errors import IntervalOrderError
from granges.utils import BuildConfig, SummarizeConfig, parse_delimiter


@pytest.fixture
def null_logger():
    logger = logging.getLogger("test_commands")
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())
    return logger


@pytest.fixture(autouse=True)
def close_file_handlers():
    yield
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        if isinstance(handler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()


@pytest.fixture
def stranded_tsv(tmp_path):
    path = tmp_path / "peaks.tsv"
    path.write_text(
        "chrom\tstart\tend\tstrand\n"
        "chr1\t0\t10\t-\n"
        "chr2\t4\t11\t-\n"
        "chr2\t2\t19\t-\n"
        "chr3\t3\t13\t+\n"
        "crX\t100\t100\tz\n"
    )
    return path


def build_args(input_path, output_dir, **overrides):
    args = dict(
        input=str(input_path),
        output_dir=str(output_dir),
        delimiter="\\t",
        header=True,
        strand_column=4,
        comment=None,
        shards=1,
        test_mode=None,
        logging=None,
        debug=False,
        console_output=False,
    )
    args.update(overrides)
    return SimpleNamespace(**args)


def test_parse_delimiter():
    assert parse_delimiter("\\t") == "\t"
    assert parse_delimiter("tab") == "\t"
    assert parse_delimiter("comma") == ","
    assert parse_delimiter(";") == ";"
    with pytest.raises(ValueError):
        parse_delimiter("::")


def test_build_config_from_args(stranded_tsv, tmp_path):
    config = BuildConfig.from_args(build_args(stranded_tsv, tmp_path / "out"))
    assert config.delimiter == "\t"
    assert config.strand_column == 3
    assert config.log_dir == tmp_path / "out" / "logs"
    assert config.tsv_path == tmp_path / "out" / "peaks.ranges.tsv"
    assert config.summary_path == tmp_path / "out" / "peaks.summary.json"


def test_build_config_output_stem_strips_gzip(tmp_path):
    config = BuildConfig(input_path=tmp_path / "sample.bed.gz", output_dir=tmp_path)
    assert config.output_stem == "sample"


def test_build_config_rejects_bad_shards(tmp_path):
    with pytest.raises(ValueError):
        BuildConfig(input_path=tmp_path / "a.bed", output_dir=tmp_path, shards=0)


def test_run_build(stranded_tsv, tmp_path, null_logger):
    config = BuildConfig.from_args(build_args(stranded_tsv, tmp_path / "out", shards=2))
    run_build(config, null_logger)

    table = pd.read_csv(config.tsv_path, sep="\t")
    assert list(table.columns) == ['seqnames', 'start', 'end', 'width', 'strand']
    assert table['seqnames'].tolist() == ["chr1", "chr2", "chr2", "chr3", "unknown"]
    assert table['strand'].tolist() == ["-", "-", "-", "+", "*"]
    assert table['width'].tolist() == [10, 7, 17, 10, 0]

    summary = json.loads(config.summary_path.read_text())
    assert summary['n_intervals'] == 5
    assert summary['seqnames']['values'] == ["chr1", "chr2", "chr3", "unknown"]
    assert summary['seqnames']['lengths'] == [1, 2, 1, 1]
    assert summary['strand']['lengths'] == [3, 1, 1]
    assert summary['source'] == str(stranded_tsv)


def test_run_build_aborts_on_reversed_interval(tmp_path, null_logger):
    path = tmp_path / "bad.bed"
    path.write_text("chr1\t1\t2\nchr1\t5\t3\n")
    config = BuildConfig.from_args(build_args(path, tmp_path / "out", header=False, strand_column=None))
    with pytest.raises(IntervalOrderError):
        run_build(config, null_logger)
    assert not config.tsv_path.exists()


def test_run_summarize(stranded_tsv, null_logger):
    args = SimpleNamespace(input=str(stranded_tsv), delimiter="tab", header=True, strand_column=4, comment=None, debug=False)
    config = SummarizeConfig.from_args(args)
    output = io.StringIO()
    run_summarize(config, null_logger, output=output)

    lines = output.getvalue().splitlines()
    assert lines[0] == "seqnames\tchr1:1 chr2:2 chr3:1 unknown:1"
    assert lines[1] == "strand\t-:3 +:1 *:1"
    summary = json.loads("\n".join(lines[2:]))
    assert summary['total_width'] == 44


def test_run_summarize_missing_file(tmp_path, null_logger):
    config = SummarizeConfig(input_path=tmp_path / "missing.bed")
    with pytest.raises(FileNotFoundError):
        run_summarize(config, null_logger)


def test_cli_build(stranded_tsv, tmp_path, capsys):
    output_dir = tmp_path / "out"
    main(["build", "--input", str(stranded_tsv), "--output-dir", str(output_dir),
          "--header", "--strand-column", "4"])
    assert (output_dir / "peaks.ranges.tsv").exists()
    assert (output_dir / "peaks.summary.json").exists()
    assert list((output_dir / "logs").glob("*.build.log"))
    assert "Wrote 5 intervals" in capsys.readouterr().out


def test_cli_build_exits_nonzero_on_bad_row(tmp_path, capsys):
    path = tmp_path / "bad.bed"
    path.write_text("chr1\t1\t2\nchr1\tfive\t9\n")
    with pytest.raises(SystemExit) as excinfo:
        main(["build", "--input", str(path), "--output-dir", str(tmp_path / "out")])
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "Line 2 (row 1)" in err
    assert "start" in err


def test_cli_summarize(stranded_tsv, capsys):
    main(["summarize", "--input", str(stranded_tsv), "--header", "--strand-column", "4"])
    out = capsys.readouterr().out
    assert out.startswith("seqnames\tchr1:1 chr2:2 chr3:1 unknown:1\n")


def test_cli_rejects_missing_input(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["summarize", "--input", str(tmp_path / "missing.bed")])
    assert excinfo.value.code == 2


def test_cli_rejects_low_strand_column(stranded_tsv):
    with pytest.raises(SystemExit) as excinfo:
        main(["summarize", "--input", str(stranded_tsv), "--strand-column", "3"])
    assert excinfo.value.code == 2


@pytest.mark.parametrize("delimiter", ["ab", ""])
def test_cli_rejects_multi_character_delimiter(stranded_tsv, delimiter):
    with pytest.raises(SystemExit) as excinfo:
        main(["summarize", "--input", str(stranded_tsv), "--delimiter", delimiter])
    assert excinfo.value.code == 2


def test_cli_accepts_delimiter_alias(tmp_path, capsys):
    path = tmp_path / "regions.csv"
    path.write_text("chr1,1,5\nchr1,5,9\n")
    main(["summarize", "--input", str(path), "--delimiter", "comma"])
    assert capsys.readouterr().out.startswith("seqnames\tchr1:2\n")


def test_cli_summarize_exits_nonzero_on_undecodable_file(tmp_path, capsys):
    path = tmp_path / "binary.bed"
    path.write_bytes(b"chr1\t1\t2\nchr\xff\t3\t4\n")
    with pytest.raises(SystemExit) as excinfo:
        main(["summarize", "--input", str(path)])
    assert excinfo.value.code == 1
    assert "unreadable input" in capsys.readouterr().err


def test_build_log_named_after_input(stranded_tsv, tmp_path):
    output_dir = tmp_path / "out"
    main(["build", "--input", str(stranded_tsv), "--output-dir", str(output_dir),
          "--header", "--strand-column", "4"])
    assert list((output_dir / "logs").glob("*.peaks.build.log"))
