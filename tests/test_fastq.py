from __future__ import annotations
import gzip
import io
import logging

import pytest

from glexwf.fastq import FastqReader, FastqRecord, FastqFormatError

FASTQ = (
    "@r1 desc\n"
    "ACGTACGT\n"
    "+\n"
    "IIIIIIII\n"
    "@r2\n"
    "GGA\n"
    "+r2\n"
    "!!#\n"
)


def test_read_records():
    fq = FastqReader(io.StringIO(FASTQ))
    r1 = fq.read_record()
    assert r1 == FastqRecord("ACGTACGT", "IIIIIIII", "r1 desc")
    r2 = fq.read_record()
    assert (r2.sequence, r2.quality, r2.name) == ("GGA", "!!#", "r2")
    assert len(r2) == 3
    assert fq.read_record() is None
    assert fq.read_record() is None


def test_trailing_blank_lines_and_crlf():
    text = FASTQ.replace("\n", "\r\n") + "\r\n\r\n"
    recs = list(FastqReader(io.StringIO(text)))
    assert [r.sequence for r in recs] == ["ACGTACGT", "GGA"]
    assert recs[0].quality == "IIIIIIII"


def test_missing_quality_is_fatal_for_the_record():
    fq = FastqReader(io.StringIO("@r1\nACGT\n+\n"))
    with pytest.raises(FastqFormatError):
        fq.read_record()
    assert fq.read_record() is None


def test_quality_length_mismatch():
    with pytest.raises(FastqFormatError):
        list(FastqReader(io.StringIO("@r1\nACGT\n+\nII\n")))


def test_skip_malformed_keeps_batch_going(caplog):
    text = "@bad\nACGT\n+\nII\n" + FASTQ
    with caplog.at_level(logging.WARNING):
        fq = FastqReader(io.StringIO(text), skip_malformed=True)
        recs = list(fq)
    assert [r.name for r in recs] == ["r1 desc", "r2"]
    assert fq.skipped == 1 and fq.records_read == 2
    assert any("malformed" in r.getMessage() for r in caplog.records)


def test_paths_plain_and_gz(tmp_path):
    plain = tmp_path / "a.fastq"
    plain.write_text(FASTQ, encoding="ascii")
    gz = tmp_path / "a.fastq.gz"
    with gzip.open(gz, "wt", encoding="ascii") as f:
        f.write(FASTQ)
    for p in (plain, gz):
        with FastqReader(p) as fq:
            assert [r.sequence for r in fq] == ["ACGTACGT", "GGA"]
