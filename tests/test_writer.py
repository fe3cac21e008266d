from __future__ import annotations
import io
import logging

import pytest

from glexcodec import GLexWriter, Strand, write_sequence
from glexcodec.bitstream import EncodingMode, HEADER_SIZE, unpack_header
from glexcodec.errors import InvalidSymbol, UnsupportedBitWidth


def test_example_acgtacgta_u16():
    sink = io.BytesIO()
    w = GLexWriter(sink, 16, 9)
    w.write("ACGTACGTA")
    w.close()
    data = sink.getvalue()

    h = unpack_header(data)
    assert (h.bit_width, h.total_length, h.segment_length) == (16, 9, 8)
    # "ACGTACGT" -> 0x1B1B, "A" -> 0, u16 little-endian
    assert data[HEADER_SIZE:] == b"\x1b\x1b" + b"\x00\x00"
    assert w.segments_written == 2
    assert w.written == 9


def test_header_written_before_any_data():
    sink = io.BytesIO()
    w = GLexWriter(sink, 32, 100)
    assert len(sink.getvalue()) == HEADER_SIZE
    w.write("ACG")  # segment incomplet : rien de plus sur disque
    assert len(sink.getvalue()) == HEADER_SIZE
    assert w.buffered == 3


def test_chunks_of_any_size_match_single_write():
    seq = "ACGT" * 25 + "GGA"
    one = io.BytesIO()
    with GLexWriter(one, 16, len(seq)) as w:
        w.write(seq)
    many = io.BytesIO()
    with GLexWriter(many, 16, len(seq)) as w:
        pos = 0
        for size in [1, 3, 7, 8, 9, 20, 1, 50, 100]:
            w.write(seq[pos:pos + size])
            pos += size
            if pos >= len(seq):
                break
    assert one.getvalue() == many.getvalue()


def test_invalid_symbol_writes_nothing():
    sink = io.BytesIO()
    w = GLexWriter(sink, 16, 20)
    w.write("ACGTACG")
    before = sink.getvalue()
    with pytest.raises(InvalidSymbol):
        w.write("TACGN")  # compléterait un segment si accepté
    assert sink.getvalue() == before
    assert w.buffered == 7 and w.written == 7


def test_write_sequence_invalid_creates_no_file(tmp_path):
    out = tmp_path / "bad.glex"
    with pytest.raises(InvalidSymbol):
        write_sequence(out, "ACGN", bit_width=16)
    assert not out.exists()


def test_overflow_of_declared_length():
    w = GLexWriter(io.BytesIO(), 16, 4)
    w.write("ACG")
    with pytest.raises(ValueError):
        w.write("TT")
    assert w.written == 3


def test_close_idempotent_and_write_after_close():
    sink = io.BytesIO()
    w = GLexWriter(sink, 64, 3)
    w.write("ACG")
    w.close()
    size = len(sink.getvalue())
    assert size == HEADER_SIZE + 8
    w.close()
    assert len(sink.getvalue()) == size
    assert not sink.closed  # flux externe laissé ouvert
    with pytest.raises(ValueError):
        w.write("A")


def test_owned_file_is_closed(tmp_path):
    out = tmp_path / "a.glex"
    with GLexWriter(out, EncodingMode.UNSIGNED_32_BITS, 17, Strand.RNA) as w:
        w.write("ACGU" * 4 + "U")
    assert w.closed
    assert out.stat().st_size == HEADER_SIZE + 2 * 4


def test_short_close_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="glexcodec.writer"):
        with GLexWriter(io.BytesIO(), 16, 10) as w:
            w.write("ACG")
    assert any("declared symbols" in r.getMessage() for r in caplog.records)


class _BrokenSink(io.RawIOBase):
    def writable(self):
        return True

    def write(self, b):
        raise OSError("disk full")


def test_header_failure_is_fatal():
    with pytest.raises(OSError):
        GLexWriter(_BrokenSink(), 16, 4)


def test_unsupported_width():
    with pytest.raises(UnsupportedBitWidth):
        GLexWriter(io.BytesIO(), 24, 4)


def test_unopenable_destination(tmp_path):
    with pytest.raises(OSError):
        GLexWriter(tmp_path / "missing" / "x.glex", 16, 4)
