from __future__ import annotations
import io
import struct

import pytest

from glexcodec.bitstream import (
    HEADER_SIZE, EncodingMode, Header, as_bit_width,
    pack_header, unpack_header, read_header,
    peek_header,
)
from glexcodec.errors import HeaderError, TruncatedStream, UnsupportedBitWidth


def test_header_layout():
    h = Header.for_width(16, 9)
    b = pack_header(h)
    assert HEADER_SIZE == 10 and len(b) == 10
    assert b == bytes([16]) + (9).to_bytes(8, "little") + bytes([8])
    assert unpack_header(b) == h


def test_header_roundtrip_dict():
    h = Header.for_width(64, 1_000_003)
    assert Header.from_dict(h.to_dict()) == h
    assert read_header(io.BytesIO(pack_header(h) + b"trailing")) == h


@pytest.mark.parametrize("total,seg_len,count,last", [
    (0, 8, 0, 0),
    (1, 8, 1, 1),
    (8, 8, 1, 8),
    (9, 8, 2, 1),
    (100, 32, 4, 4),
])
def test_segment_count_and_last_length(total, seg_len, count, last):
    w = {8: 16, 16: 32, 32: 64}[seg_len]
    h = Header.for_width(w, total)
    assert h.segment_length == seg_len
    assert h.segment_count == count
    assert h.last_length == last
    assert h.data_nbytes == count * (w // 8)


def test_segment_length_at():
    h = Header.for_width(16, 20)
    assert [h.segment_length_at(i) for i in range(h.segment_count)] == [8, 8, 4]
    with pytest.raises(IndexError):
        h.segment_length_at(3)


def test_unpack_errors():
    with pytest.raises(TruncatedStream):
        unpack_header(b"\x10\x00\x00")
    with pytest.raises(UnsupportedBitWidth):
        unpack_header(struct.pack("<BQB", 8, 4, 4))
    with pytest.raises(HeaderError):
        unpack_header(struct.pack("<BQB", 16, 4, 9))  # 9 > max_length(16)
    with pytest.raises(HeaderError):
        unpack_header(struct.pack("<BQB", 32, 4, 0))


def test_encoding_mode_identifiers():
    assert [m.bit_width for m in EncodingMode] == [16, 32, 64]
    assert int(EncodingMode.UNSIGNED_32_BITS) == 1
    assert EncodingMode.from_bit_width(64) is EncodingMode.UNSIGNED_64_BITS
    assert as_bit_width(EncodingMode.UNSIGNED_16_BITS) == 16
    assert Header.for_width(EncodingMode.UNSIGNED_32_BITS, 3).segment_length == 16
    with pytest.raises(UnsupportedBitWidth):
        EncodingMode.from_bit_width(12)
    with pytest.raises(UnsupportedBitWidth):
        as_bit_width(True)


def test_peek_header_reads_only_the_header(tmp_path):
    h = Header.for_width(32, 5)
    out = tmp_path / "x.glex"
    # segments absents : seul le header est lu
    out.write_bytes(pack_header(h))
    assert peek_header(out) == h
    out.write_bytes(pack_header(h)[:HEADER_SIZE - 1])
    with pytest.raises(TruncatedStream):
        peek_header(out)
