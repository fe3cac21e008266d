# packages/glexcodec/src/glexcodec/bitstream/__init__.py
from __future__ import annotations

# Lecture du header seul (sans les segments)
from .io import peek_header

# Header (10 octets, écrit une seule fois)
from .header import (
    HEADER_FMT, HEADER_SIZE,
    EncodingMode, Header, as_bit_width,
    pack_header, unpack_header, read_header,
)

# Segments (un entier u16/u32/u64 par segment)
from .segments import segment_dtype, pack_segment, unpack_segment, unpack_segments

__all__ = [
    "peek_header",
    "HEADER_FMT", "HEADER_SIZE",
    "EncodingMode", "Header", "as_bit_width",
    "pack_header", "unpack_header", "read_header",
    "segment_dtype", "pack_segment", "unpack_segment", "unpack_segments",
]
