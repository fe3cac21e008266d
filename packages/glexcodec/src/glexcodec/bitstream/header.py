from __future__ import annotations
import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, BinaryIO, Dict

from ..errors import HeaderError, TruncatedStream, UnsupportedBitWidth
from ..lexico import BIT_WIDTHS, max_length

_LE = "<"  # little-endian

# Header schema: bit_width (u8) | total_length (u64) | segment_length (u8)
# Written once before any segment; never rewritten.
HEADER_FMT = _LE + "BQB"
HEADER_SIZE = struct.calcsize(HEADER_FMT)  # 10


class EncodingMode(IntEnum):
    """Identifiants historiques des modes d'encodage (un par largeur de mot)."""

    UNSIGNED_16_BITS = 0
    UNSIGNED_32_BITS = 1
    UNSIGNED_64_BITS = 2

    @property
    def bit_width(self) -> int:
        return BIT_WIDTHS[int(self)]

    @classmethod
    def from_bit_width(cls, bit_width: int) -> "EncodingMode":
        if bit_width not in BIT_WIDTHS:
            raise UnsupportedBitWidth(bit_width)
        return cls(BIT_WIDTHS.index(bit_width))


def as_bit_width(value: "int | EncodingMode") -> int:
    """Normalise un EncodingMode ou une largeur brute en largeur (16/32/64)."""
    if isinstance(value, EncodingMode):
        return value.bit_width
    if isinstance(value, bool) or int(value) not in BIT_WIDTHS:
        raise UnsupportedBitWidth(value)
    return int(value)


@dataclass(frozen=True)
class Header:
    """En-tête immuable d'un flux GLex ; détermine entièrement le découpage en segments."""

    bit_width: int
    total_length: int
    segment_length: int

    def __post_init__(self) -> None:
        if self.bit_width not in BIT_WIDTHS:
            raise UnsupportedBitWidth(self.bit_width)
        if not (0 <= self.total_length <= 0xFFFF_FFFF_FFFF_FFFF):
            raise HeaderError("total_length must fit in an unsigned 64-bit field")
        cap = max_length(self.bit_width)
        if not (1 <= self.segment_length <= cap):
            raise HeaderError(
                f"segment_length {self.segment_length} out of [1,{cap}] for {self.bit_width}-bit segments"
            )

    @staticmethod
    def for_width(bit_width: "int | EncodingMode", total_length: int) -> "Header":
        w = as_bit_width(bit_width)
        return Header(w, int(total_length), max_length(w))

    @property
    def segment_count(self) -> int:
        return -(-self.total_length // self.segment_length)

    @property
    def last_length(self) -> int:
        """Longueur du dernier segment (0 si le flux est vide)."""
        if self.segment_count == 0:
            return 0
        return self.total_length - (self.segment_count - 1) * self.segment_length

    @property
    def segment_nbytes(self) -> int:
        return self.bit_width // 8

    @property
    def data_nbytes(self) -> int:
        return self.segment_count * self.segment_nbytes

    def segment_length_at(self, index: int) -> int:
        """Longueur en symboles du segment d'index `index` (0-based)."""
        if not (0 <= index < self.segment_count):
            raise IndexError(f"segment index {index} out of range [0,{self.segment_count})")
        return self.last_length if index == self.segment_count - 1 else self.segment_length

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bit_width": int(self.bit_width),
            "total_length": int(self.total_length),
            "segment_length": int(self.segment_length),
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Header":
        return Header(
            bit_width=int(d["bit_width"]),
            total_length=int(d["total_length"]),
            segment_length=int(d["segment_length"]),
        )


def pack_header(h: Header) -> bytes:
    """Header -> 10 octets (u8 | u64 | u8, little-endian)."""
    return struct.pack(HEADER_FMT, h.bit_width, h.total_length, h.segment_length)


def unpack_header(b: bytes) -> Header:
    if len(b) < HEADER_SIZE:
        raise TruncatedStream(f"header: need {HEADER_SIZE} bytes, got {len(b)}")
    bit_width, total_length, segment_length = struct.unpack_from(HEADER_FMT, b, 0)
    if bit_width not in BIT_WIDTHS:
        raise UnsupportedBitWidth(bit_width)
    return Header(bit_width, total_length, segment_length)


def read_header(fp: BinaryIO) -> Header:
    """Lit exactement HEADER_SIZE octets depuis un flux binaire et les décode."""
    return unpack_header(fp.read(HEADER_SIZE))
