# sérialisation binaire des segments (un entier non signé par segment)
from __future__ import annotations

import numpy as np

from ..errors import TruncatedStream, UnsupportedBitWidth

__all__ = ["segment_dtype", "pack_segment", "unpack_segment", "unpack_segments"]

# Même ordre d'octets que le header (little-endian)
_DTYPES = {
    16: np.dtype("<u2"),
    32: np.dtype("<u4"),
    64: np.dtype("<u8"),
}


def segment_dtype(bit_width: int) -> np.dtype:
    try:
        return _DTYPES[bit_width]
    except KeyError:
        raise UnsupportedBitWidth(bit_width) from None


def pack_segment(value: int, bit_width: int) -> bytes:
    """Entier de segment -> `bit_width/8` octets."""
    if not (0 <= value < (1 << bit_width)):
        raise ValueError(f"segment value {value} does not fit in {bit_width} bits")
    return np.array([value], dtype=segment_dtype(bit_width)).tobytes()


def unpack_segment(raw: bytes, bit_width: int) -> int:
    dt = segment_dtype(bit_width)
    if len(raw) < dt.itemsize:
        raise TruncatedStream(f"segment: need {dt.itemsize} bytes, got {len(raw)}")
    return int(np.frombuffer(raw, dtype=dt, count=1)[0])


def unpack_segments(raw: bytes, bit_width: int, count: int | None = None) -> np.ndarray:
    """
    Octets -> tableau d'entiers de segments (vue numpy, lecture seule).

    `count=None` exige un multiple exact de la taille d'un segment.
    """
    dt = segment_dtype(bit_width)
    if count is None:
        if len(raw) % dt.itemsize:
            raise TruncatedStream(f"segments: {len(raw)} bytes is not a multiple of {dt.itemsize}")
        count = len(raw) // dt.itemsize
    need = count * dt.itemsize
    if len(raw) < need:
        raise TruncatedStream(f"segments: need {need} bytes for {count} segments, got {len(raw)}")
    return np.frombuffer(raw, dtype=dt, count=count)
