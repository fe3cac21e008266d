from __future__ import annotations
from pathlib import Path

from .header import HEADER_SIZE, Header, unpack_header


def peek_header(path: str | Path) -> Header:
    """Decode only the fixed-size header of a .glex file (segments are not read)."""
    with open(path, "rb") as f:
        return unpack_header(f.read(HEADER_SIZE))
