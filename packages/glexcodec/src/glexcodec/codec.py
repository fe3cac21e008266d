# packages/glexcodec/src/glexcodec/codec.py
from __future__ import annotations

import io
from typing import Any, Dict, Optional

from .alphabet import Strand, validate
from .config import CodecConfig
from .reader import GLexReader
from .writer import GLexWriter

__all__ = ["CodecConfig", "encode_sequence", "decode_sequence"]


def encode_sequence(sequence: str, cfg: Optional[CodecConfig] = None) -> Dict[str, Any]:
    """
    Encode une séquence complète en bitstream GLex (en mémoire).

    Retour
    ------
    dict
        - "bitstream" : bytes (header + segments)
        - "bits_per_symbol" : float, taille totale / nombre de symboles (0.0 si vide)
        - "header" : dict (bit_width, total_length, segment_length)
        - "segments" : int, nombre de segments émis
    """
    cfg = cfg or CodecConfig()
    validate(sequence, cfg.strand)
    sink = io.BytesIO()
    with GLexWriter(sink, cfg.bit_width, len(sequence), cfg.strand) as w:
        w.write(sequence)
    data = sink.getvalue()
    n = len(sequence)
    return {
        "bitstream": data,
        "bits_per_symbol": (8.0 * len(data) / n) if n else 0.0,
        "header": w.header.to_dict(),
        "segments": w.segments_written,
    }


def decode_sequence(bitstream: bytes, strand: Strand = Strand.DNA) -> str:
    """Bitstream GLex complet -> séquence."""
    if not isinstance(bitstream, (bytes, bytearray, memoryview)):
        raise TypeError("decode_sequence: `bitstream` must be bytes")
    with GLexReader(io.BytesIO(bytes(bitstream)), strand) as r:
        return r.read_all()
