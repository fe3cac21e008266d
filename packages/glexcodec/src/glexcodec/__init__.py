# packages/glexcodec/src/glexcodec/__init__.py
from __future__ import annotations

"""GLex - codec de séquences nucléotidiques 2 bits/symbole (surface publique).

Expose l'alphabet, le codec lexicographique, le format de flux et les
lecteur/écrivain bufferisés.
"""

__version__ = "1.0.0"

# API publique (stable)
from .alphabet import Strand
from .config import CodecConfig
from .errors import (
    GLexError, InvalidSymbol, EmptyPattern, UnsupportedBitWidth,
    TruncatedStream, HeaderError, BufferUnderflow, BufferOverflow,
)
from .lexico import BIT_WIDTHS, encode, decode, decode_shortest, decode_many, max_length
from .bitstream import EncodingMode, Header
from .writer import GLexWriter, write_sequence
from .reader import GLexReader, read_sequence
from .codec import encode_sequence, decode_sequence

__all__ = [
    "__version__",
    "Strand", "CodecConfig",
    "GLexError", "InvalidSymbol", "EmptyPattern", "UnsupportedBitWidth",
    "TruncatedStream", "HeaderError", "BufferUnderflow", "BufferOverflow",
    "BIT_WIDTHS", "encode", "decode", "decode_shortest", "decode_many", "max_length",
    "EncodingMode", "Header",
    "GLexWriter", "write_sequence",
    "GLexReader", "read_sequence",
    "encode_sequence", "decode_sequence",
]
