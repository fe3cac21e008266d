# packages/glexwf/src/glexwf/__init__.py
from __future__ import annotations

from .api import atomic_write, glex_name, looks_like_glex, compress_fastq, decompress
from .fastq import FastqReader, FastqRecord, FastqFormatError

__all__ = [
    "atomic_write",
    "glex_name",
    "looks_like_glex",
    "compress_fastq",
    "decompress",
    "FastqReader",
    "FastqRecord",
    "FastqFormatError",
    # on n’importe PAS le sous-module cli ici
]

__version__ = "1.0.0"
