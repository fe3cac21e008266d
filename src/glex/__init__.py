"""GLex — unified API
Install once, import one namespace:

    pip install -e .

Usage:

    import glex
    blob = glex.encode_sequence("ACGTACGTA")["bitstream"]
    seq  = glex.decode_sequence(blob)

Streaming:

    with glex.GLexWriter("genome.glex", 64, total_length) as w:
        for chunk in chunks:
            w.write(chunk)
    with glex.GLexReader("genome.glex") as r:
        head = r.read(100)

Or detailed modules:

    from glex import codec, wf
"""

__version__ = "1.0.0"

import glexcodec as codec
import glexwf as wf

from glexcodec import (
    Strand, CodecConfig, EncodingMode, Header,
    GLexError, InvalidSymbol, EmptyPattern, UnsupportedBitWidth, TruncatedStream, HeaderError,
    encode, decode, max_length,
    GLexWriter, GLexReader, write_sequence, read_sequence,
    encode_sequence, decode_sequence,
)
from glexwf import FastqReader, FastqRecord, compress_fastq, decompress

__all__ = [
    # sub-namespaces
    "codec", "wf",
    # convenience
    "Strand", "CodecConfig", "EncodingMode", "Header",
    "GLexError", "InvalidSymbol", "EmptyPattern", "UnsupportedBitWidth", "TruncatedStream", "HeaderError",
    "encode", "decode", "max_length",
    "GLexWriter", "GLexReader", "write_sequence", "read_sequence",
    "encode_sequence", "decode_sequence",
    "FastqReader", "FastqRecord", "compress_fastq", "decompress",
    "__version__",
]
