# packages/glexcodec/src/glexcodec/reader.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Iterator, Optional

from .alphabet import Strand
from .bitstream import Header, read_header, unpack_segment, unpack_segments
from .buffer import SymbolBuffer
from .errors import GLexError, TruncatedStream
from .lexico import decode, decode_many

__all__ = ["GLexReader", "read_sequence"]

log = logging.getLogger(__name__)


class GLexReader:
    """
    Lecteur de flux GLex.

    - `read(k)` : lecture de longueur arbitraire, indépendante des frontières de
      segments, via un buffer de report conservé entre appels.
    - `read_all()` : rembobine et décode toute la séquence d'un coup.

    Les deux modes ne se composent pas : `read_all()` remet les compteurs à zéro
    (utiliser `rewind()` pour relancer une série de `read(k)`).

    Paramètres
    ----------
    source : str | Path | BinaryIO
        Chemin (ouvert/fermé par le lecteur) ou flux binaire ouvert (laissé ouvert).
    strand : Strand
        Alphabet de décodage.
    """

    def __init__(self, source: str | Path | BinaryIO, strand: Strand = Strand.DNA):
        self.strand = Strand.parse(strand)
        if hasattr(source, "read"):
            self._fp = source
            self._owns = False
        else:
            self._fp = open(source, "rb")
            self._owns = True

        try:
            self.header: Header = read_header(self._fp)
        except BaseException:
            if self._owns:
                self._fp.close()
            raise
        seekable = getattr(self._fp, "seekable", None)
        self._data_offset: Optional[int] = self._fp.tell() if seekable and seekable() else None

        self._buffer = SymbolBuffer(self.header.segment_length)
        self.segments_read = 0
        self.decoded = 0
        self._delivered = 0
        log.debug("glex header read: %s (%d segments)", self.header.to_dict(), self.segment_count)

    # Accessors
    @property
    def bit_width(self) -> int: return self.header.bit_width
    @property
    def total_length(self) -> int: return self.header.total_length
    @property
    def segment_length(self) -> int: return self.header.segment_length
    @property
    def segment_count(self) -> int: return self.header.segment_count
    @property
    def buffered(self) -> int: return len(self._buffer)

    @property
    def delivered(self) -> int:
        """Symboles déjà rendus à l'appelant (un `read` en échec ne compte pas)."""
        return self._delivered

    # ------------------------------------------------------------------
    # Segments fixes
    # ------------------------------------------------------------------
    def _read_next_fixed_segment(self) -> Optional[str]:
        """
        Lit et décode le prochain segment sur disque, sans toucher au buffer.
        Retourne None quand tous les segments sont consommés ou qu'il n'y a plus d'octets.
        """
        if self.segments_read >= self.segment_count:
            return None
        nbytes = self.header.segment_nbytes
        raw = self._fp.read(nbytes)
        if not raw:
            return None
        if len(raw) < nbytes:
            raise TruncatedStream(
                f"segment {self.segments_read}: need {nbytes} bytes, got {len(raw)}"
            )
        value = unpack_segment(raw, self.bit_width)
        length = self.header.segment_length_at(self.segments_read)
        try:
            seg = decode(value, length, self.strand)
        except ValueError as e:
            raise GLexError(f"segment {self.segments_read} is corrupt: {e}") from e
        self.segments_read += 1
        self.decoded += len(seg)
        return seg

    # ------------------------------------------------------------------
    # Lecture de longueur arbitraire
    # ------------------------------------------------------------------
    def read(self, k: Optional[int] = None) -> Optional[str]:
        """
        Lit jusqu'à `k` symboles (par défaut `segment_length`).

        Retour
        ------
        str | None
            - "" si `k == 0` (aucun effet de bord),
            - None en fin de flux (tout livré, buffer vide),
            - sinon `min(k, buffered + total_length - decoded)` symboles.

        Exceptions
        ----------
        ValueError si `k < 0`. TruncatedStream si le fichier se termine avant la
        longueur déclarée ; les symboles déjà dans le buffer y restent.
        """
        if k is None:
            k = self.segment_length
        if k < 0:
            raise ValueError("read: k must be >= 0")
        if k == 0:
            return ""
        total = self.total_length
        if self.decoded >= total and len(self._buffer) == 0:
            return None

        target = min(k, len(self._buffer) + total - self.decoded)
        from_buffer = min(target, len(self._buffer))
        need = target - from_buffer

        # segments d'abord : le buffer n'est consommé qu'une fois la lecture garantie
        pieces = []
        got = 0
        while got < need:
            seg = self._read_next_fixed_segment()
            if seg is None:
                raise TruncatedStream(
                    f"stream ended after {self.decoded} of {total} declared symbols"
                )
            pieces.append(seg)
            got += len(seg)

        out = self._buffer.pop(from_buffer)
        if pieces:
            body = "".join(pieces)
            self._buffer.push(body[need:])
            out += body[:need]
        self._delivered += len(out)
        return out

    def __iter__(self) -> Iterator[str]:
        while True:
            chunk = self.read()
            if chunk is None:
                return
            yield chunk

    # ------------------------------------------------------------------
    # Lecture complète
    # ------------------------------------------------------------------
    def rewind(self) -> None:
        """Repositionne au début des segments et remet buffer/compteurs à zéro."""
        if self._data_offset is None:
            raise ValueError("rewind requires a seekable source")
        self._fp.seek(self._data_offset)
        self._buffer.clear()
        self.segments_read = 0
        self.decoded = 0
        self._delivered = 0
        log.debug("glex reader rewound to offset %d", self._data_offset)

    def read_all(self) -> str:
        """Décode toute la séquence (exactement `total_length` symboles)."""
        self.rewind()
        h = self.header
        if h.segment_count == 0:
            return ""
        raw = self._fp.read(h.data_nbytes)
        if len(raw) < h.data_nbytes:
            raise TruncatedStream(
                f"data: need {h.data_nbytes} bytes for {h.segment_count} segments, got {len(raw)}"
            )
        values = unpack_segments(raw, h.bit_width, h.segment_count)
        try:
            head = decode_many(values[:-1], h.segment_length, self.strand)
            tail = decode(int(values[-1]), h.last_length, self.strand)
        except ValueError as e:
            raise GLexError(f"corrupt segment data: {e}") from e
        self.segments_read = h.segment_count
        self.decoded = h.total_length
        self._delivered = h.total_length
        return head + tail

    # ------------------------------------------------------------------
    def close(self) -> None:
        if self._owns and not self._fp.closed:
            self._fp.close()

    def __enter__(self) -> "GLexReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"GLexReader(bit_width={self.bit_width}, total_length={self.total_length}, "
            f"delivered={self.delivered}, buffered={self.buffered})"
        )


def read_sequence(source: str | Path | BinaryIO, strand: Strand = Strand.DNA) -> str:
    """One-shot : ouvre, décode tout, ferme."""
    with GLexReader(source, strand) as r:
        return r.read_all()
