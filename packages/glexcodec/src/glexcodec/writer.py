# packages/glexcodec/src/glexcodec/writer.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

from .alphabet import Strand, validate
from .bitstream import EncodingMode, Header, pack_header, pack_segment
from .buffer import SymbolBuffer
from .lexico import encode

__all__ = ["GLexWriter", "write_sequence"]

log = logging.getLogger(__name__)


class GLexWriter:
    """
    Écrivain de flux GLex.

    Accepte des morceaux de séquence de taille quelconque, les accumule dans un
    buffer de report de `segment_length` symboles, et émet un segment encodé à
    chaque fois que le buffer est plein. `close()` émet le dernier segment
    (éventuellement plus court).

    Paramètres
    ----------
    destination : str | Path | BinaryIO
        Chemin (ouvert et fermé par l'écrivain) ou flux binaire déjà ouvert
        (laissé ouvert au `close()`).
    bit_width : int | EncodingMode
        Largeur des mots de segment (16, 32 ou 64).
    total_length : int
        Longueur totale déclarée dans le header ; sert à borner le dernier segment.
    strand : Strand
        Alphabet actif.

    Le header est écrit dans le constructeur, avant toute donnée. S'il échoue,
    le flux est fermé (si possédé) et l'erreur remonte.
    """

    def __init__(
        self,
        destination: str | Path | BinaryIO,
        bit_width: int | EncodingMode,
        total_length: int,
        strand: Strand = Strand.DNA,
    ):
        self.header = Header.for_width(bit_width, total_length)
        self.strand = Strand.parse(strand)
        self._buffer = SymbolBuffer(self.header.segment_length)
        self.written = 0
        self.segments_written = 0
        self._closed = False

        if hasattr(destination, "write"):
            self._fp = destination
            self._owns = False
        else:
            self._fp = open(destination, "wb")
            self._owns = True

        try:
            self._fp.write(pack_header(self.header))
        except BaseException:
            self._closed = True
            if self._owns:
                self._fp.close()
            raise
        log.debug("glex header written: %s", self.header.to_dict())

    # Accessors
    @property
    def bit_width(self) -> int: return self.header.bit_width
    @property
    def total_length(self) -> int: return self.header.total_length
    @property
    def segment_length(self) -> int: return self.header.segment_length
    @property
    def buffered(self) -> int: return len(self._buffer)
    @property
    def closed(self) -> bool: return self._closed

    def write(self, symbols: str) -> int:
        """
        Ajoute `symbols` au flux ; retourne le nombre de symboles acceptés.

        Le morceau entier est validé avant toute écriture : un `InvalidSymbol`
        n'écrit rien et laisse le buffer intact. Dépasser `total_length` lève
        `ValueError` (le header ne pourrait plus décrire le flux).
        """
        if self._closed:
            raise ValueError("write on a closed GLexWriter")
        n = len(symbols)
        if n == 0:
            return 0
        validate(symbols, self.strand)
        if self.written + n > self.total_length:
            raise ValueError(
                f"write of {n} symbols exceeds declared total_length "
                f"({self.written}/{self.total_length} already written)"
            )

        pos = 0
        while pos < n:
            take = min(self._buffer.free, n - pos)
            self._buffer.push(symbols[pos:pos + take])
            pos += take
            self.written += take
            if self._buffer.free == 0:
                self._emit(self._buffer.pop(len(self._buffer)))
        return n

    def _emit(self, segment: str) -> None:
        value = encode(segment, self.strand)
        self._fp.write(pack_segment(value, self.bit_width))
        self.segments_written += 1

    def close(self) -> None:
        """Émet le segment final partiel, flush, et libère le flux possédé. Idempotent."""
        if self._closed:
            return
        self._closed = True
        try:
            if len(self._buffer):
                self._emit(self._buffer.pop(len(self._buffer)))
            self._fp.flush()
        finally:
            if self._owns:
                self._fp.close()
        if self.written != self.total_length:
            log.warning(
                "GLexWriter closed after %d of %d declared symbols; stream will read as truncated",
                self.written, self.total_length,
            )
        log.debug("glex writer closed: %d symbols, %d segments", self.written, self.segments_written)

    def __enter__(self) -> "GLexWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"GLexWriter(bit_width={self.bit_width}, total_length={self.total_length}, "
            f"written={self.written}, closed={self._closed})"
        )


def write_sequence(
    destination: str | Path | BinaryIO,
    sequence: str,
    bit_width: int | EncodingMode = 64,
    strand: Strand = Strand.DNA,
) -> Header:
    """One-shot : valide, ouvre, écrit et ferme. Rien n'est écrit si la séquence est invalide."""
    strand = Strand.parse(strand)
    validate(sequence, strand)
    with GLexWriter(destination, bit_width, len(sequence), strand) as w:
        w.write(sequence)
    return w.header
