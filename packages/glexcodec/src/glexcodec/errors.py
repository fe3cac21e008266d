# packages/glexcodec/src/glexcodec/errors.py
from __future__ import annotations

__all__ = [
    "GLexError",
    "InvalidSymbol",
    "EmptyPattern",
    "UnsupportedBitWidth",
    "TruncatedStream",
    "HeaderError",
    "BufferUnderflow",
    "BufferOverflow",
]


class GLexError(ValueError):
    """Racine des erreurs de données GLex (reste un ValueError pour les appelants)."""


class InvalidSymbol(GLexError):
    """Caractère hors de l'alphabet du brin actif (levé à l'encodage)."""

    def __init__(self, symbol: str, position: int | None = None, strand: object = None):
        self.symbol = symbol
        self.position = position
        self.strand = strand
        where = f" at position {position}" if position is not None else ""
        name = getattr(strand, "name", strand)
        super().__init__(f"invalid symbol {symbol!r}{where} for strand {name}")


class EmptyPattern(GLexError):
    """Encodage demandé sur un motif vide."""


class UnsupportedBitWidth(GLexError):
    """Largeur de mot autre que 16/32/64 (header ou constructeur)."""

    def __init__(self, bit_width: object):
        self.bit_width = bit_width
        super().__init__(f"unsupported bit width: {bit_width!r} (expected 16, 32 or 64)")


class TruncatedStream(GLexError):
    """Moins d'octets disponibles qu'un champ de header ou un segment complet."""


class HeaderError(GLexError):
    """Header lisible mais incohérent (ex: segment_length hors bornes)."""


class BufferUnderflow(AssertionError):
    """Violation interne du buffer de report : bug d'implémentation, pas erreur de données."""


class BufferOverflow(AssertionError):
    """Push au-delà de la capacité du buffer de report (bug d'implémentation)."""
