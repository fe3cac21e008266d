# packages/glexcodec/src/glexcodec/alphabet.py
from __future__ import annotations

from enum import Enum
from typing import Dict

from .errors import InvalidSymbol

__all__ = ["Strand", "code", "symbol", "validate"]


class Strand(Enum):
    """
    Variantes de brin supportées par GLex.

    La valeur de chaque membre est son alphabet ordonné : la position d'un
    caractère dans la chaîne est son code 2 bits (A=0, C=1, G=2, T/U=3).
    """

    DNA = "ACGT"
    RNA = "ACGU"

    @classmethod
    def parse(cls, value: "Strand | str") -> "Strand":
        if isinstance(value, Strand):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError as e:
            raise ValueError(f"Unknown strand: {value!r} (expected 'dna' or 'rna')") from e


# Tables figées (une par brin) : symbole -> code, code -> symbole
_ENCODINGS: Dict[Strand, Dict[str, int]] = {
    s: {ch: i for i, ch in enumerate(s.value)} for s in Strand
}


def code(sym: str, strand: Strand) -> int:
    """
    Code 2 bits (0..3) d'un symbole.

    Exceptions
    ----------
    InvalidSymbol si `sym` n'appartient pas à l'alphabet de `strand`.
    Aucun code sentinelle n'est jamais retourné.
    """
    try:
        return _ENCODINGS[strand][sym]
    except KeyError:
        raise InvalidSymbol(sym, strand=strand) from None


def symbol(value: int, strand: Strand) -> str:
    """Symbole associé à un code 0..3 (toujours valide pour un reste de division par 4)."""
    if not (0 <= value <= 3):
        raise ValueError(f"symbol code out of range [0,3]: {value}")
    return strand.value[value]


def validate(pattern: str, strand: Strand) -> None:
    """Vérifie l'appartenance de chaque caractère à l'alphabet ; lève au premier fautif."""
    table = _ENCODINGS[strand]
    for i, ch in enumerate(pattern):
        if ch not in table:
            raise InvalidSymbol(ch, position=i, strand=strand)
