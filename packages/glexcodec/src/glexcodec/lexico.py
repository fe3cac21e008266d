# packages/glexcodec/src/glexcodec/lexico.py
# -----------------------------------------------------------------------------
# Encodage lexicographique (base 4 positionnelle) : motif <-> entier non signé.
# Premier caractère = chiffre de poids fort. Bijection entre les motifs de
# longueur L et l'intervalle [0, 4**L).
# -----------------------------------------------------------------------------
from __future__ import annotations

import numpy as np

from .alphabet import Strand, symbol
from .alphabet import _ENCODINGS
from .errors import EmptyPattern, InvalidSymbol, UnsupportedBitWidth

__all__ = [
    "BIT_WIDTHS",
    "encode",
    "decode",
    "decode_shortest",
    "decode_many",
    "max_length",
]

#: Largeurs de mot supportées (bits par segment encodé)
BIT_WIDTHS = (16, 32, 64)


def encode(pattern: str, strand: Strand) -> int:
    """
    Encode un motif en son index lexicographique.

    Paramètres
    ----------
    pattern : str
        Motif non vide sur l'alphabet de `strand`.
    strand : Strand
        Brin actif (passé explicitement à chaque appel).

    Retour
    ------
    int
        `sum(code(pattern[i]) * 4**(len-1-i))`, toujours < `4**len(pattern)`.

    Exceptions
    ----------
    EmptyPattern si le motif est vide, InvalidSymbol au premier caractère inconnu.
    """
    if not pattern:
        raise EmptyPattern("pattern cannot be empty")
    table = _ENCODINGS[strand]
    value = 0
    for i, ch in enumerate(pattern):
        c = table.get(ch)
        if c is None:
            raise InvalidSymbol(ch, position=i, strand=strand)
        value = value * 4 + c
    return value


def decode(value: int, length: int, strand: Strand) -> str:
    """
    Décodage à longueur fixe : `length` chiffres base 4, complétés à gauche par
    le symbole zéro (A). C'est la seule forme valide pour les segments sur disque.
    """
    if length < 1:
        raise ValueError("decode: length must be >= 1")
    if value < 0:
        raise ValueError("decode: value must be >= 0")
    if value >> (2 * length):
        raise ValueError(f"decode: value {value} does not fit in {length} symbols")
    out = [""] * length
    q = value
    for i in range(length - 1, -1, -1):
        q, r = divmod(q, 4)
        out[i] = symbol(r, strand)
    return "".join(out)


def decode_shortest(value: int, strand: Strand) -> str:
    """
    Représentation minimale de `value` (aucun A de tête ; "" pour 0).

    Helper volontairement étroit : la longueur vraie d'un motif ne se retrouve
    pas à partir de cette forme. Sert uniquement à `max_length`.
    """
    if value < 0:
        raise ValueError("decode_shortest: value must be >= 0")
    digits = []
    q = value
    while q > 0:
        q, r = divmod(q, 4)
        digits.append(symbol(r, strand))
    return "".join(reversed(digits))


def max_length(bit_width: int) -> int:
    """
    Nombre de symboles représentables par le plus grand entier de `bit_width` bits
    (16 -> 8, 32 -> 16, 64 -> 32).

    Exact ici car 2**16, 2**32 et 2**64 sont des puissances de 4 ; toute autre
    largeur devrait re-dériver cette borne.
    """
    if bit_width not in BIT_WIDTHS:
        raise UnsupportedBitWidth(bit_width)
    return len(decode_shortest((1 << bit_width) - 1, Strand.DNA))


def decode_many(values: np.ndarray, length: int, strand: Strand) -> str:
    """
    Décodage vectorisé à longueur fixe d'un tableau de valeurs de segments.

    Équivalent à `"".join(decode(int(v), length, strand) for v in values)` :
    un chiffre base 4 correspond à 2 bits, donc extraction par décalages.
    """
    if length < 1:
        raise ValueError("decode_many: length must be >= 1")
    if length > 32:
        raise ValueError("decode_many: length must be <= 32 (u64 lanes)")
    vals = np.asarray(values).astype(np.uint64, copy=False).reshape(-1)
    if vals.size == 0:
        return ""
    if length < 32 and np.any(vals >> np.uint64(2 * length)):
        raise ValueError(f"decode_many: value does not fit in {length} symbols")
    shifts = np.arange(length - 1, -1, -1, dtype=np.uint64) * np.uint64(2)
    digits = (vals[:, None] >> shifts[None, :]) & np.uint64(3)
    table = np.frombuffer(strand.value.encode("ascii"), dtype=np.uint8)
    return table[digits.astype(np.intp)].tobytes().decode("ascii")
