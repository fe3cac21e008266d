from __future__ import annotations
import random

import numpy as np
import pytest

from glexcodec.alphabet import Strand
from glexcodec.errors import EmptyPattern, InvalidSymbol, UnsupportedBitWidth
from glexcodec.lexico import encode, decode, decode_shortest, decode_many, max_length


def _random_pattern(rng: random.Random, n: int, alphabet: str = "ACGT") -> str:
    return "".join(rng.choice(alphabet) for _ in range(n))


def test_first_symbol_is_most_significant():
    assert encode("A", Strand.DNA) == 0
    assert encode("T", Strand.DNA) == 3
    assert encode("CA", Strand.DNA) == 4
    assert encode("AC", Strand.DNA) == 1
    assert encode("ACGT", Strand.DNA) == 0 * 64 + 1 * 16 + 2 * 4 + 3
    assert encode("ACGTACGT", Strand.DNA) == 0x1B1B


def test_roundtrip_random_patterns():
    rng = random.Random(1234)
    for n in range(1, max_length(64) + 1):
        for _ in range(20):
            s = _random_pattern(rng, n)
            v = encode(s, Strand.DNA)
            assert 0 <= v < 4 ** n
            assert decode(v, n, Strand.DNA) == s


def test_roundtrip_rna():
    s = "UUGACAGU"
    assert decode(encode(s, Strand.RNA), len(s), Strand.RNA) == s


def test_leading_zero_symbols_are_kept_by_fixed_decode():
    # "AAAC" et "C" ont la même valeur : seule la longueur fixe les distingue
    assert encode("AAAC", Strand.DNA) == encode("C", Strand.DNA) == 1
    assert decode(1, 4, Strand.DNA) == "AAAC"
    assert decode_shortest(1, Strand.DNA) == "C"


def test_extremes():
    assert encode("T" * 32, Strand.DNA) == (1 << 64) - 1
    assert decode((1 << 64) - 1, 32, Strand.DNA) == "T" * 32
    assert decode(0, 32, Strand.DNA) == "A" * 32


def test_encode_errors():
    with pytest.raises(EmptyPattern):
        encode("", Strand.DNA)
    with pytest.raises(InvalidSymbol) as ei:
        encode("ACGN", Strand.DNA)
    assert ei.value.position == 3


def test_decode_errors():
    with pytest.raises(ValueError):
        decode(0, 0, Strand.DNA)
    with pytest.raises(ValueError):
        decode(-1, 4, Strand.DNA)
    with pytest.raises(ValueError):
        decode(4 ** 3, 3, Strand.DNA)  # ne tient pas en 3 symboles


def test_decode_shortest():
    assert decode_shortest(0, Strand.DNA) == ""
    assert decode_shortest(27, Strand.DNA) == "CGT"  # 1*16 + 2*4 + 3
    assert decode_shortest((1 << 16) - 1, Strand.DNA) == "T" * 8


def test_max_length_per_width():
    assert max_length(16) == 8
    assert max_length(32) == 16
    assert max_length(64) == 32
    # 4**L - 1 reste dans la largeur : pas de symbole perdu à la frontière
    for w in (16, 32, 64):
        assert 4 ** max_length(w) - 1 == (1 << w) - 1


@pytest.mark.parametrize("w", [0, 8, 24, 128])
def test_max_length_unsupported(w):
    with pytest.raises(UnsupportedBitWidth):
        max_length(w)


@pytest.mark.parametrize("length,dtype", [(8, "<u2"), (16, "<u4"), (32, "<u8"), (5, "<u2")])
def test_decode_many_matches_scalar_decode(length, dtype):
    rng = random.Random(length)
    patterns = [_random_pattern(rng, length) for _ in range(50)]
    values = np.array([encode(p, Strand.DNA) for p in patterns], dtype=dtype)
    assert decode_many(values, length, Strand.DNA) == "".join(patterns)


def test_decode_many_empty_and_overflow():
    assert decode_many(np.array([], dtype="<u4"), 16, Strand.DNA) == ""
    with pytest.raises(ValueError):
        decode_many(np.array([4 ** 3], dtype="<u2"), 3, Strand.DNA)
