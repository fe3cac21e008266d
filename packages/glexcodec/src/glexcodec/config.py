# packages/glexcodec/src/glexcodec/config.py
from __future__ import annotations
import os
from dataclasses import dataclass

from .alphabet import Strand
from .errors import UnsupportedBitWidth
from .lexico import BIT_WIDTHS, max_length

__all__ = ["CodecConfig"]


@dataclass(frozen=True, slots=True)
class CodecConfig:
    """
    Configuration **publique et stable** du codec GLex.

    Consommée par `glexcodec.codec` et par les CLI de `glexwf`.

    Champs
    ------
    bit_width : int, default=64
        Largeur des mots de segment (16, 32 ou 64). Fixe `segment_length`
        via `max_length` (8, 16 ou 32 symboles).
    strand : Strand, default=Strand.DNA
        Alphabet actif (A,C,G,T ou A,C,G,U). Passé explicitement à chaque appel
        du codec, jamais lu depuis un état global.

    ENV
    ---
    GLEX_BIT_WIDTH → bit_width
    GLEX_STRAND    → strand ("dna" | "rna")

    Notes
    -----
    - Dataclass **immuable** : une config = un flux.
    - Les validations lèvent `UnsupportedBitWidth` / `ValueError`.
    """

    bit_width: int = 64
    strand: Strand = Strand.DNA

    def __post_init__(self) -> None:
        if self.bit_width not in BIT_WIDTHS:
            raise UnsupportedBitWidth(self.bit_width)
        if not isinstance(self.strand, Strand):
            raise ValueError("CodecConfig.strand must be a Strand (use Strand.parse for names)")

    @property
    def segment_length(self) -> int:
        return max_length(self.bit_width)

    @staticmethod
    def from_env(**overrides) -> "CodecConfig":
        """ENV d'abord, puis surcharges explicites non-None (ex: flags CLI)."""
        kw: dict = {}
        bw = os.getenv("GLEX_BIT_WIDTH", "").strip()
        if bw:
            try:
                kw["bit_width"] = int(bw)
            except ValueError:
                raise UnsupportedBitWidth(bw) from None
        st = os.getenv("GLEX_STRAND", "").strip()
        if st:
            kw["strand"] = Strand.parse(st)
        for k, v in overrides.items():
            if v is None:
                continue
            kw[k] = Strand.parse(v) if k == "strand" else v
        return CodecConfig(**kw)
