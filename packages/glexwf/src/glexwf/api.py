from __future__ import annotations
import logging, os
from pathlib import Path
from typing import Any, Dict, Optional

from glexcodec import CodecConfig, GLexWriter, Strand, read_sequence
from glexcodec.alphabet import validate
from glexcodec.bitstream import HEADER_SIZE, peek_header
from glexcodec.errors import GLexError, InvalidSymbol

from .fastq import FastqReader, FastqRecord

GLEX_SUFFIX = ".glex"

def atomic_write(path: Path | str, data: bytes) -> None:
    path = Path(path)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.parent.mkdir(parents=True, exist_ok=True)
    with open(tmp, "wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp, path)

def glex_name(fastq_path: Path | str) -> str:
    """reads.fastq(.gz) -> reads.glex"""
    p = Path(fastq_path)
    stem = Path(p.stem).stem if p.suffix == ".gz" else p.stem
    return stem + GLEX_SUFFIX

def looks_like_glex(p: Path | str) -> bool:
    try:
        h = peek_header(p)
    except (OSError, GLexError):
        return False
    return Path(p).stat().st_size >= HEADER_SIZE + h.data_nbytes

def _usable(rec: FastqRecord, strand: Strand, skip_invalid: bool) -> bool:
    try:
        validate(rec.sequence, strand)
    except InvalidSymbol as e:
        if not skip_invalid:
            raise
        logging.warning("skipping record %r: %s", rec.name, e)
        return False
    return True

def compress_fastq(
    fastq_path: Path | str,
    out_path: Path | str,
    cfg: Optional[CodecConfig] = None,
    skip_malformed: bool = True,
) -> Dict[str, Any]:
    """
    FASTQ -> .glex : toutes les séquences concaténées dans un seul flux.

    Deux passes : (1) longueur totale (nécessaire au header), (2) écriture
    record par record. Les records malformés ou hors alphabet sont sautés (et
    logués) si `skip_malformed`, sinon l'erreur remonte et rien n'est publié.
    """
    cfg = cfg or CodecConfig.from_env()
    out_path = Path(out_path)

    total = 0
    records = 0
    with FastqReader(fastq_path, skip_malformed=skip_malformed) as fq:
        for rec in fq:
            if _usable(rec, cfg.strand, skip_malformed):
                total += len(rec.sequence)
                records += 1
        skipped = fq.skipped + (fq.records_read - records)

    tmp = out_path.with_suffix(out_path.suffix + ".tmp")
    tmp.parent.mkdir(parents=True, exist_ok=True)
    try:
        with GLexWriter(tmp, cfg.bit_width, total, cfg.strand) as w:
            with FastqReader(fastq_path, skip_malformed=True) as fq:
                for rec in fq:
                    # quiet second pass: rejects were already logged
                    try:
                        validate(rec.sequence, cfg.strand)
                    except InvalidSymbol:
                        continue
                    w.write(rec.sequence)
        os.replace(tmp, out_path)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise

    size = out_path.stat().st_size
    return {
        "records": records,
        "skipped": skipped,
        "symbols": total,
        "bytes": size,
        "bits_per_symbol": (8.0 * size / total) if total else 0.0,
        "header": w.header.to_dict(),
    }

def decompress(
    glex_path: Path | str,
    out_path: Path | str | None = None,
    strand: Strand = Strand.DNA,
    line_width: int = 0,
) -> str:
    """.glex -> séquence ; écrite en texte (option: lignes de `line_width`) si `out_path`."""
    seq = read_sequence(glex_path, strand)
    if out_path is not None:
        if line_width > 0:
            lines = [seq[i:i + line_width] for i in range(0, len(seq), line_width)]
        else:
            lines = [seq]
        atomic_write(out_path, ("\n".join(lines) + "\n").encode("ascii"))
    return seq
