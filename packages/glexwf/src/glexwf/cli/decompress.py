from __future__ import annotations
import argparse, logging, sys
from pathlib import Path

from glexcodec import CodecConfig

from .common import setup_logging, ensure_dir
from ..api import decompress

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="GLex — Decompress .glex -> séquence texte")
    p.add_argument("bitstreams", nargs="+", help="Fichiers .glex")
    p.add_argument("--out", required=True, help="Dossier de sortie")
    p.add_argument("--strand", choices=("dna", "rna"), default=None)
    p.add_argument("--wrap", type=int, default=0, help="Largeur de ligne (0 = une seule ligne)")
    p.add_argument("--log-file", default=None)
    p.add_argument("--verbose", action="store_true")
    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)
    strand = CodecConfig.from_env(strand=args.strand).strand

    out_dir = Path(args.out); ensure_dir(out_dir)
    ok = 0
    for i, p in enumerate(args.bitstreams, 1):
        p = Path(p)
        try:
            logging.info("[%d/%d] decompress: %s", i, len(args.bitstreams), p)
            out = out_dir / f"{p.stem}.seq"
            seq = decompress(p, out, strand=strand, line_width=args.wrap)
            logging.info("→ OK %d symbols → %s", len(seq), out)
            ok += 1
        except Exception as e:
            logging.exception("Échec decompress %s: %s", p, e)
    return 0 if ok == len(args.bitstreams) else 1

if __name__ == "__main__":
    sys.exit(main())
