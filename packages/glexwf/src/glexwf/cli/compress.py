from __future__ import annotations
import argparse, json, logging, sys
from pathlib import Path

from glexcodec import CodecConfig, BIT_WIDTHS

from .common import setup_logging, ensure_dir, list_fastq
from ..api import compress_fastq, glex_name, looks_like_glex

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="GLex — Compress FASTQ sequences -> .glex")
    p.add_argument("inputs", nargs="+", help="Fichiers FASTQ ou dossiers")
    p.add_argument("--out", required=True, help="Dossier de sortie .glex")
    p.add_argument("--bits", type=int, choices=BIT_WIDTHS, default=None,
                   help="Largeur des segments (défaut: ENV GLEX_BIT_WIDTH ou 64)")
    p.add_argument("--strand", choices=("dna", "rna"), default=None,
                   help="Alphabet (défaut: ENV GLEX_STRAND ou dna)")
    p.add_argument("--strict", action="store_true", help="Échec sur record malformé au lieu de le sauter")
    p.add_argument("--resume", action="store_true", help="Skip si sortie existe et valide")
    p.add_argument("--stats-jsonl", default=None, help="(Optionnel) JSONL stats par fichier")
    p.add_argument("--log-file", default=None)
    p.add_argument("--verbose", action="store_true")
    return p.parse_args(argv)

def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(Path(args.log_file) if args.log_file else None, verbose=args.verbose)
    cfg = CodecConfig.from_env(bit_width=args.bits, strand=args.strand)

    out_dir = Path(args.out); ensure_dir(out_dir)
    inputs = list_fastq(args.inputs)
    if not inputs:
        logging.error("Aucun FASTQ trouvé dans %s", args.inputs); return 2

    ok = 0
    for i, path in enumerate(inputs, 1):
        out = out_dir / glex_name(path)
        if args.resume and out.exists() and looks_like_glex(out):
            logging.info("[%d/%d] skip: %s", i, len(inputs), out)
            ok += 1; continue
        try:
            logging.info("[%d/%d] compress: %s (u%d, %s)", i, len(inputs), path, cfg.bit_width, cfg.strand.name)
            stats = compress_fastq(path, out, cfg, skip_malformed=not args.strict)
            if args.stats_jsonl:
                Path(args.stats_jsonl).parent.mkdir(parents=True, exist_ok=True)
                with open(args.stats_jsonl, "a", encoding="utf-8") as f:
                    f.write(json.dumps({"event": "compress_done", "path": str(out), **stats}, ensure_ascii=False) + "\n")
            logging.info("→ OK %d records (%d skipped), %.3f bits/symbol → %s",
                         stats["records"], stats["skipped"], stats["bits_per_symbol"], out)
            ok += 1
        except Exception as e:
            logging.exception("Échec compression %s: %s", path, e)

    logging.info("Terminé: %d/%d compressés", ok, len(inputs))
    return 0 if ok == len(inputs) else 1

if __name__ == "__main__":
    sys.exit(main())
