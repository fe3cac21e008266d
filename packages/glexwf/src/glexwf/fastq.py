"""
FASTQ reader (sequence + quality per record).

Each record is a 4-line chunk:
1. header line ('@' + identifier), kept only as the record name
2. sequence line
3. separator line ('+'), ignored
4. quality line

A record whose quality line is missing, or whose quality length differs from
the sequence length, raises `FastqFormatError` for that record only; callers
iterating with `skip_malformed=True` log it and move on to the next record.
"""
from __future__ import annotations

import gzip
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, TextIO

from glexcodec.errors import GLexError

__all__ = ["FastqRecord", "FastqFormatError", "FastqReader", "open_text"]

log = logging.getLogger(__name__)


class FastqFormatError(GLexError):
    """Malformed FASTQ record (fatal for that record, not for the batch)."""


@dataclass
class FastqRecord:
    sequence: str
    quality: str
    name: str = ""

    def __len__(self) -> int:
        return len(self.sequence)


def open_text(path: str | Path) -> TextIO:
    """Open a FASTQ file as text; `.gz` files are decompressed on the fly."""
    p = Path(path)
    if p.suffix == ".gz":
        return io.TextIOWrapper(gzip.open(p, "rb"), encoding="ascii")
    return open(p, "r", encoding="ascii")


class FastqReader:
    def __init__(self, source: str | Path | TextIO, skip_malformed: bool = False):
        if hasattr(source, "readline"):
            self._fp = source
            self._owns = False
        else:
            self._fp = open_text(source)
            self._owns = True
        self.skip_malformed = skip_malformed
        self.records_read = 0
        self.skipped = 0

    def _next_header(self) -> Optional[str]:
        # tolerate blank lines between records and at end of file
        while True:
            line = self._fp.readline()
            if line == "":
                return None
            if line.strip():
                return line

    def read_record(self) -> Optional[FastqRecord]:
        """Next record, or None when the input is exhausted."""
        header = self._next_header()
        if header is None:
            return None
        sequence = self._fp.readline().strip()
        self._fp.readline()  # separator
        quality = self._fp.readline()
        name = header[1:].strip() if header.startswith("@") else header.strip()
        if quality == "":
            raise FastqFormatError(f"failed to read quality scores of sequence {name or sequence!r}")
        quality = quality.rstrip("\r\n")
        if len(quality) != len(sequence):
            raise FastqFormatError(
                f"record {name!r}: quality length {len(quality)} != sequence length {len(sequence)}"
            )
        self.records_read += 1
        return FastqRecord(sequence, quality, name)

    def __iter__(self) -> Iterator[FastqRecord]:
        while True:
            try:
                rec = self.read_record()
            except FastqFormatError as e:
                if not self.skip_malformed:
                    raise
                self.skipped += 1
                log.warning("skipping malformed FASTQ record: %s", e)
                continue
            if rec is None:
                return
            yield rec

    def close(self) -> None:
        if self._owns:
            self._fp.close()

    def __enter__(self) -> "FastqReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
