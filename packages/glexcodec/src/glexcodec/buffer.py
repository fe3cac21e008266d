# packages/glexcodec/src/glexcodec/buffer.py
from __future__ import annotations

import numpy as np

from .errors import BufferOverflow, BufferUnderflow

__all__ = ["SymbolBuffer"]


class SymbolBuffer:
    """
    Buffer de report à capacité fixe (anneau indexé, octets ASCII).

    Appartient à un seul lecteur/écrivain. Capacité = `segment_length` :
    côté écriture il accumule un segment incomplet, côté lecture il garde les
    symboles décodés mais pas encore livrés.
    """

    __slots__ = ("_buf", "_head", "_size")

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError("SymbolBuffer capacity must be > 0")
        self._buf = np.zeros(int(capacity), dtype=np.uint8)
        self._head = 0
        self._size = 0

    @property
    def capacity(self) -> int:
        return int(self._buf.size)

    @property
    def free(self) -> int:
        return self.capacity - self._size

    def __len__(self) -> int:
        return self._size

    def push(self, symbols: str) -> int:
        """Ajoute `symbols` en queue ; retourne le nombre de symboles ajoutés."""
        n = len(symbols)
        if n == 0:
            return 0
        if n > self.free:
            raise BufferOverflow(f"push of {n} symbols exceeds free space ({self.free})")
        data = np.frombuffer(symbols.encode("ascii"), dtype=np.uint8)
        cap = self.capacity
        tail = (self._head + self._size) % cap
        first = min(n, cap - tail)
        self._buf[tail:tail + first] = data[:first]
        self._buf[:n - first] = data[first:]
        self._size += n
        return n

    def pop(self, n: int) -> str:
        """Retire et retourne les `n` plus anciens symboles."""
        if n < 0:
            raise ValueError("pop: n must be >= 0")
        if n > self._size:
            raise BufferUnderflow(f"pop of {n} symbols but only {self._size} buffered")
        if n == 0:
            return ""
        cap = self.capacity
        first = min(n, cap - self._head)
        raw = self._buf[self._head:self._head + first].tobytes() + self._buf[:n - first].tobytes()
        self._head = (self._head + n) % cap
        self._size -= n
        return raw.decode("ascii")

    def clear(self) -> None:
        self._head = 0
        self._size = 0

    def __repr__(self) -> str:
        return f"SymbolBuffer(size={self._size}, capacity={self.capacity})"
