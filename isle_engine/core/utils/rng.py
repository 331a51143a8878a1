# isle_engine/core/utils/rng.py
from __future__ import annotations
import math
from typing import Any, List, Optional, Sequence, Tuple, TypeVar, Union

T = TypeVar("T")

_MASK64 = 0xFFFFFFFFFFFFFFFF
# golden ratio for 64-bit
_DEF_CONST = 0x9E3779B97F4A7C15


def _splitmix64(x: int) -> int:
    x = (x + _DEF_CONST) & _MASK64
    z = x
    z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 & _MASK64
    z = (z ^ (z >> 27)) * 0x94D049BB133111EB & _MASK64
    return z ^ (z >> 31)


def seed_from_any(x: Union[int, str, bytes]) -> int:
    """FNV-1a over the UTF-8 bytes of a string seed (ints pass through)."""
    if isinstance(x, int):
        return x & _MASK64
    if isinstance(x, bytes):
        acc = 0xCBF29CE484222325
        for b in x:
            acc ^= b
            acc = (acc * 0x100000001B3) & _MASK64
        return acc
    if isinstance(x, str):
        return seed_from_any(x.encode("utf-8"))
    raise TypeError("Unsupported seed type")


def hash64(*vals: int) -> int:
    h = 0x84222325CBF29CE4
    for v in vals:
        h ^= v & _MASK64
        h = _splitmix64(h)
    return h


class DeterministicRNG:
    """
    Seeded pseudo-random stream. Output depends only on the seed string
    and the sequence of calls made on the instance.
    """

    __slots__ = ("seed", "state", "draws")

    def __init__(self, seed: str):
        self.seed = str(seed)
        self.state = seed_from_any(self.seed)
        self.draws = 0

    def sub(self, scope: str) -> "DeterministicRNG":
        """Child stream seeded with '<seed>:<scope>'; the parent is not advanced."""
        return DeterministicRNG(f"{self.seed}:{scope}")

    def u64(self) -> int:
        self.state = _splitmix64(self.state)
        self.draws += 1
        return self.state

    def random(self) -> float:
        return (self.u64() >> 11) * (1.0 / (1 << 53))

    def random_int(self, lo: int, hi: int) -> int:
        if lo > hi:
            lo, hi = hi, lo
        return lo + int(math.floor(self.random() * (hi - lo + 1)))

    def random_float(self, lo: float, hi: float) -> float:
        return lo + self.random() * (hi - lo)

    def random_bool(self, probability: float = 0.5) -> bool:
        return self.random() < probability

    def random_element(self, seq: Sequence[T]) -> Optional[T]:
        if len(seq) == 0:
            return None
        return seq[self.random_int(0, len(seq) - 1)]

    def shuffle(self, seq: Sequence[T]) -> List[T]:
        out = list(seq)
        for i in range(len(out) - 1, 0, -1):
            j = int(math.floor(self.random() * (i + 1)))
            out[i], out[j] = out[j], out[i]
        return out

    def weighted_choice(self, items: Sequence[Tuple[T, float]]) -> Optional[T]:
        if not items:
            return None
        total = sum(w for _, w in items)
        r = self.random_float(0.0, total)
        for item, weight in items:
            r -= weight
            if r <= 0:
                return item
        return items[-1][0]

    def gaussian(self, mean: float = 0.0, std: float = 1.0) -> float:
        # 1 - u keeps the log argument in (0, 1]
        u1 = 1.0 - self.random()
        u2 = self.random()
        z0 = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
        return z0 * std + mean

    def deterministic_id(self, label: str) -> str:
        """
        UUID-shaped identifier built from the seed, the label and the draw
        counter. Advances the stream by one draw.
        """
        counter = self.draws
        h1 = hash64(seed_from_any(self.seed), seed_from_any(label), counter, self.u64())
        h2 = _splitmix64(h1 ^ _DEF_CONST)
        hx = f"{h1:016x}{h2:016x}"
        variant = "89ab"[int(hx[16], 16) & 3]
        return f"{hx[0:8]}-{hx[8:12]}-4{hx[13:16]}-{variant}{hx[17:20]}-{hx[20:32]}"

    def __repr__(self) -> str:
        return f"DeterministicRNG(seed={self.seed!r}, draws={self.draws})"


def rng_for(*parts: Any) -> DeterministicRNG:
    """Builds a generator whose seed is the ':'-joined parts."""
    return DeterministicRNG(":".join(str(p) for p in parts))
