"""Deterministic luck function.

``luck(key)`` maps a string to a reproducible float in ``[0, 1)``. Cache
existence and initial size are both derived from it, keyed by the cell's
``"i,j"`` string, so the same cell always rolls the same way in every process
and every run.

The generator is the seeded ARC4 stream popularised by ``seedrandom``: the
key's UTF-16 code units are mixed into a 256-byte RC4 key, the first 256
output bytes are discarded (RC4-drop[256]), and one draw gathers 52
significant bits. Results therefore match, bit for bit, the values the game
has always produced for a given cell; swapping in ``random.Random`` or a
digest would move every cache on the map.

Examples
--------
>>> luck("hello.")
0.9282578795792454
"""

import math
from functools import lru_cache
from typing import List

from geocoin.components.cell import Cell

WIDTH = 256  # byte alphabet
CHUNKS = 6  # bytes in the first numerator
DIGITS = 52  # significant bits per draw
MASK = WIDTH - 1

START_DENOM = WIDTH**CHUNKS
SIGNIFICANCE = 2**DIGITS
OVERFLOW = SIGNIFICANCE * 2


def _code_units(text: str) -> List[int]:
    """Return the UTF-16 code units of ``text``."""
    data = text.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(data[k : k + 2], "little") for k in range(0, len(data), 2)]


def _mix_key(seed: str) -> List[int]:
    """Smear ``seed`` into an RC4 key of at most ``WIDTH`` bytes."""
    key: List[int] = []
    smear = 0
    for j, code in enumerate(_code_units(seed)):
        index = MASK & j
        if index < len(key):
            smear ^= key[index] * 19
            key[index] = MASK & (smear + code)
        else:
            # unset slots contribute nothing to the smear
            key.append(MASK & (smear + code))
    return key


class _ARC4:
    """RC4 keystream generator with the initial 256 bytes dropped."""

    def __init__(self, key: List[int]) -> None:
        if not key:
            key = [0]
        s = list(range(WIDTH))
        j = 0
        for i in range(WIDTH):
            t = s[i]
            j = MASK & (j + key[i % len(key)] + t)
            s[i] = s[j]
            s[j] = t
        self.s = s
        self.i = 0
        self.j = 0
        self._drop(WIDTH)

    def _next_byte(self) -> int:
        s = self.s
        self.i = i = MASK & (self.i + 1)
        t = s[i]
        self.j = j = MASK & (self.j + t)
        s[i] = s[j]
        s[j] = t
        return s[MASK & (s[i] + s[j])]

    def _drop(self, count: int) -> None:
        for _ in range(count):
            self._next_byte()

    def next_int(self, count: int) -> int:
        """Return the next ``count`` bytes as one big-endian integer."""
        r = 0
        for _ in range(count):
            r = r * WIDTH + self._next_byte()
        return r


@lru_cache(maxsize=4096)
def luck(key: str) -> float:
    """Return the first draw of the generator seeded with ``key``.

    Pure and referentially transparent: the same ``key`` always yields the
    same value in ``[0, 1)``.
    """
    arc4 = _ARC4(_mix_key(key))
    n = arc4.next_int(CHUNKS)
    d = START_DENOM
    x = 0
    while n < SIGNIFICANCE:
        n = (n + x) * WIDTH
        d *= WIDTH
        x = arc4.next_int(1)
    while n >= OVERFLOW:
        n //= 2
        d //= 2
        x >>= 1
    return (n + x) / d


def cell_luck(cell: Cell) -> float:
    """Luck roll for ``cell``, keyed by its ``"i,j"`` string."""
    return luck(cell.key)


def cache_exists(cell: Cell, spawn_probability: float) -> bool:
    """Return True if a never-seen ``cell`` holds a cache."""
    return cell_luck(cell) < spawn_probability


def initial_coin_count(cell: Cell, max_coins: int) -> int:
    """Number of coins a freshly generated cache at ``cell`` starts with."""
    return math.floor(cell_luck(cell) * max_coins)
