"""Coin component.

A coin is the collectible token held either by exactly one cache or by the
player's inventory. Its id ``"{i}:{j}#{k}"`` is minted once, when the cache at
cell ``(i, j)`` first materializes, and never changes; the id is the coin's
complete state.
"""

from dataclasses import dataclass

from geocoin.components.cell import Cell
from geocoin.types import CoinID


@dataclass(frozen=True)
class Coin:
    """Collectible token.

    Attributes:
        id: Stable identifier ``"{i}:{j}#{k}"``.
    """

    id: CoinID

    @classmethod
    def mint(cls, cell: Cell, serial: int) -> "Coin":
        return cls(id=f"{cell.i}:{cell.j}#{serial}")

    @property
    def origin(self) -> Cell:
        """Cell whose cache first minted this coin."""
        location, _, _ = self.id.partition("#")
        i, _, j = location.partition(":")
        return Cell(int(i), int(j))

    @property
    def serial(self) -> int:
        return int(self.id.rpartition("#")[2])
