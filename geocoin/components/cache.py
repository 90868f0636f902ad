"""Cache component.

A cache is the ephemeral, *active* form of a cell's coin stash. It exists in
``State.active`` only while the player is near; its authoritative form is the
memento kept in ``State.directory``. Instances are immutable: taking a coin
out or putting one in yields a new ``Cache``.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from pyrsistent import pvector
from pyrsistent.typing import PVector

from geocoin.components.cell import Cell
from geocoin.components.coin import Coin
from geocoin.memento import decode_memento, encode_memento
from geocoin.types import CoinID, Memento


@dataclass(frozen=True)
class Cache:
    """Coins currently stored at a cell, in insertion order.

    Attributes:
        cell: Grid cell the cache sits in.
        coins: Ordered persistent vector of coins; deposits append at the end.
    """

    cell: Cell
    coins: PVector[Coin] = pvector()

    @classmethod
    def fresh(cls, cell: Cell, count: int) -> "Cache":
        """Materialize a never-seen cache with coins ``#0 .. #count-1``."""
        return cls(cell=cell, coins=pvector(Coin.mint(cell, k) for k in range(count)))

    @classmethod
    def from_memento(cls, cell: Cell, memento: Memento) -> "Cache":
        return cls(cell=cell).restore(memento)

    def restore(self, memento: Memento) -> "Cache":
        """Return a cache whose contents are replaced by ``memento``.

        Raises:
            MalformedMementoError: If ``memento`` is not a list of coin ids.
        """
        coins = pvector(Coin(coin_id) for coin_id in decode_memento(memento))
        return Cache(cell=self.cell, coins=coins)

    def to_memento(self) -> Memento:
        return encode_memento(self.coin_ids)

    @property
    def coin_ids(self) -> Tuple[CoinID, ...]:
        return tuple(coin.id for coin in self.coins)

    def find(self, coin_id: CoinID) -> Optional[Coin]:
        """Return the coin with ``coin_id`` if this cache holds it."""
        for coin in self.coins:
            if coin.id == coin_id:
                return coin
        return None

    def without(self, coin_id: CoinID) -> "Cache":
        """Return a cache with every coin matching ``coin_id`` removed."""
        return Cache(
            cell=self.cell,
            coins=pvector(coin for coin in self.coins if coin.id != coin_id),
        )

    def with_coin(self, coin: Coin) -> "Cache":
        """Return a cache with ``coin`` appended at the end."""
        return Cache(cell=self.cell, coins=self.coins.append(coin))
