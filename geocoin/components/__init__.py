"""geocoin.components
=================================

Aggregate import surface for the value objects the game state is built from.

Every class here is a frozen ``@dataclass``: :class:`Cell` and :class:`LatLng`
locate things, :class:`Coin` is the collectible token, and :class:`Cache` is
the active form of a cell's coin stash. Systems in :mod:`geocoin.systems`
create new instances rather than mutating them::

    from geocoin.components import Cache, Cell, Coin, LatLng

"""

from .cell import Cell
from .coordinate import LatLng
from .coin import Coin
from .cache import Cache

__all__ = [
    "Cache",
    "Cell",
    "Coin",
    "LatLng",
]
