"""Common type aliases.

``MoveFn`` is the extension point stored on the ``State`` that turns a
directional action into the player's next coordinate. ``Memento`` is the
compact serialized contents of a cache as kept in the cache directory and in
durable storage.
"""

from typing import Callable, TYPE_CHECKING


# Forward declaration for MoveFn typing to avoid circular imports:
if TYPE_CHECKING:
    from geocoin.state import State
    from geocoin.actions import Action
    from geocoin.components import LatLng

CoinID = str
Memento = str

MoveFn = Callable[["State", "Action"], "LatLng"]
