"""Collectible system.

Moves coins between an active cache and the player's inventory. Two flows:

1. Pickup: the coin with the requested id leaves the cache and is appended
   to the inventory.
2. Deposit: the *oldest* inventory coin (front of the vector) leaves the
   inventory and is appended to the end of the cache.

Both flows write the cache's new memento to the directory in the same
transition (write-through) and list the cell in ``State.updated`` so the
session can redraw it. Coins are only ever moved, never minted or
destroyed, so the multiset of ids across inventory and directory is
invariant.

Requests that cannot be honoured (no active cache at the cell, unknown coin
id, empty inventory) return the state unchanged apart from ``message`` and
are logged; they are not errors.
"""

import logging
from dataclasses import replace

from geocoin.state import State
from geocoin.components import Cell
from geocoin.types import CoinID
from geocoin.utils.directory import write_through

logger = logging.getLogger(__name__)


def _report(state: State, message: str) -> State:
    logger.info(message)
    return replace(state, message=message)


def pickup_system(state: State, cell: Cell, coin_id: CoinID) -> State:
    """Transfer ``coin_id`` from the cache at ``cell`` to the inventory.

    Arguments:
        state:
            Current immutable state.
        cell:
            Cell of the active cache to take from.
        coin_id:
            Id of the coin to take.

    Returns:
        State
            Updated state with the coin moved and the directory entry flushed,
            or the unchanged state with a ``message`` when there is nothing to
            pick up.
    """
    cache = state.active.get(cell)
    if cache is None:
        return _report(state, f"No active cache at {cell.key}")
    coin = cache.find(coin_id)
    if coin is None:
        return _report(state, f"Coin {coin_id} is not in the cache at {cell.key}")

    logger.info("Collecting coin %s", coin.id)
    state = write_through(state, cache.without(coin_id))
    return replace(
        state,
        inventory=state.inventory.append(coin),
        updated=state.updated.append(cell),
        message=None,
    )


def deposit_system(state: State, cell: Cell) -> State:
    """Transfer the oldest inventory coin into the cache at ``cell``."""
    cache = state.active.get(cell)
    if cache is None:
        return _report(state, f"No active cache at {cell.key}")
    if len(state.inventory) == 0:
        return _report(state, "No coins in inventory to deposit")

    coin = state.inventory[0]
    logger.info("Depositing coin %s at %s", coin.id, cell.key)
    state = write_through(state, cache.with_coin(coin))
    return replace(
        state,
        inventory=state.inventory.delete(0),
        updated=state.updated.append(cell),
        message=None,
    )
