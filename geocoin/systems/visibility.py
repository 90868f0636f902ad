"""Visibility (active-set) system.

Keeps ``State.active`` in step with the player's position. Run once when a
session starts and after every position change, it performs two passes:

1. Eviction: every active cache whose cell *centre* lies farther than
   ``config.eviction_distance`` metres (great-circle) from the player is
   flushed to the directory and dropped from the active set.
2. Spawning: every cell of ``board.cells_near(position)`` that is not active
   is looked up in the directory. A stored memento is restored as-is; a cell
   without an entry rolls :func:`~geocoin.luck.cache_exists` and, if lucky,
   materializes a fresh cache whose initial memento is written to the
   directory immediately. A cell with an entry is never re-rolled.

Spawn candidates come from the cell-count neighbourhood while eviction uses a
physical distance. With the default configuration the eviction distance is
smaller than one tile, so a recompute deactivates nearly every cache and
re-activates the ones still in the neighbourhood from their mementos.

Cells touched by each pass are recorded in ``State.deactivated`` and
``State.activated`` (reset at the start of every recompute).
"""

import logging
from dataclasses import replace
from typing import List, Optional

from pyrsistent import pvector

from geocoin.components import Cache, Cell
from geocoin.luck import cache_exists, initial_coin_count
from geocoin.state import State
from geocoin.utils.directory import get_memento, put_memento
from geocoin.utils.geo import distance

logger = logging.getLogger(__name__)


def materialize_cache(state: State, cell: Cell) -> Optional[Cache]:
    """Return the cache living at ``cell`` for this visit, if any.

    Restores from the directory when the cell has been seen before; otherwise
    generates a pristine cache from the cell's luck roll. Does not touch
    ``state``.
    """
    memento = get_memento(state, cell)
    if memento is not None:
        return Cache.from_memento(cell, memento)
    if not cache_exists(cell, state.config.spawn_probability):
        return None
    return Cache.fresh(cell, initial_coin_count(cell, state.config.max_coins))


def eviction_system(state: State) -> State:
    """Flush and deactivate caches beyond the eviction distance."""
    threshold = state.config.eviction_distance
    evicted: List[Cell] = []
    for cell in sorted(state.active.keys()):
        center = state.board.center_of(cell)
        if distance(state.position, center) > threshold:
            state = put_memento(state, cell, state.active[cell].to_memento())
            state = replace(state, active=state.active.remove(cell))
            evicted.append(cell)
    if evicted:
        logger.debug("Deactivated %d cache(s): %s", len(evicted), evicted)
    return replace(state, deactivated=state.deactivated.extend(evicted))


def spawn_system(state: State) -> State:
    """Activate caches for neighbourhood cells that are not yet active."""
    spawned: List[Cell] = []
    for cell in state.board.cells_near(state.position):
        if cell in state.active:
            continue
        restoring = get_memento(state, cell) is not None
        cache = materialize_cache(state, cell)
        if cache is None:
            continue
        if not restoring:
            state = put_memento(state, cell, cache.to_memento())
        state = replace(state, active=state.active.set(cell, cache))
        spawned.append(cell)
    if spawned:
        logger.debug("Activated %d cache(s): %s", len(spawned), spawned)
    return replace(state, activated=state.activated.extend(spawned))


def visibility_system(state: State) -> State:
    """Recompute the active set for the current player position.

    Args:
        state (State): State whose ``position`` was just updated.

    Returns:
        State: New state with ``active``, ``directory``, ``activated`` and
            ``deactivated`` updated.

    Raises:
        ValueError: If the player position is not a finite coordinate.
    """
    state = replace(state, activated=pvector(), deactivated=pvector())
    state = eviction_system(state)
    return spawn_system(state)
