from dataclasses import replace
from typing import Iterable, List, Optional, Tuple

from pyrsistent import pmap, pvector

from geocoin.components import Cache, Cell, Coin, LatLng
from geocoin.config import GameConfig
from geocoin.levels import initial_state
from geocoin.moves import tile_move_fn
from geocoin.state import State
from geocoin.types import MoveFn

TILE = 1e-4

# No cache ever spawns from luck: only what a test puts in the directory exists.
QUIET_CONFIG = GameConfig(spawn_probability=0.0)
# Every cell holds a cache; small neighbourhood keeps the active set readable.
CROWDED_CONFIG = GameConfig(spawn_probability=1.0, max_coins=10, visibility_radius=1)


def cell_center(cell: Cell, tile_width: float = TILE) -> LatLng:
    return LatLng((cell.i + 0.5) * tile_width, (cell.j + 0.5) * tile_width)


def make_state(
    config: GameConfig = QUIET_CONFIG,
    position: Optional[LatLng] = None,
    move_fn: Optional[MoveFn] = None,
) -> State:
    """Fresh state, optionally moved to ``position`` without recording a trail."""
    state = initial_state(config, move_fn=move_fn)
    if position is not None:
        state = replace(state, position=position)
    return state


def make_cache(cell: Cell, count: int) -> Cache:
    return Cache.fresh(cell, count)


def make_cache_state(
    cell: Cell = Cell(5, 10),
    count: int = 5,
    inventory: Iterable[str] = (),
    config: GameConfig = QUIET_CONFIG,
) -> State:
    """Player standing in ``cell`` with one active cache of ``count`` coins."""
    cache = make_cache(cell, count)
    state = make_state(config, position=cell_center(cell), move_fn=tile_move_fn)
    return replace(
        state,
        inventory=pvector(Coin(coin_id) for coin_id in inventory),
        active=pmap({cell: cache}),
        directory=pmap({cell: cache.to_memento()}),
    )


def all_coin_ids(state: State) -> List[str]:
    """Sorted coin ids across the inventory and every directory entry."""
    ids = [coin.id for coin in state.inventory]
    for cell, memento in state.directory.items():
        ids.extend(Cache.from_memento(cell, memento).coin_ids)
    return sorted(ids)


class RecordingRenderer:
    """Renderer double keeping every notification in order."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, Cell]] = []
        self.shown: dict[Cell, Cache] = {}

    def on_cache_activated(self, cell: Cell, cache: Cache) -> None:
        self.events.append(("activated", cell))
        self.shown[cell] = cache

    def on_cache_updated(self, cell: Cell, cache: Cache) -> None:
        self.events.append(("updated", cell))
        self.shown[cell] = cache

    def on_cache_deactivated(self, cell: Cell) -> None:
        self.events.append(("deactivated", cell))
        self.shown.pop(cell, None)


class FailingRenderer(RecordingRenderer):
    """Records like ``RecordingRenderer`` but raises on every activation."""

    def on_cache_activated(self, cell: Cell, cache: Cache) -> None:
        super().on_cache_activated(cell, cache)
        raise RuntimeError(f"cannot draw {cell.key}")
