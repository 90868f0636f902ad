"""Core immutable game ``State`` dataclass.

This module defines the frozen :class:`State` object that represents the
entire game snapshot between two player events. All systems are pure
functions that take a previous ``State`` plus inputs (a direction, a cell, a
coin id) and return a *new* ``State``; no mutation happens in-place. A
transition is therefore atomic: either the whole new snapshot is adopted or
none of it is.

Design notes:

* Stores are **persistent collections** (``pyrsistent.PMap`` / ``PVector``).
  ``directory`` maps every cell ever materialized to its memento and is the
  durable source of truth for cache contents; ``active`` maps the cells near
  the player to their instantiated :class:`~geocoin.components.Cache`.
* Write-through: any transition that changes an active cache replaces its
  ``directory`` entry in the same ``replace`` call, so the directory is never
  stale relative to ``active``.
* ``activated`` / ``deactivated`` are per-recompute event logs populated by
  the visibility system; ``updated`` lists active caches whose contents a
  pickup or deposit changed. The session forwards all three to the renderer.
* ``message`` carries the report of the latest no-op (empty deposit, unknown
  coin) and is cleared by the next action.

See :mod:`geocoin.step` for how the entry points orchestrate systems.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from pyrsistent import pmap, pvector
from pyrsistent.typing import PMap, PVector

from geocoin.board import Board
from geocoin.components import Cache, Cell, Coin, LatLng
from geocoin.config import GameConfig
from geocoin.types import Memento, MoveFn


@dataclass(frozen=True)
class State:
    """Immutable game state.

    Instances are *value objects*; every transition creates a new ``State``.
    Only include data that belongs to the game here (no open handles or
    collaborators).

    Attributes:
        config (GameConfig): Gameplay tunables.
        board (Board): Cell grid used for all coordinate/cell conversions.
        move_fn (MoveFn): Resolves a directional action to the next coordinate.
        position (LatLng): Current player coordinate.
        inventory (PVector[Coin]): Coins carried by the player, oldest first.
        trail (PVector[LatLng]): Every coordinate the player moved to, in order.
        directory (PMap[Cell, Memento]): Last known contents of every
            materialized cache, active or not.
        active (PMap[Cell, Cache]): Caches currently instantiated near the player.
        activated (PVector[Cell]): Cells activated by the latest recompute.
        deactivated (PVector[Cell]): Cells deactivated by the latest recompute.
        updated (PVector[Cell]): Active cells whose cache contents the latest
            action changed.
        message (str | None): Report of the latest no-op action.
    """

    # Level
    config: GameConfig
    board: Board
    move_fn: "MoveFn"

    # Player
    position: LatLng
    inventory: PVector[Coin] = pvector()
    trail: PVector[LatLng] = pvector()

    # Caches
    directory: PMap[Cell, Memento] = pmap()
    active: PMap[Cell, Cache] = pmap()

    # Events of the latest action
    activated: PVector[Cell] = pvector()
    deactivated: PVector[Cell] = pvector()
    updated: PVector[Cell] = pvector()

    # Status
    message: Optional[str] = None

    @property
    def description(self) -> Dict[str, Any]:
        """Compact summary for logs and debugging."""
        return {
            "position": self.position.to_dict(),
            "inventory": len(self.inventory),
            "trail": len(self.trail),
            "directory": len(self.directory),
            "active": sorted(cell.key for cell in self.active),
        }
