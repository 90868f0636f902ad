"""Reducer entry points.

This module wires systems together for every logical player event. Each
function is pure: it returns a *new* :class:`geocoin.state.State` and leaves
its input untouched, so a failure half-way (e.g. a non-finite coordinate)
never leaves a partially applied transition behind.

Ordering rationale:

1. ``message`` and the event logs (``activated``, ``deactivated``,
   ``updated``) are cleared; they only ever describe the latest action.
2. Position changes run ``movement_system`` (position + trail) and then
   ``visibility_system`` (evict, then spawn) before returning.
3. Pickup / deposit never move the player and therefore do not recompute
   visibility; they flush the touched cache to the directory themselves and
   list its cell in ``updated``.

:func:`step` dispatches an :class:`~geocoin.actions.Action` to the matching
entry point for callers that drive the game from an action stream.
"""

from dataclasses import replace
from typing import Optional

from pyrsistent import pmap, pvector

from geocoin.actions import Action, MOVE_ACTIONS
from geocoin.components import Cell, LatLng
from geocoin.state import State
from geocoin.systems.collectible import deposit_system, pickup_system
from geocoin.systems.movement import movement_system
from geocoin.systems.visibility import visibility_system
from geocoin.types import CoinID
from geocoin.utils.directory import clear_directory


def _begin(state: State) -> State:
    return replace(
        state,
        message=None,
        activated=pvector(),
        deactivated=pvector(),
        updated=pvector(),
    )


def start(state: State) -> State:
    """Populate the active set for the current position (session start)."""
    return visibility_system(_begin(state))


def relocate(state: State, destination: LatLng) -> State:
    """Handle one movement event to ``destination`` (e.g. a sensor update).

    Raises:
        ValueError: If ``destination`` is not a finite coordinate.
    """
    state = movement_system(_begin(state), destination)
    return visibility_system(state)


def move(state: State, action: Action) -> State:
    """Move one step in the direction of ``action``."""
    if action not in MOVE_ACTIONS:
        raise ValueError(f"{action!r} is not a movement action")
    return relocate(state, state.move_fn(state, action))


def pickup(state: State, cell: Cell, coin_id: CoinID) -> State:
    """Take ``coin_id`` out of the active cache at ``cell``."""
    return pickup_system(_begin(state), cell, coin_id)


def deposit(state: State, cell: Cell) -> State:
    """Put the oldest inventory coin into the active cache at ``cell``."""
    return deposit_system(_begin(state), cell)


def reset(state: State) -> State:
    """Forget inventory, trail, directory and active caches.

    The player returns to ``config.start`` and visibility is recomputed, so
    caches near the start re-spawn with pristine contents. Every cache that
    was active beforehand is reported in ``deactivated``.
    """
    previously_active = sorted(state.active.keys())
    state = replace(
        state,
        position=state.config.start,
        inventory=pvector(),
        trail=pvector(),
        active=pmap(),
        message=None,
        updated=pvector(),
    )
    state = visibility_system(clear_directory(state))
    return replace(state, deactivated=pvector(previously_active))


def step(
    state: State,
    action: Action,
    cell: Optional[Cell] = None,
    coin_id: Optional[CoinID] = None,
) -> State:
    """Apply one ``Action``.

    Args:
        state (State): Previous immutable state.
        action (Action): Action to apply.
        cell (Cell | None): Target cache cell for ``PICK_UP`` / ``DEPOSIT``.
        coin_id (CoinID | None): Coin to take for ``PICK_UP``.

    Returns:
        State: Next state snapshot.

    Raises:
        ValueError: If the action is unknown or lacks its arguments.
    """
    if action in MOVE_ACTIONS:
        return move(state, action)
    if action == Action.PICK_UP:
        if cell is None or coin_id is None:
            raise ValueError("PICK_UP requires a cell and a coin id")
        return pickup(state, cell, coin_id)
    if action == Action.DEPOSIT:
        if cell is None:
            raise ValueError("DEPOSIT requires a cell")
        return deposit(state, cell)
    if action == Action.RESET:
        return reset(state)
    raise ValueError("Action is not valid")
