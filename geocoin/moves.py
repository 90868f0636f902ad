"""Built-in movement functions.

A *move function* maps ``(state, action)`` to the coordinate the player
steps to for one directional action. The indirection lets a session swap the
step pattern (e.g. a larger stride for testing) without touching the
reducer.

Contract (``MoveFn``):

* Must return a ``LatLng``.
* Should not mutate ``State``.
"""

from typing import Dict, Tuple

from geocoin.actions import Action, MOVE_ACTIONS
from geocoin.components import LatLng
from geocoin.state import State
from geocoin.types import MoveFn

# (dlat, dlng) unit vectors: up is north, right is east.
DIRECTIONS: Dict[Action, Tuple[int, int]] = {
    Action.UP: (1, 0),
    Action.DOWN: (-1, 0),
    Action.LEFT: (0, -1),
    Action.RIGHT: (0, 1),
}


def default_move_fn(state: State, action: Action) -> LatLng:
    """Step ``config.move_increment`` degrees along one axis."""
    if action not in MOVE_ACTIONS:
        raise ValueError(f"{action!r} is not a movement action")
    dlat, dlng = DIRECTIONS[action]
    increment = state.config.move_increment
    return state.position.offset(dlat * increment, dlng * increment)


def tile_move_fn(state: State, action: Action) -> LatLng:
    """Step exactly one tile width, whatever ``move_increment`` says."""
    if action not in MOVE_ACTIONS:
        raise ValueError(f"{action!r} is not a movement action")
    dlat, dlng = DIRECTIONS[action]
    width = state.board.tile_width
    return state.position.offset(dlat * width, dlng * width)


MOVE_FN_REGISTRY: Dict[str, MoveFn] = {
    "default": default_move_fn,
    "tile": tile_move_fn,
}
