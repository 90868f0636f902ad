"""Initial state construction.

A *level* here is simply a fresh session: the player at the configured start
coordinate with nothing carried, nothing remembered and nothing active. Call
:func:`geocoin.step.start` on the result to populate the active set.
"""

from typing import Optional

from geocoin.board import Board
from geocoin.config import DEFAULT_CONFIG, GameConfig
from geocoin.moves import MOVE_FN_REGISTRY
from geocoin.state import State
from geocoin.types import MoveFn


def initial_state(
    config: GameConfig = DEFAULT_CONFIG,
    move_fn: Optional[MoveFn] = None,
    board: Optional[Board] = None,
) -> State:
    """Build a pristine ``State`` for ``config``.

    Args:
        config (GameConfig): Gameplay tunables.
        move_fn (MoveFn | None): Movement function; defaults to the one
            ``config.movement`` names.
        board (Board | None): Pre-built board; one matching ``config`` is
            created when omitted.

    Returns:
        State: Fresh state positioned at ``config.start``.

    Raises:
        ValueError: If ``config.movement`` names no known move function.
    """
    if move_fn is None:
        try:
            move_fn = MOVE_FN_REGISTRY[config.movement]
        except KeyError:
            raise ValueError(
                f"Unknown movement {config.movement!r}; "
                f"expected one of {sorted(MOVE_FN_REGISTRY)}"
            ) from None
    if board is None:
        board = Board(config.tile_width, config.visibility_radius)
    return State(
        config=config,
        board=board,
        move_fn=move_fn,
        position=config.start,
    )
