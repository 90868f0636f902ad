"""Action enumerations.

:class:`Action` names the logical entry points a front end can drive:
the four compass moves plus the cache interactions and the full reset.

``MOVE_ACTIONS`` is the canonical ordered list of movement actions; checks like
``if action in MOVE_ACTIONS`` are preferred over enum name comparisons.
"""

from enum import StrEnum, auto


class Action(StrEnum):
    """String enum of player actions.

    Members:
        UP, DOWN, LEFT, RIGHT: Movement directions (north, south, west, east).
        PICK_UP: Take a named coin out of an active cache.
        DEPOSIT: Put the oldest inventory coin into an active cache.
        RESET: Forget all progress and return to the start coordinate.
    """

    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    PICK_UP = auto()
    DEPOSIT = auto()
    RESET = auto()


MOVE_ACTIONS = [Action.UP, Action.DOWN, Action.LEFT, Action.RIGHT]
