"""Movement system.

Moves the player to a destination coordinate and records the movement on the
trail. The trail is append-only: every movement event adds one entry, with
no deduplication, until an explicit reset clears it.
"""

from dataclasses import replace

from geocoin.components import LatLng
from geocoin.state import State


def movement_system(state: State, destination: LatLng) -> State:
    """Place the player at ``destination`` and append it to the trail.

    Args:
        state (State): Current immutable state.
        destination (LatLng): New player coordinate.

    Returns:
        State: New state with ``position`` and ``trail`` updated.
    """
    return replace(
        state,
        position=destination,
        trail=state.trail.append(destination),
    )
