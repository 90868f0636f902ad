# tests/systems/test_movement_system.py

from geocoin.components import LatLng
from geocoin.systems.movement import movement_system
from tests.test_utils import make_state


def test_moves_and_records_trail() -> None:
    state = make_state(position=LatLng(0.0, 0.0))
    state = movement_system(state, LatLng(1.0, 0.0))
    state = movement_system(state, LatLng(1.0, 1.0))
    assert state.position == LatLng(1.0, 1.0)
    assert list(state.trail) == [LatLng(1.0, 0.0), LatLng(1.0, 1.0)]


def test_trail_keeps_duplicates() -> None:
    state = make_state(position=LatLng(0.0, 0.0))
    for _ in range(3):
        state = movement_system(state, LatLng(2.0, 2.0))
    assert len(state.trail) == 3
