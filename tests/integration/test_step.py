# tests/integration/test_step.py

from dataclasses import replace

import pytest

from geocoin.actions import Action
from geocoin.components import Cache, Cell, LatLng
from geocoin.config import GameConfig
from geocoin.luck import initial_coin_count
from geocoin.moves import tile_move_fn
from geocoin.state import State
from geocoin import step as step_module
from geocoin.step import deposit, move, pickup, relocate, reset, start, step
from geocoin.utils.directory import clear_directory
from tests.test_utils import (
    CROWDED_CONFIG,
    all_coin_ids,
    cell_center,
    make_cache_state,
    make_state,
)


def _crowded_start(origin: Cell = Cell(5, 10)) -> State:
    return start(make_state(CROWDED_CONFIG, cell_center(origin), move_fn=tile_move_fn))


def _cell_with_coins(state: State) -> Cell:
    return next(cell for cell in sorted(state.active) if len(state.active[cell].coins) > 0)


def test_start_populates_without_moving() -> None:
    state = _crowded_start()
    assert len(state.active) == 9
    assert len(state.trail) == 0


def test_move_records_trail_and_recomputes() -> None:
    state = _crowded_start()
    state = move(state, Action.RIGHT)
    state = move(state, Action.UP)
    assert len(state.trail) == 2
    assert state.trail[-1] == state.position
    origin = state.board.cell_of(state.position)
    assert origin == Cell(6, 11)
    assert set(state.active) == set(state.board.cells_near(state.position))


def test_leaving_and_returning_restores_contents() -> None:
    state = _crowded_start()
    cell = _cell_with_coins(state)
    coin_id = state.active[cell].coins[0].id
    state = pickup(state, cell, coin_id)
    memento = state.directory[cell]
    expected = state.active[cell]

    for _ in range(3):
        state = move(state, Action.RIGHT)
    assert cell not in state.active
    assert state.directory[cell] == memento

    for _ in range(3):
        state = move(state, Action.LEFT)
    assert state.active[cell] == expected
    assert state.active[cell].find(coin_id) is None


def test_reset_returns_to_pristine_world() -> None:
    config = GameConfig(spawn_probability=1.0, max_coins=10, visibility_radius=1)
    state = start(make_state(config, move_fn=tile_move_fn))
    cell = _cell_with_coins(state)
    state = pickup(state, cell, state.active[cell].coins[0].id)
    state = move(state, Action.UP)
    previously_active = set(state.active)

    state = reset(state)
    assert state.position == config.start
    assert len(state.inventory) == 0
    assert len(state.trail) == 0
    assert set(state.deactivated) == previously_active
    assert set(state.directory) == set(state.active)
    assert state.active[cell] == Cache.fresh(cell, initial_coin_count(cell, 10))


def test_reset_clears_directory_through_helper(monkeypatch: pytest.MonkeyPatch) -> None:
    cleared: list[int] = []

    def recording_clear(state: State) -> State:
        cleared.append(len(state.directory))
        return clear_directory(state)

    monkeypatch.setattr(step_module, "clear_directory", recording_clear)
    state = _crowded_start()
    state = reset(state)
    assert cleared == [9]


def test_step_dispatch() -> None:
    state = make_cache_state(Cell(5, 10), count=3)
    state = step(state, Action.PICK_UP, cell=Cell(5, 10), coin_id="5:10#1")
    assert [coin.id for coin in state.inventory] == ["5:10#1"]
    state = step(state, Action.DEPOSIT, cell=Cell(5, 10))
    assert len(state.inventory) == 0
    state = step(state, Action.DOWN)
    assert state.board.cell_of(state.position) == Cell(4, 10)
    state = step(state, Action.RESET)
    assert len(state.trail) == 0


def test_step_requires_arguments() -> None:
    state = make_cache_state()
    with pytest.raises(ValueError):
        step(state, Action.PICK_UP, cell=Cell(5, 10))
    with pytest.raises(ValueError):
        step(state, Action.DEPOSIT)
    with pytest.raises(ValueError):
        move(state, Action.RESET)


def test_invalid_relocation_leaves_state_untouched() -> None:
    state = make_cache_state()
    with pytest.raises(ValueError):
        relocate(state, LatLng(float("nan"), 0.0))
    assert len(state.trail) == 0


def test_message_only_describes_latest_action() -> None:
    state = make_cache_state()
    state = deposit(state, Cell(5, 10))
    assert state.message == "No coins in inventory to deposit"
    state = pickup(state, Cell(5, 10), "5:10#0")
    assert state.message is None


def test_events_cleared_by_non_moving_actions() -> None:
    state = _crowded_start()
    assert len(state.activated) == 9
    cell = _cell_with_coins(state)
    state = pickup(state, cell, state.active[cell].coins[0].id)
    assert len(state.activated) == 0
    assert len(state.deactivated) == 0
    assert list(state.updated) == [cell]
    state = move(state, Action.UP)
    assert len(state.updated) == 0


def test_conservation_across_movement() -> None:
    state = _crowded_start()
    cell = _cell_with_coins(state)
    state = pickup(state, cell, state.active[cell].coins[0].id)
    before = all_coin_ids(state)
    for action in [Action.LEFT, Action.LEFT, Action.UP, Action.RIGHT, Action.RIGHT]:
        state = move(state, action)
        # Newly generated caches add coins; everything seen before is unchanged.
        assert set(before) <= set(all_coin_ids(state))
    state = deposit(state, state.board.cell_of(state.position))
    after = all_coin_ids(state)
    assert len(after) == len(set(after))


def test_directory_entry_not_regenerated_after_emptying() -> None:
    state = make_cache_state(Cell(5, 10), count=1, config=CROWDED_CONFIG)
    state = pickup(state, Cell(5, 10), "5:10#0")
    state = replace(state, move_fn=tile_move_fn)
    for action in [Action.UP] * 3 + [Action.DOWN] * 3:
        state = move(state, action)
    assert state.active[Cell(5, 10)].coin_ids == ()
