# tests/systems/test_collectible_system.py

from geocoin.components import Cache, Cell, Coin
from geocoin.systems.collectible import deposit_system, pickup_system
from tests.test_utils import all_coin_ids, make_cache_state

CELL = Cell(5, 10)


def test_pickup_moves_coin_to_inventory() -> None:
    state = make_cache_state(CELL, count=5)
    new_state = pickup_system(state, CELL, "5:10#3")
    assert list(new_state.inventory) == [Coin("5:10#3")]
    assert new_state.active[CELL].coin_ids == ("5:10#0", "5:10#1", "5:10#2", "5:10#4")
    assert new_state.message is None


def test_pickup_writes_through() -> None:
    state = make_cache_state(CELL, count=5)
    new_state = pickup_system(state, CELL, "5:10#0")
    assert new_state.directory[CELL] == new_state.active[CELL].to_memento()
    assert Cache.from_memento(CELL, new_state.directory[CELL]) == new_state.active[CELL]


def test_touched_cache_is_listed_as_updated() -> None:
    state = make_cache_state(CELL, count=2, inventory=["1:1#0"])
    assert list(pickup_system(state, CELL, "5:10#1").updated) == [CELL]
    assert list(deposit_system(state, CELL).updated) == [CELL]
    assert len(pickup_system(state, CELL, "5:10#9").updated) == 0
    assert len(deposit_system(state, Cell(9, 9)).updated) == 0


def test_pickup_unknown_coin_is_reported_noop() -> None:
    state = make_cache_state(CELL, count=2)
    new_state = pickup_system(state, CELL, "5:10#9")
    assert new_state.active == state.active
    assert new_state.directory == state.directory
    assert new_state.inventory == state.inventory
    assert new_state.message is not None and "5:10#9" in new_state.message


def test_pickup_without_active_cache_is_reported_noop() -> None:
    state = make_cache_state(CELL, count=2)
    new_state = pickup_system(state, Cell(0, 0), "0:0#0")
    assert new_state.inventory == state.inventory
    assert new_state.message == "No active cache at 0,0"


def test_deposit_takes_oldest_coin_and_appends() -> None:
    state = make_cache_state(CELL, count=2, inventory=["1:1#0", "2:2#0"])
    new_state = deposit_system(state, CELL)
    assert list(new_state.inventory) == [Coin("2:2#0")]
    assert new_state.active[CELL].coin_ids == ("5:10#0", "5:10#1", "1:1#0")
    assert new_state.directory[CELL] == new_state.active[CELL].to_memento()


def test_deposit_with_empty_inventory_is_reported_noop() -> None:
    state = make_cache_state(CELL, count=2)
    new_state = deposit_system(state, CELL)
    assert new_state.active == state.active
    assert new_state.directory == state.directory
    assert new_state.message == "No coins in inventory to deposit"


def test_deposit_without_active_cache_is_reported_noop() -> None:
    state = make_cache_state(CELL, count=2, inventory=["1:1#0"])
    new_state = deposit_system(state, Cell(9, 9))
    assert new_state.inventory == state.inventory
    assert new_state.message == "No active cache at 9,9"


def test_pickup_then_deposit_returns_coin_to_the_end() -> None:
    state = make_cache_state(CELL, count=5)
    state = pickup_system(state, CELL, "5:10#3")
    assert list(state.inventory) == [Coin("5:10#3")]
    state = deposit_system(state, CELL)
    assert len(state.inventory) == 0
    assert state.active[CELL].coin_ids == (
        "5:10#0",
        "5:10#1",
        "5:10#2",
        "5:10#4",
        "5:10#3",
    )


def test_conservation() -> None:
    state = make_cache_state(CELL, count=4, inventory=["1:1#0"])
    before = all_coin_ids(state)
    state = pickup_system(state, CELL, "5:10#2")
    state = pickup_system(state, CELL, "5:10#0")
    state = deposit_system(state, CELL)
    state = pickup_system(state, CELL, "1:1#0")
    state = deposit_system(state, CELL)
    state = deposit_system(state, CELL)
    state = deposit_system(state, CELL)
    assert all_coin_ids(state) == before
