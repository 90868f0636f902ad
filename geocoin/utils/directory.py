"""Cache directory helpers.

The directory (``State.directory``) maps a cell to the memento of its cache.
An entry is created when a cell's cache is first generated and afterwards
only replaced by pickup / deposit (write-through) or by the flush that
happens when a cache is deactivated. Nothing ever removes a single entry;
``clear_directory`` exists for the explicit full reset.
"""

from dataclasses import replace
from typing import Optional

from pyrsistent import pmap

from geocoin.components import Cache, Cell
from geocoin.state import State
from geocoin.types import Memento


def get_memento(state: State, cell: Cell) -> Optional[Memento]:
    """Return the stored memento for ``cell`` or None if never materialized."""
    return state.directory.get(cell)


def put_memento(state: State, cell: Cell, memento: Memento) -> State:
    """Return a new state with ``cell``'s directory entry set to ``memento``."""
    return replace(state, directory=state.directory.set(cell, memento))


def clear_directory(state: State) -> State:
    """Return a new state with an empty directory."""
    return replace(state, directory=pmap())


def write_through(state: State, cache: Cache) -> State:
    """Store ``cache`` as active and flush its memento in one transition."""
    state = replace(state, active=state.active.set(cache.cell, cache))
    return put_memento(state, cache.cell, cache.to_memento())
