"""Game session: the stateful shell around the pure reducer.

:class:`GameSession` owns the current :class:`~geocoin.state.State` and the
three external collaborators:

* a :class:`~geocoin.renderer.CacheRenderer`, told about caches entering and
  leaving the active set and handed the new contents after pickup / deposit,
* a :class:`~geocoin.persistence.KeyValueStore`, loaded on :meth:`start` and
  written on :meth:`save` / :meth:`close` (and after every action when
  ``autosave`` is on),
* an optional :class:`~geocoin.sensor.PositionSensor`, whose updates become
  movement events while subscribed.

Every action runs to completion synchronously. The new ``State`` is adopted
*before* any collaborator is called; a failing collaborator therefore never
leaves the active set and directory out of sync. All notifications are
attempted, and the first failure is re-raised to the caller afterwards.

Usage:

``with GameSession(store=JsonFileStore("save.json")) as session:``
``    session.move(Action.UP)``
"""

import logging
from typing import Callable, List, Optional

from pyrsistent.typing import PVector

from geocoin.actions import Action
from geocoin.components import Cache, Cell, Coin, LatLng
from geocoin.config import DEFAULT_CONFIG, GameConfig
from geocoin.levels import initial_state
from geocoin.persistence import InMemoryStore, KeyValueStore, load_state, save_state
from geocoin.renderer import CacheRenderer, LoggingRenderer
from geocoin.sensor import PositionSensor
from geocoin.state import State
from geocoin.types import CoinID, MoveFn
from geocoin import step as reducer

logger = logging.getLogger(__name__)


class GameSession:
    """Single-player game session.

    Args:
        config (GameConfig): Gameplay tunables.
        store (KeyValueStore | None): Durable store; in-memory when omitted.
        renderer (CacheRenderer | None): Active-set observer; logs when omitted.
        sensor (PositionSensor | None): Optional position source.
        move_fn (MoveFn | None): Movement function override.
        autosave (bool): Persist after every action instead of only on
            :meth:`save` / :meth:`close`.
    """

    def __init__(
        self,
        config: GameConfig = DEFAULT_CONFIG,
        store: Optional[KeyValueStore] = None,
        renderer: Optional[CacheRenderer] = None,
        sensor: Optional[PositionSensor] = None,
        move_fn: Optional[MoveFn] = None,
        autosave: bool = False,
    ) -> None:
        self.config = config
        self.store: KeyValueStore = store if store is not None else InMemoryStore()
        self.renderer: CacheRenderer = renderer if renderer is not None else LoggingRenderer()
        self.sensor = sensor
        self.autosave = autosave
        self.state: State = initial_state(config, move_fn)
        self._sensor_handle: Optional[int] = None

    def __enter__(self) -> "GameSession":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def position(self) -> LatLng:
        return self.state.position

    @property
    def inventory(self) -> PVector[Coin]:
        return self.state.inventory

    @property
    def trail(self) -> PVector[LatLng]:
        return self.state.trail

    @property
    def message(self) -> Optional[str]:
        return self.state.message

    @property
    def sensor_active(self) -> bool:
        return self._sensor_handle is not None

    def active_cells(self) -> List[Cell]:
        return sorted(self.state.active.keys())

    def cache_at(self, cell: Cell) -> Optional[Cache]:
        return self.state.active.get(cell)

    def cell_of(self, point: LatLng) -> Cell:
        return self.state.board.cell_of(point)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------
    def start(self) -> State:
        """Load the saved game (if any) and populate the active set."""
        return self._apply(lambda state: reducer.start(load_state(self.store, state)))

    def move(self, direction: Action) -> State:
        """Move one step ``up`` / ``down`` / ``left`` / ``right``."""
        return self._apply(lambda state: reducer.move(state, Action(direction)))

    def relocate(self, point: LatLng) -> State:
        """Jump to ``point``; one sensor update."""
        return self._apply(lambda state: reducer.relocate(state, point))

    def pickup(self, cell: Cell, coin_id: CoinID) -> State:
        return self._apply(lambda state: reducer.pickup(state, cell, coin_id))

    def deposit(self, cell: Cell) -> State:
        return self._apply(lambda state: reducer.deposit(state, cell))

    def reset(self) -> State:
        """Forget all progress, including what the store holds."""
        return self._apply(reducer.reset, clear_store=True)

    def save(self) -> None:
        save_state(self.store, self.state)

    def close(self) -> None:
        """Stop the sensor and persist (session teardown)."""
        self.stop_sensor()
        self.save()

    # ------------------------------------------------------------------
    # Sensor
    # ------------------------------------------------------------------
    def start_sensor(self) -> None:
        if self.sensor is None:
            raise RuntimeError("No position sensor attached to this session")
        if self._sensor_handle is None:
            self._sensor_handle = self.sensor.subscribe(self.relocate)
            logger.info("Position sensor started")

    def stop_sensor(self) -> None:
        if self._sensor_handle is not None and self.sensor is not None:
            self.sensor.unsubscribe(self._sensor_handle)
            self._sensor_handle = None
            logger.info("Position sensor stopped")

    def toggle_sensor(self) -> bool:
        """Start the sensor if stopped, stop it if running; returns new status."""
        if self.sensor_active:
            self.stop_sensor()
        else:
            self.start_sensor()
        return self.sensor_active

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _apply(
        self, transition: Callable[[State], State], clear_store: bool = False
    ) -> State:
        new_state = transition(self.state)
        self.state = new_state

        errors: List[Exception] = []

        def attempt(call: Callable[[], None]) -> None:
            try:
                call()
            except Exception as exc:
                logger.exception("Collaborator failed")
                errors.append(exc)

        if clear_store:
            attempt(self.store.clear)
        for cell in new_state.deactivated:
            attempt(lambda cell=cell: self.renderer.on_cache_deactivated(cell))
        for cell in new_state.activated:
            cache = new_state.active[cell]
            attempt(lambda cell=cell, cache=cache: self.renderer.on_cache_activated(cell, cache))
        for cell in new_state.updated:
            cache = new_state.active[cell]
            attempt(lambda cell=cell, cache=cache: self.renderer.on_cache_updated(cell, cache))
        if self.autosave:
            attempt(self.save)

        if errors:
            raise errors[0]
        return new_state
