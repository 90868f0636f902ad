"""Durable storage of a game session.

The game persists into an opaque key-value store of strings (``read`` /
``write`` / ``write_many`` / ``clear``), the same shape as a browser's
``localStorage`` plus a batched write. Two stores are included:

1. :class:`InMemoryStore` - dict-backed, data lost on exit (tests, prototyping).
2. :class:`JsonFileStore` - one human-readable JSON object on disk.

Schema (version 1). Every value is JSON text:

========================  ===================================================
key                       value
========================  ===================================================
``schemaVersion``         ``1``
``playerPosition``        ``{"lat": float, "lng": float}``
``inventory``             ``["i:j#k", ...]`` (oldest first)
``cacheMementos``         ``{"i,j": "<memento JSON text>", ...}``
``movementHistory``       ``[{"lat": float, "lng": float}, ...]``
========================  ===================================================

:func:`load_state` validates record by record. A malformed record, or a
malformed entry inside one, is skipped with a warning and loading carries on;
only a save from a newer, unknown schema aborts the load
(:class:`~geocoin.errors.UnsupportedSchemaError`). Saves without a
``schemaVersion`` key predate versioning and are read as version 1.
"""

import json
import logging
import math
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol

from pyrsistent import pmap, pvector

from geocoin.components import Cell, Coin, LatLng
from geocoin.errors import MalformedMementoError, UnsupportedSchemaError
from geocoin.memento import decode_memento
from geocoin.state import State
from geocoin.types import Memento

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

SCHEMA_VERSION_KEY = "schemaVersion"
POSITION_KEY = "playerPosition"
INVENTORY_KEY = "inventory"
MEMENTOS_KEY = "cacheMementos"
TRAIL_KEY = "movementHistory"


class KeyValueStore(Protocol):
    """Durable string store the session saves into."""

    def read(self, key: str) -> Optional[str]: ...

    def write(self, key: str, value: str) -> None: ...

    def write_many(self, records: Mapping[str, str]) -> None: ...

    def clear(self) -> None: ...


class InMemoryStore:
    """Dict-backed store; contents vanish with the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value

    def write_many(self, records: Mapping[str, str]) -> None:
        self._data.update(records)

    def clear(self) -> None:
        self._data.clear()

    def snapshot(self) -> Dict[str, str]:
        """Return a copy of everything stored."""
        return dict(self._data)


class JsonFileStore:
    """Store kept as a single JSON object in ``path``.

    The file is read once on construction and rewritten on every ``write`` or
    ``write_many`` call (via a sibling temporary file, then an atomic rename).
    A missing file is an empty store; an unreadable one raises ``ValueError``.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self._data: Dict[str, str] = {}
        if self.path.exists():
            self._data = self._read_file()

    def _read_file(self) -> Dict[str, str]:
        try:
            raw = json.loads(self.path.read_text("utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"{self.path} is not valid JSON: {exc}") from exc
        if not isinstance(raw, dict):
            raise ValueError(f"{self.path} must contain a JSON object")
        return {str(key): value for key, value in raw.items() if isinstance(value, str)}

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(self._data, indent=2, sort_keys=True), "utf-8")
        tmp_path.replace(self.path)

    def read(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def write(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def write_many(self, records: Mapping[str, str]) -> None:
        """Store every record and rewrite the file once."""
        self._data.update(records)
        self._flush()

    def clear(self) -> None:
        self._data = {}
        if self.path.exists():
            self.path.unlink()


def save_state(store: KeyValueStore, state: State) -> None:
    """Write the persistent part of ``state`` into ``store``.

    All records go out in one ``write_many`` call, so a store that persists
    per call never holds the inventory of one save next to the mementos of
    another (a coin would then exist twice or not at all).

    The active set is not saved: it is recomputed from the position on the
    next start, restoring every cache from its memento.
    """
    mementos = {cell.key: memento for cell, memento in sorted(state.directory.items())}
    store.write_many(
        {
            SCHEMA_VERSION_KEY: json.dumps(SCHEMA_VERSION),
            POSITION_KEY: json.dumps(state.position.to_dict()),
            INVENTORY_KEY: json.dumps([coin.id for coin in state.inventory]),
            MEMENTOS_KEY: json.dumps(mementos),
            TRAIL_KEY: json.dumps([point.to_dict() for point in state.trail]),
        }
    )
    logger.debug("Game state saved: %s", state.description)


def _read_json(store: KeyValueStore, key: str) -> Any:
    """Return the decoded record under ``key``; None if absent or unreadable."""
    text = store.read(key)
    if text is None:
        return None
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        logger.warning("Skipping %s: not valid JSON", key)
        return None


def _check_schema_version(store: KeyValueStore) -> None:
    version = _read_json(store, SCHEMA_VERSION_KEY)
    if version is None:
        return
    if isinstance(version, bool) or not isinstance(version, int):
        logger.warning("Ignoring malformed %s: %r", SCHEMA_VERSION_KEY, version)
        return
    if version > SCHEMA_VERSION:
        raise UnsupportedSchemaError(
            f"Save uses schema version {version}; this build reads up to {SCHEMA_VERSION}"
        )


def _parse_point(value: Any) -> LatLng:
    if not isinstance(value, dict):
        raise ValueError("coordinate must be an object")
    point = LatLng.from_dict(value)
    if not (math.isfinite(point.lat) and math.isfinite(point.lng)):
        raise ValueError("coordinate must be finite")
    return point


def _load_position(store: KeyValueStore) -> Optional[LatLng]:
    raw = _read_json(store, POSITION_KEY)
    if raw is None:
        return None
    try:
        return _parse_point(raw)
    except ValueError as exc:
        logger.warning("Skipping %s: %s", POSITION_KEY, exc)
        return None


def _load_inventory(store: KeyValueStore) -> Optional[List[Coin]]:
    raw = _read_json(store, INVENTORY_KEY)
    if raw is None:
        return None
    if not isinstance(raw, list):
        logger.warning("Skipping %s: expected a list of coin ids", INVENTORY_KEY)
        return None
    coins: List[Coin] = []
    for coin_id in raw:
        if not isinstance(coin_id, str):
            logger.warning("Skipping invalid inventory entry %r", coin_id)
            continue
        coins.append(Coin(coin_id))
    return coins


def _load_directory(store: KeyValueStore) -> Optional[Dict[Cell, Memento]]:
    raw = _read_json(store, MEMENTOS_KEY)
    if raw is None:
        return None
    if not isinstance(raw, dict):
        logger.warning("Skipping %s: expected an object", MEMENTOS_KEY)
        return None
    directory: Dict[Cell, Memento] = {}
    for key, memento in raw.items():
        try:
            cell = Cell.parse_key(key)
            decode_memento(memento)
        except MalformedMementoError as exc:
            logger.warning("Invalid %s: %s", key, exc)
            continue
        except ValueError as exc:
            logger.warning("Invalid cache key %r: %s", key, exc)
            continue
        directory[cell] = memento
    return directory


def _load_trail(store: KeyValueStore) -> Optional[List[LatLng]]:
    raw = _read_json(store, TRAIL_KEY)
    if raw is None:
        return None
    if not isinstance(raw, list):
        logger.warning("Skipping %s: expected a list of coordinates", TRAIL_KEY)
        return None
    trail: List[LatLng] = []
    for entry in raw:
        try:
            trail.append(_parse_point(entry))
        except ValueError as exc:
            logger.warning("Skipping invalid trail entry %r: %s", entry, exc)
    return trail


def load_state(store: KeyValueStore, state: State) -> State:
    """Overlay whatever ``store`` holds onto ``state``.

    Records absent from the store leave the corresponding part of ``state``
    untouched. The active set is not modified; run
    :func:`geocoin.step.start` afterwards.

    Raises:
        UnsupportedSchemaError: If the save comes from a newer schema.
    """
    _check_schema_version(store)
    changes: Dict[str, Any] = {}
    position = _load_position(store)
    if position is not None:
        changes["position"] = position
    inventory = _load_inventory(store)
    if inventory is not None:
        changes["inventory"] = pvector(inventory)
    directory = _load_directory(store)
    if directory is not None:
        changes["directory"] = pmap(directory)
    trail = _load_trail(store)
    if trail is not None:
        changes["trail"] = pvector(trail)
    state = replace(state, **changes)
    logger.info("Game state loaded: %s", state.description)
    return state
