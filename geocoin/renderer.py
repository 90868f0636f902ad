"""Rendering collaborator interface.

The game core never draws anything. It tells a :class:`CacheRenderer` when a
cache becomes active (attach a marker / popup), when a pickup or deposit
changed an active cache (redraw its popup with the new contents) and when it
stops being active (detach it). ``Cache`` values are immutable snapshots: the
renderer receives a fresh one on every change, and all changes flow back
through the session's ``pickup`` / ``deposit``.
"""

import logging
from typing import Protocol

from geocoin.components import Cache, Cell

logger = logging.getLogger(__name__)


class CacheRenderer(Protocol):
    """Receives active-set and cache-content changes."""

    def on_cache_activated(self, cell: Cell, cache: Cache) -> None: ...

    def on_cache_updated(self, cell: Cell, cache: Cache) -> None: ...

    def on_cache_deactivated(self, cell: Cell) -> None: ...


class LoggingRenderer:
    """Renderer that only logs; the default when no front end is attached."""

    def on_cache_activated(self, cell: Cell, cache: Cache) -> None:
        logger.debug("Cache at %s shown with %d coin(s)", cell.key, len(cache.coins))

    def on_cache_updated(self, cell: Cell, cache: Cache) -> None:
        logger.debug("Cache at %s now holds %d coin(s)", cell.key, len(cache.coins))

    def on_cache_deactivated(self, cell: Cell) -> None:
        logger.debug("Cache at %s hidden", cell.key)
