"""Position sensor collaborator.

A sensor pushes coordinate updates to a subscriber callback until it is
unsubscribed. The session treats each delivered coordinate as one movement
event. :class:`ReplaySensor` plays back a scripted route, which is how tests
and offline demos stand in for on-device geolocation.
"""

import itertools
from typing import Callable, Dict, Iterable, List, Protocol

from geocoin.components import LatLng

PositionCallback = Callable[[LatLng], None]


class PositionSensor(Protocol):
    """Subscribe / unsubscribe pair delivering coordinate updates."""

    def subscribe(self, callback: PositionCallback) -> int: ...

    def unsubscribe(self, handle: int) -> None: ...


class ReplaySensor:
    """Sensor that delivers a fixed route on demand.

    Coordinates are handed to every current subscriber by :meth:`emit` (one
    at a time) or :meth:`replay` (all remaining).
    """

    def __init__(self, route: Iterable[LatLng] = ()) -> None:
        self._route: List[LatLng] = list(route)
        self._subscribers: Dict[int, PositionCallback] = {}
        self._handles = itertools.count(1)

    @property
    def active(self) -> bool:
        return bool(self._subscribers)

    @property
    def remaining(self) -> int:
        return len(self._route)

    def subscribe(self, callback: PositionCallback) -> int:
        handle = next(self._handles)
        self._subscribers[handle] = callback
        return handle

    def unsubscribe(self, handle: int) -> None:
        self._subscribers.pop(handle, None)

    def push(self, point: LatLng) -> None:
        """Append ``point`` to the route."""
        self._route.append(point)

    def emit(self) -> bool:
        """Deliver the next coordinate. Returns False when nothing was sent."""
        if not self._route or not self._subscribers:
            return False
        point = self._route.pop(0)
        for callback in list(self._subscribers.values()):
            callback(point)
        return True

    def replay(self) -> int:
        """Deliver every remaining coordinate; returns how many were sent."""
        sent = 0
        while self.emit():
            sent += 1
        return sent
