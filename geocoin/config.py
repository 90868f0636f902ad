"""Gameplay configuration.

All tunables live on one frozen :class:`GameConfig`. The defaults reproduce
the original deployment: 0.0001 degree tiles around the Oakes College
classroom, a four-cell neighbourhood, one cache per ten cells on average and
up to a hundred coins per cache.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from geocoin.components import LatLng

# Location of the classroom the game starts in.
OAKES_CLASSROOM = LatLng(36.98949379578401, -122.06277128548504)


@dataclass(frozen=True)
class GameConfig:
    """Immutable gameplay parameters.

    Attributes:
        tile_width (float): Edge length of one cell, in degrees.
        visibility_radius (int): Neighbourhood half-width in cells used to find
            spawn candidates.
        spawn_probability (float): A never-seen cell holds a cache iff its luck
            roll is below this value.
        max_coins (int): Upper bound (exclusive) of a fresh cache's coin count.
        move_increment (float): Degrees moved per directional action.
        degrees_to_meters (float): Scale used to turn ``visibility_radius`` cells
            into the eviction distance in metres.
        start (LatLng): Start / reset coordinate.
        movement (str): Name of the move function in
            :data:`geocoin.moves.MOVE_FN_REGISTRY` that directional actions use.
    """

    tile_width: float = 1e-4
    visibility_radius: int = 4
    spawn_probability: float = 0.1
    max_coins: int = 100
    move_increment: float = 1e-4
    degrees_to_meters: float = 10000.0
    start: LatLng = field(default=OAKES_CLASSROOM)
    movement: str = "default"

    def __post_init__(self) -> None:
        if not self.tile_width > 0:
            raise ValueError("tile_width must be > 0")
        if self.visibility_radius < 0:
            raise ValueError("visibility_radius must be >= 0")
        if not 0.0 <= self.spawn_probability <= 1.0:
            raise ValueError("spawn_probability must be within [0, 1]")
        if self.max_coins < 0:
            raise ValueError("max_coins must be >= 0")
        if not self.move_increment > 0:
            raise ValueError("move_increment must be > 0")
        if not self.degrees_to_meters > 0:
            raise ValueError("degrees_to_meters must be > 0")

    @property
    def eviction_distance(self) -> float:
        """Metres beyond which an active cache is flushed and deactivated."""
        return self.visibility_radius * self.tile_width * self.degrees_to_meters

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "GameConfig":
        """Build a config from plain values, ignoring unknown keys.

        ``start`` may be given as a ``{"lat", "lng"}`` mapping.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {name: value for name, value in data.items() if name in known}
        if isinstance(kwargs.get("start"), Mapping):
            kwargs["start"] = LatLng.from_dict(kwargs["start"])
        return cls(**kwargs)


DEFAULT_CONFIG = GameConfig()
