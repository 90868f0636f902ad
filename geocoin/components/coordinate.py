"""Geographic coordinate component.

``LatLng`` is the continuous position type used for the player, the movement
trail and cell bounds. Validation of finite values happens at the board
boundary (see :meth:`geocoin.board.Board.cell_of`), not here, so that a
malformed coordinate surfaces where it is first used for grid math.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class LatLng:
    """Latitude / longitude pair in degrees."""

    lat: float
    lng: float

    def offset(self, dlat: float, dlng: float) -> "LatLng":
        """Return the coordinate shifted by ``(dlat, dlng)`` degrees."""
        return LatLng(self.lat + dlat, self.lng + dlng)

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LatLng":
        """Build from a ``{"lat": .., "lng": ..}`` record.

        Raises:
            ValueError: If either field is missing or not a real number.
        """
        lat = data.get("lat")
        lng = data.get("lng")
        for name, value in (("lat", lat), ("lng", lng)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"coordinate.{name} must be a number")
        return cls(lat=float(lat), lng=float(lng))  # type: ignore[arg-type]
