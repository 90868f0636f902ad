"""Board: the discrete cell grid laid over geographic coordinates.

The board partitions the plane into half-open square tiles of ``tile_width``
degrees: a coordinate belongs to the cell ``(floor(lat / w), floor(lng / w))``
and to no other. Tile edges are the floating-point products ``i * w``, and
``cell_of`` corrects the quotient so that every point lies inside
``bounds_of(cell_of(point))``. Cells handed out by the board are canonical,
i.e. repeated lookups of the same ``(i, j)`` return the same instance, but
callers must only rely on equality (``Cell`` is a frozen dataclass).

Design notes:

* The board holds no game state. Its only mutable member is the canonical
  registry, which is a lookup optimisation and never affects results.
* Input validation lives here: a non-finite coordinate raises ``ValueError``
  instead of being floored into a nonsensical cell.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from geocoin.components import Cell, LatLng


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned coordinate rectangle spanning exactly one tile.

    Attributes:
        south_west: Inclusive lower corner.
        north_east: Exclusive upper corner.
    """

    south_west: LatLng
    north_east: LatLng

    @property
    def center(self) -> LatLng:
        return LatLng(
            (self.south_west.lat + self.north_east.lat) / 2,
            (self.south_west.lng + self.north_east.lng) / 2,
        )

    def contains(self, point: LatLng) -> bool:
        """Half-open containment test (south/west edges inclusive)."""
        return (
            self.south_west.lat <= point.lat < self.north_east.lat
            and self.south_west.lng <= point.lng < self.north_east.lng
        )


def _require_finite(point: LatLng) -> None:
    if not (math.isfinite(point.lat) and math.isfinite(point.lng)):
        raise ValueError(f"Coordinate must be finite, got {point!r}")


class Board:
    """Cell grid with a canonical cell registry.

    Args:
        tile_width (float): Cell edge length in degrees.
        visibility_radius (int): Default neighbourhood half-width, in cells,
            for :meth:`cells_near`.
    """

    def __init__(self, tile_width: float, visibility_radius: int) -> None:
        if not tile_width > 0:
            raise ValueError("tile_width must be > 0")
        if visibility_radius < 0:
            raise ValueError("visibility_radius must be >= 0")
        self.tile_width = tile_width
        self.visibility_radius = visibility_radius
        self._known_cells: Dict[Tuple[int, int], Cell] = {}

    def __repr__(self) -> str:
        return (
            f"Board(tile_width={self.tile_width!r}, "
            f"visibility_radius={self.visibility_radius!r})"
        )

    def _canonical(self, i: int, j: int) -> Cell:
        cell = self._known_cells.get((i, j))
        if cell is None:
            cell = self._known_cells[(i, j)] = Cell(i, j)
        return cell

    def _index(self, value: float) -> int:
        """Floor-divide ``value`` by the tile width, agreeing with :meth:`bounds_of`.

        ``floor(value / w)`` and the edge ``k * w`` round independently, so the
        quotient can land one cell off the tile whose bounds hold ``value``.
        """
        width = self.tile_width
        index = math.floor(value / width)
        for _ in range(2):
            if index * width > value:
                index -= 1
            elif (index + 1) * width <= value:
                index += 1
            else:
                break
        return index

    def cell_of(self, point: LatLng) -> Cell:
        """Return the cell containing ``point``.

        Raises:
            ValueError: If either coordinate is NaN or infinite.
        """
        _require_finite(point)
        return self._canonical(self._index(point.lat), self._index(point.lng))

    def bounds_of(self, cell: Cell) -> Bounds:
        """Return the coordinate rectangle covered by ``cell``."""
        return Bounds(
            south_west=LatLng(cell.i * self.tile_width, cell.j * self.tile_width),
            north_east=LatLng(
                (cell.i + 1) * self.tile_width, (cell.j + 1) * self.tile_width
            ),
        )

    def center_of(self, cell: Cell) -> LatLng:
        return self.bounds_of(cell).center

    def cells_near(self, point: LatLng, radius: Optional[int] = None) -> List[Cell]:
        """Return the square neighbourhood of cells around ``point``.

        All cells within ``radius`` steps along both axes (Chebyshev distance,
        inclusive) of ``cell_of(point)``: ``(2 * radius + 1) ** 2`` distinct
        cells, row by row.

        Args:
            point (LatLng): Centre coordinate.
            radius (int | None): Half-width in cells; defaults to the board's
                ``visibility_radius``.
        """
        if radius is None:
            radius = self.visibility_radius
        if radius < 0:
            raise ValueError("radius must be >= 0")
        origin = self.cell_of(point)
        return [
            self._canonical(origin.i + di, origin.j + dj)
            for di in range(-radius, radius + 1)
            for dj in range(-radius, radius + 1)
        ]
