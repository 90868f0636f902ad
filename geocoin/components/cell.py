"""Cell component.

Immutable integer grid coordinates obtained by floor-dividing a latitude /
longitude pair by the board's tile width. Cells are plain value objects:
equality and hashing are structural, so they key ``State.directory`` and
``State.active`` directly.
"""

import re
from dataclasses import dataclass

_KEY_PATTERN = re.compile(r"(-?[0-9]+),(-?[0-9]+)")


@dataclass(frozen=True, order=True)
class Cell:
    """Grid cell.

    Attributes:
        i: Row index (latitude quotient).
        j: Column index (longitude quotient).
    """

    i: int
    j: int

    @property
    def key(self) -> str:
        """Persisted ``"i,j"`` form, also the seed fed to ``luck``."""
        return f"{self.i},{self.j}"

    @classmethod
    def parse_key(cls, key: str) -> "Cell":
        """Inverse of :attr:`key`. Raises ``ValueError`` on malformed text."""
        match = _KEY_PATTERN.fullmatch(key)
        if match is None:
            raise ValueError(f"Cell key must look like 'i,j', got {key!r}")
        return cls(i=int(match.group(1)), j=int(match.group(2)))
