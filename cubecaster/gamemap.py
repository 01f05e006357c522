"""Map grid of a scene: validation, padding and wall lookup."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Sequence

# Size of one map cell in world units.
TILE_SIZE = 40
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 800
MOVE_SPEED = 1
ROTATE_SPEED = 0.01

# Marker left on cells reached from outside the map by the closure check.
VISITED = "F"

_MAP_CHARS = "10 \nENWS"
_QUARTER_TURNS = {"E": 4, "N": 3, "W": 2, "S": 1}
_OPEN_CELLS = frozenset("0NESW")
_WALLS = frozenset("1" + VISITED)


class MapError(ValueError):
    """Raised when the map part of a scene is invalid."""


@dataclass(frozen=True)
class PlayerStart:
    """Starting cell of the player and the direction letter found there."""

    x: int
    y: int
    direction: str

    @property
    def angle(self) -> float:
        """Viewing angle in radians for the start direction."""
        return _QUARTER_TURNS[self.direction] * (math.pi / 2)


@dataclass(frozen=True)
class GameMap:
    """A padded, validated map grid with the player's start cell."""

    rows: tuple[str, ...]
    player: PlayerStart

    @property
    def width(self) -> int:
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        return len(self.rows)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= y < self.height and 0 <= x < len(self.rows[y])

    def cell(self, x: int, y: int) -> str:
        """Return the character at column ``x`` and row ``y``."""
        if not self._inside(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} map")
        return self.rows[y][x]

    def is_blocking(self, x: int, y: int) -> bool:
        """True for walls, cells outside the closed area and cells off the grid."""
        if not self._inside(x, y):
            return True
        return self.rows[y][x] in _WALLS


def scan_map(rows: Sequence[str]) -> tuple[int, PlayerStart]:
    """Check the map characters and return the widest row length and the player."""
    player: PlayerStart | None = None
    width = 0
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            if char not in _MAP_CHARS:
                raise MapError("Invalid map!")
            if char in _QUARTER_TURNS:
                if player is not None:
                    raise MapError("Invalid map!")
                player = PlayerStart(x, y, char)
        width = max(width, len(row))
    if player is None:
        raise MapError("No player found!")
    return width, player


def build_grid(rows: Sequence[str], width: int) -> list[list[str]]:
    """Copy ``rows`` into a grid of spaces with a one-cell border all round."""
    grid = [[" "] * (width + 2) for _ in range(len(rows) + 2)]
    for y, row in enumerate(rows, start=1):
        if len(row) > width:
            raise ValueError(f"row {y - 1} is wider than {width}")
        grid[y][1:1 + len(row)] = row
    return grid


def check_closed(grid: list[list[str]]) -> None:
    """Fill the grid from its top-left corner and reject maps open to the outside.

    Every cell reached without crossing a wall is marked ``F``; reaching a
    floor or player cell raises ``MapError``.
    """
    stack = [(0, 0)]
    while stack:
        x, y = stack.pop()
        if not (0 <= y < len(grid) and 0 <= x < len(grid[y])):
            continue
        cell = grid[y][x]
        if cell in _WALLS:
            continue
        if cell in _OPEN_CELLS:
            raise MapError("Invalid map!")
        grid[y][x] = VISITED
        stack.extend(((x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)))


def parse_map(rows: Sequence[str]) -> GameMap:
    """Validate map rows and build the padded map."""
    rows = list(rows)
    width, player = scan_map(rows)
    grid = build_grid(rows, width)
    check_closed(grid)
    return GameMap(
        rows=tuple("".join(row) for row in grid),
        player=replace(player, x=player.x + 1, y=player.y + 1),
    )