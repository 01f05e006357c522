"""Ray casting against the map grid and drawing of the textured view."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Protocol, Sequence

from cubecaster.gamemap import TILE_SIZE, WINDOW_HEIGHT, WINDOW_WIDTH, GameMap

FIELD_OF_VIEW = math.pi / 3

# Projected wall height is this value divided by the corrected distance, times the frame height.
_WALL_SCALE = 30
# Keeps projected heights finite so that they can be turned into row numbers.
_HEIGHT_LIMIT = 1e9
_FULL_TURN = 2 * math.pi


class Texture(Protocol):
    width: int
    height: int

    def pixel(self, x: int, y: int) -> int: ...


@dataclass(frozen=True)
class RayHit:
    """Where a ray met a wall.

    ``side`` is 0 when the ray crossed a vertical grid line last and 1 for a
    horizontal one. ``texture_index`` selects NO, SO, EA or WE and
    ``texture_x`` is the position along the wall face, as a fraction of a tile.
    """

    distance: float
    side: int
    texture_index: int
    texture_x: float


@dataclass
class Frame:
    """A picture of 32-bit colour values stored row by row."""

    width: int = WINDOW_WIDTH
    height: int = WINDOW_HEIGHT
    pixels: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.pixels = [0] * (self.width * self.height)

    def put(self, x: int, y: int, colour: int) -> None:
        """Set one pixel; positions outside the frame are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y * self.width + x] = colour

    def get(self, x: int, y: int) -> int:
        """Return the colour at column ``x`` and row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} frame")
        return self.pixels[y * self.width + x]

    def _fill_column(self, x: int, first: int, stop: int, colour: int) -> None:
        first = max(first, 0)
        stop = min(stop, self.height)
        if not 0 <= x < self.width or first >= stop:
            return
        start = first * self.width + x
        end = (stop - 1) * self.width + x + 1
        self.pixels[start:end:self.width] = [colour] * (stop - first)


def _normalize(angle: float) -> float:
    angle = math.fmod(angle, _FULL_TURN)
    return angle + _FULL_TURN if angle < 0 else angle


def _crossing_length(component: float) -> float:
    """Ray length needed to cross one tile along an axis."""
    magnitude = abs(component)
    return TILE_SIZE / magnitude if magnitude else math.inf


def _first_crossing(position: float, component: float, delta: float) -> tuple[int, float]:
    fraction = math.fmod(position, TILE_SIZE) / TILE_SIZE
    if component < 0:
        return -1, fraction * delta
    return 1, (1.0 - fraction) * delta


def wall_texture(angle: float, side: int) -> int:
    """Pick the texture index for a wall hit by a ray at ``angle`` on ``side``."""
    if 0 <= angle <= math.pi / 2:
        return 1 if side != 0 else 2
    if math.pi / 2 <= angle <= math.pi:
        return 1 if side != 0 else 3
    if math.pi <= angle <= 3 * math.pi / 2:
        return 0 if side else 3
    return 0 if side else 2


def cast_ray(game_map: GameMap, player_x: float, player_y: float, angle: float) -> RayHit | None:
    """Follow a ray through the grid to the first wall; None if it leaves the map."""
    angle = _normalize(angle)
    ray_x, ray_y = math.cos(angle), math.sin(angle)
    delta_x = _crossing_length(ray_x)
    delta_y = _crossing_length(ray_y)
    step_x, dist_x = _first_crossing(player_x, ray_x, delta_x)
    step_y, dist_y = _first_crossing(player_y, ray_y, delta_y)
    map_x = int(player_x / TILE_SIZE)
    map_y = int(player_y / TILE_SIZE)

    while True:
        if dist_x < dist_y:
            map_x += step_x
            side = 0
        else:
            map_y += step_y
            side = 1
        if not (0 <= map_x < game_map.width and 0 <= map_y < game_map.height):
            return None
        if game_map.cell(map_x, map_y) == "1":
            break
        if side:
            dist_y += delta_y
        else:
            dist_x += delta_x

    distance = dist_y if side else dist_x
    hit_x = distance * ray_x + player_x
    hit_y = distance * ray_y + player_y
    along = hit_x if side else hit_y
    return RayHit(
        distance=distance,
        side=side,
        texture_index=wall_texture(angle, side),
        texture_x=math.fmod(along, TILE_SIZE) / TILE_SIZE,
    )


def draw_column(
    frame: Frame,
    column: int,
    hit: RayHit | None,
    distance: float,
    texture: Texture | None,
    ceiling: int,
    floor: int,
) -> None:
    """Draw one screen column: textured wall slice, then ceiling and floor."""
    ratio = math.copysign(math.inf, distance) if distance == 0 else _WALL_SCALE / distance
    wall_height = max(-_HEIGHT_LIMIT, min(_HEIGHT_LIMIT, ratio * frame.height))
    half = frame.height // 2

    first = max(int(-wall_height / 2 - 1) + 1, -half)
    stop = min(math.ceil(wall_height / 2), frame.height - half)
    if first < stop:
        if hit is None or texture is None:
            raise ValueError("drawing a wall slice needs a hit and a texture")
        tex_column = int(hit.texture_x * texture.width)
        for i in range(first, stop):
            tex_row = int((i + wall_height / 2) / wall_height * texture.height)
            frame.put(column, half + i, texture.pixel(tex_column, tex_row))

    ceiling_row = int(half - wall_height / 2)
    frame._fill_column(column, 0, ceiling_row + 1, ceiling)
    floor_row = int(half + wall_height / 2 - 1)
    frame._fill_column(column, floor_row + 1, frame.height, floor)


def cast_rays(
    frame: Frame,
    game_map: GameMap,
    player_x: float,
    player_y: float,
    player_angle: float,
    textures: Sequence[Texture],
    ceiling: int,
    floor: int,
) -> list[RayHit | None]:
    """Render the player's view into ``frame`` and return the hit of each column."""
    step = FIELD_OF_VIEW / frame.width
    ray_angle = player_angle - FIELD_OF_VIEW / 2
    hits: list[RayHit | None] = []
    for column in range(frame.width):
        ray_angle = _normalize(ray_angle)
        hit = cast_ray(game_map, player_x, player_y, ray_angle)
        correction = math.cos(player_angle - ray_angle)
        if hit is None:
            distance, texture = -correction, None
        else:
            distance, texture = hit.distance * correction, textures[hit.texture_index]
        draw_column(frame, column, hit, distance, texture, ceiling, floor)
        hits.append(hit)
        ray_angle += step
    return hits