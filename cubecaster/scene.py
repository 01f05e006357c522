"""Reading of .cub scene descriptions: textures, colours and map."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from cubecaster.gamemap import TILE_SIZE, GameMap, MapError, parse_map

# Texture identifiers come first, in the order textures are stored, then colours.
IDENTIFIERS = ("NO", "SO", "EA", "WE", "F", "C")

_TEXTURE_COUNT = 4
_COLOUR_PART = re.compile(r"[ \t]*([0-9]+)")
_COLOUR_ERROR = "Invalid colour! Acceptable range is [0,255]!"


class SceneError(ValueError):
    """Raised when a scene description is invalid or cannot be read."""


@dataclass(frozen=True)
class Scene:
    """A parsed scene: wall textures (NO, SO, EA, WE), colours and map."""

    textures: tuple[str, ...]
    floor: int
    ceiling: int
    game_map: GameMap

    @property
    def player_x(self) -> float:
        """Player start in world units, at the centre of its cell."""
        return float(self.game_map.player.x * TILE_SIZE + TILE_SIZE // 2)

    @property
    def player_y(self) -> float:
        return float(self.game_map.player.y * TILE_SIZE + TILE_SIZE // 2)

    @property
    def player_angle(self) -> float:
        return self.game_map.player.angle


def parse_colour(text: str) -> int:
    """Parse ``R,G,B`` components in [0, 255] into a ``0xRRGGBB`` integer."""
    parts = [part for part in text.split(",") if part]
    if len(parts) != 3:
        raise SceneError(_COLOUR_ERROR)
    rgb = 0
    for shift, part in zip((16, 8, 0), parts):
        match = _COLOUR_PART.fullmatch(part)
        if match is None:
            raise SceneError(_COLOUR_ERROR)
        value = int(match.group(1))
        if value > 255:
            raise SceneError(_COLOUR_ERROR)
        rgb |= value << shift
    return rgb


def check_extension(path: str | os.PathLike[str]) -> None:
    """Raise ``SceneError`` unless the name's last extension is exactly ``.cub``."""
    name = os.fspath(path)
    dot = name.rfind(".")
    if dot == -1 or name[dot:] != ".cub":
        raise SceneError("Invalid file extension!")


def _identify(line: str) -> int | None:
    return next(
        (index for index, prefix in enumerate(IDENTIFIERS) if line.startswith(prefix)),
        None,
    )


def parse_scene_lines(lines: Iterable[str]) -> Scene:
    """Parse the lines of a scene description, with or without trailing newlines."""
    textures: list[str] = [""] * _TEXTURE_COUNT
    colours = [0, 0]
    seen: set[int] = set()
    rows: list[str] = []

    for raw in lines:
        line = raw[:-1] if raw.endswith("\n") else raw
        if not line:
            if rows:
                raise SceneError("empty line")
            continue
        kind = _identify(line)
        if kind is None:
            if len(seen) < len(IDENTIFIERS):
                raise SceneError("Map must be last element!")
            rows.append(line)
            continue
        if kind in seen:
            raise SceneError("Duplicate idf!")
        seen.add(kind)
        if kind < _TEXTURE_COUNT:
            textures[kind] = line[2:].strip(" ")
        else:
            colours[kind - _TEXTURE_COUNT] = parse_colour(line[1:])
        if rows:
            raise SceneError("Map must be last element!")

    try:
        game_map = parse_map(rows)
    except MapError as exc:
        raise SceneError(str(exc)) from exc
    return Scene(
        textures=tuple(textures),
        floor=colours[0],
        ceiling=colours[1],
        game_map=game_map,
    )


def load_scene(path: str | os.PathLike[str]) -> Scene:
    """Read and parse the ``.cub`` file at ``path``."""
    check_extension(path)
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise SceneError("Unable to open file!") from exc
    lines = data.decode("latin-1").split("\n")
    if lines[-1] == "":
        lines.pop()
    return parse_scene_lines(lines)