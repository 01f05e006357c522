"""Player movement with wall collision, and turning."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from cubecaster.gamemap import MOVE_SPEED, ROTATE_SPEED, TILE_SIZE, GameMap

_FULL_TURN = 2 * math.pi
# Distance kept between the player and any blocking cell.
_REACH = 10


def _probe_offsets() -> tuple[tuple[float, float], ...]:
    offsets = []
    step = math.pi / 180
    angle = step
    while angle < _FULL_TURN:
        offsets.append((math.cos(angle) * MOVE_SPEED, math.sin(angle) * MOVE_SPEED))
        angle += step
    return tuple(offsets)


_PROBES = _probe_offsets()


@dataclass
class Keys:
    """Which movement and turning keys are held down."""

    forward: bool = False
    backward: bool = False
    strafe_left: bool = False
    strafe_right: bool = False
    turn_left: bool = False
    turn_right: bool = False


@dataclass(frozen=True)
class Player:
    """Player position in world units and viewing angle in radians."""

    x: float
    y: float
    angle: float


def step_keys(keys: Keys, x: float, y: float, angle: float) -> tuple[float, float]:
    """Return the position the held keys would move the player to."""
    x_step = MOVE_SPEED * math.cos(angle)
    y_step = MOVE_SPEED * math.sin(angle)
    if keys.forward:
        x += x_step
        y += y_step
    if keys.strafe_right:
        x -= y_step
        y += x_step
    if keys.backward:
        x -= x_step
        y -= y_step
    if keys.strafe_left:
        x += y_step
        y -= x_step
    return x, y


def wall_blocked(game_map: GameMap, temp: float, still: float, vertical: bool) -> bool:
    """True if a circle around the candidate position touches a blocking cell.

    With ``vertical`` the candidate ``temp`` is a y coordinate and ``still``
    the x coordinate; otherwise ``temp`` is x and ``still`` is y.
    """
    for dx, dy in _PROBES:
        if vertical:
            map_x = int((still + dx * _REACH) / TILE_SIZE)
            map_y = int((temp + dy * _REACH) / TILE_SIZE)
        else:
            map_x = int((temp + dx * _REACH) / TILE_SIZE)
            map_y = int((still + dy * _REACH) / TILE_SIZE)
        if game_map.is_blocking(map_x, map_y):
            return True
    return False


def rotate(angle: float, keys: Keys) -> float:
    """Turn by the held turning keys, keeping the angle within one turn."""
    if keys.turn_right:
        angle += ROTATE_SPEED
        if angle >= _FULL_TURN:
            angle -= _FULL_TURN
    if keys.turn_left:
        angle -= ROTATE_SPEED
        if angle <= 0.0:
            angle += _FULL_TURN
    return angle


def move_player(game_map: GameMap, player: Player, keys: Keys) -> Player:
    """Move the player by the held keys, one axis at a time, stopping at walls."""
    target_x, target_y = step_keys(keys, player.x, player.y, player.angle)
    y = player.y
    if not wall_blocked(game_map, target_y, player.x, True):
        y = target_y
    x = player.x
    # The x move is probed as vertical only when the new y equals the old x.
    if not wall_blocked(game_map, target_x, y, y == player.x):
        x = target_x
    return replace(player, x=x, y=y)