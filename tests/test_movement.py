import math

import pytest

from cubecaster.gamemap import MOVE_SPEED, ROTATE_SPEED, TILE_SIZE, parse_map
from cubecaster.movement import Keys, Player, move_player, rotate, step_keys, wall_blocked


@pytest.fixture
def room():
    return parse_map(["1111111", "1000001", "100N001", "1000001", "1111111"])


def _centre(cell):
    return float(cell * TILE_SIZE + TILE_SIZE // 2)


def test_forward_at_angle_zero():
    x, y = step_keys(Keys(forward=True), 100.0, 50.0, 0.0)
    assert x == pytest.approx(100.0 + MOVE_SPEED)
    assert y == pytest.approx(50.0)


def test_strafe_right_at_angle_zero():
    x, y = step_keys(Keys(strafe_right=True), 100.0, 50.0, 0.0)
    assert x == pytest.approx(100.0)
    assert y == pytest.approx(50.0 + MOVE_SPEED)


def test_opposite_keys_cancel():
    keys = Keys(forward=True, backward=True, strafe_left=True, strafe_right=True)
    x, y = step_keys(keys, 100.0, 50.0, 1.2)
    assert x == pytest.approx(100.0)
    assert y == pytest.approx(50.0)


def test_no_keys_no_step():
    assert step_keys(Keys(), 12.5, 7.5, 2.0) == (12.5, 7.5)


def test_step_length_is_move_speed():
    x, y = step_keys(Keys(forward=True), 0.0, 0.0, 0.9)
    assert math.hypot(x, y) == pytest.approx(MOVE_SPEED)


def test_rotate_right_adds_speed():
    assert rotate(1.0, Keys(turn_right=True)) == pytest.approx(1.0 + ROTATE_SPEED)


def test_rotate_right_wraps():
    angle = 2 * math.pi - ROTATE_SPEED / 2
    assert rotate(angle, Keys(turn_right=True)) == pytest.approx(ROTATE_SPEED / 2)


def test_rotate_left_wraps_at_zero():
    assert rotate(ROTATE_SPEED, Keys(turn_left=True)) == pytest.approx(2 * math.pi)
    assert rotate(ROTATE_SPEED / 2, Keys(turn_left=True)) == pytest.approx(
        2 * math.pi - ROTATE_SPEED / 2
    )


def test_rotate_without_keys_is_unchanged():
    assert rotate(0.5, Keys()) == 0.5


def test_wall_blocked_in_open_space(room):
    assert not wall_blocked(room, _centre(3), _centre(4), True)
    assert not wall_blocked(room, _centre(4), _centre(3), False)


def test_wall_blocked_near_walls(room):
    near_top = 2 * TILE_SIZE + 8.0
    near_left = 2 * TILE_SIZE + 8.0
    assert wall_blocked(room, near_top, _centre(4), True)
    assert wall_blocked(room, near_left, _centre(3), False)


def test_wall_blocked_off_grid(room):
    assert wall_blocked(room, -50.0, -50.0, True)


def test_move_forward_in_open_room(room):
    start = Player(_centre(room.player.x), _centre(room.player.y), room.player.angle)
    moved = move_player(room, start, Keys(forward=True))
    assert moved.y == pytest.approx(start.y - MOVE_SPEED)
    assert moved.x == pytest.approx(start.x)
    assert moved.angle == start.angle


def test_move_blocked_by_wall(room):
    start = Player(_centre(room.player.x), 2 * TILE_SIZE + 9.0, room.player.angle)
    moved = move_player(room, start, Keys(forward=True))
    assert moved == start


def test_move_without_keys_keeps_position(room):
    start = Player(_centre(4), _centre(3), 0.3)
    moved = move_player(room, start, Keys())
    assert moved.x == pytest.approx(start.x)
    assert moved.y == pytest.approx(start.y)