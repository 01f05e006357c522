import math

import pygame
import pytest

from cubecaster.game import Game, load_textures, main
from cubecaster.gamemap import ROTATE_SPEED
from cubecaster.raycast import Frame
from cubecaster.scene import parse_scene_lines
from cubecaster.xpm import XpmError, parse_xpm_lines

ROOM = ["11111", "10001", "10N01", "10001", "11111"]
COLOURS = ["FF0000", "00FF00", "0000FF", "FFFF00"]


def _scene(paths=("n.xpm", "s.xpm", "e.xpm", "w.xpm")):
    lines = [
        f"NO {paths[0]}",
        f"SO {paths[1]}",
        f"EA {paths[2]}",
        f"WE {paths[3]}",
        "F 10,20,30",
        "C 40,50,60",
        "",
        *ROOM,
    ]
    return parse_scene_lines(lines)


def _textures():
    return tuple(
        parse_xpm_lines(["2 2 1 1", f"a c #{hexcode}", "aa", "aa"]) for hexcode in COLOURS
    )


def _game():
    return Game(_scene(), _textures(), frame=Frame(40, 40))


def _xpm_text(hexcode):
    return (
        "static char *tex[] = {\n"
        '"2 2 1 1",\n'
        f'"a c #{hexcode}",\n'
        '"aa",\n'
        '"aa"\n'
        "};\n"
    )


def test_key_press_and_release_toggle_keys():
    game = _game()
    game.key_press(pygame.K_w)
    game.key_press(pygame.K_LEFT)
    assert game.keys.forward is True
    assert game.keys.turn_left is True
    game.key_release(pygame.K_w)
    assert game.keys.forward is False
    assert game.keys.turn_left is True


def test_escape_stops_game():
    game = _game()
    assert game.running is True
    game.key_press(pygame.K_ESCAPE)
    assert game.running is False


def test_player_starts_at_scene_start():
    game = _game()
    assert game.player.x == game.scene.player_x
    assert game.player.y == game.scene.player_y
    assert game.player.angle == pytest.approx(3 * math.pi / 2)


def test_update_without_keys_keeps_player():
    game = _game()
    before = game.player
    assert game.update() == before


def test_turn_right_rotates():
    game = _game()
    start = game.player.angle
    game.key_press(pygame.K_RIGHT)
    game.update()
    assert game.player.angle == pytest.approx(start + ROTATE_SPEED)


def test_forward_moves_towards_view():
    game = _game()
    start_x, start_y = game.player.x, game.player.y
    game.key_press(pygame.K_w)
    game.update()
    assert game.player.y == pytest.approx(start_y - 1)
    assert game.player.x == pytest.approx(start_x)


def test_walls_stop_movement():
    game = _game()
    game.key_press(pygame.K_w)
    for _ in range(80):
        game.update()
    assert 90 <= game.player.y < 91


def test_render_draws_ceiling_floor_and_wall():
    game = _game()
    hits = game.render()
    assert len(hits) == game.frame.width
    assert all(hit is not None for hit in hits)
    assert game.frame.get(0, 0) == game.scene.ceiling
    assert game.frame.get(0, game.frame.height - 1) == game.scene.floor
    centre = hits[game.frame.width // 2]
    assert centre.texture_index == 0
    expected = game.textures[0].pixel(0, 0)
    assert game.frame.get(game.frame.width // 2, game.frame.height // 2) == expected


def test_load_textures_reads_files(tmp_path):
    paths = []
    for name, hexcode in zip(("n", "s", "e", "w"), COLOURS):
        path = tmp_path / f"{name}.xpm"
        path.write_text(_xpm_text(hexcode))
        paths.append(str(path))
    textures = load_textures(_scene(paths))
    assert len(textures) == 4
    assert [t.pixel(1, 1) for t in textures] == [t.pixel(0, 0) for t in _textures()]


def test_load_textures_missing_file(tmp_path):
    missing = str(tmp_path / "absent.xpm")
    with pytest.raises(XpmError):
        load_textures(_scene((missing,) * 4))


def test_main_without_arguments_prints_usage(capsys):
    assert main([]) == 1
    assert "Usage" in capsys.readouterr().out


def test_main_rejects_extension(tmp_path, capsys):
    path = tmp_path / "map.txt"
    path.write_text("")
    assert main([str(path)]) == 1
    assert "Invalid file extension!" in capsys.readouterr().out


def test_main_reports_invalid_texture(tmp_path, capsys):
    missing = tmp_path / "nothing.xpm"
    content = "\n".join(
        [
            f"NO {missing}",
            f"SO {missing}",
            f"EA {missing}",
            f"WE {missing}",
            "F 10,20,30",
            "C 40,50,60",
            "",
            *ROOM,
        ]
    )
    path = tmp_path / "room.cub"
    path.write_text(content + "\n")
    assert main([str(path)]) == 1
    assert "Invalid texture!" in capsys.readouterr().out