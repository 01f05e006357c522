# cubecaster

cubecaster is a small first-person maze explorer. It casts rays across a flat
grid map to draw a textured 3D view, in the style of the early shooters. Each
level is a single `.cub` scene file. Wall textures are XPM images.

## Installing

```
pip install .
```

To install the test dependencies and run the tests:

```
pip install ".[test]"
pytest
```

## Running

```
cubecaster path/to/level.cub
```

The command needs exactly one argument. With any other number of arguments it
prints a usage line and exits with status 1.

The scene is checked before the window opens. If the scene is invalid, the
command prints the reason and exits with status 1. If a wall texture cannot be
read or decoded, it prints `Invalid texture!` and exits with status 1.

The window is 800×800 pixels. Pressing Escape ends the game with status 0.
Closing the window ends it with status 1.

### Controls

| Key           | Action              |
|---------------|---------------------|
| `W` / `S`     | move forward / back |
| `A` / `D`     | strafe left / right |
| `←` / `→`     | turn left / right   |
| `Esc`         | quit                |

The player cannot move into walls. It stays about a quarter of a tile away
from any wall.

## Scene files

The scene file name must end in `.cub`. The file starts with four wall
textures and two colours. Each must appear exactly once, in any order:

```
NO ./textures/north.xpm
SO ./textures/south.xpm
EA ./textures/east.xpm
WE ./textures/west.xpm
F 220,100,0
C 225,30,0
```

`F` sets the floor colour and `C` sets the ceiling colour. Texture paths are
read relative to the current working directory.

The map comes last:

```
        1111111111
        1000000001
111111111011000001
100000000011N00001
111101111111111111
```

The scene file follows these rules:

* A colour is written `R,G,B`. Each part is a whole number from 0 to 255.
* A map cell is `1` for a wall, `0` for floor, or a space. Exactly one cell
  holds `N`, `S`, `E` or `W`. That letter marks where the player starts and
  which way it faces.
* The map must be closed. No floor cell and no player cell may touch the
  space outside the map.
* Blank lines may appear before the map. They may not appear inside the map
  or after it.
* No texture or colour line may follow the map.

A texture can give its colours as hex (`#rrggbb`), as a standard X11 colour
name, or as `None` for transparent. An unknown colour name is read as black.

## Limitations

The game draws walls, a flat floor and a flat ceiling. It has no sprites, no
doors, no minimap and no mouse look. It reads textures only in XPM format.

## Using it as a library

Each part of the game can also be used on its own:

```python
from cubecaster.scene import load_scene
from cubecaster.xpm import load_xpm
from cubecaster.raycast import Frame, cast_ray

scene = load_scene("level.cub")
hit = cast_ray(scene.game_map, scene.player_x, scene.player_y, scene.player_angle)
```

`cast_ray` returns a `RayHit` with the distance, the wall side, the texture
index and the position along the wall. It returns `None` if the ray leaves the
map.

The modules:

* `cubecaster.scene` has `load_scene`, `parse_scene_lines`, `parse_colour`,
  `check_extension` and `Scene`. It raises `SceneError`.
* `cubecaster.gamemap` has `parse_map`, `scan_map`, `build_grid`,
  `check_closed`, `GameMap` and `PlayerStart`. It raises `MapError`.
* `cubecaster.xpm` has `load_xpm`, `parse_xpm_text`, `parse_xpm_lines`,
  `strip_comments`, `quoted_strings`, `split_words` and `XpmImage`. It raises
  `XpmError`.
* `cubecaster.colors` has `named_color` and `text_to_rgb`.
* `cubecaster.raycast` has `cast_ray`, `cast_rays`, `draw_column`,
  `wall_texture`, `Frame` and `RayHit`.
* `cubecaster.movement` has `move_player`, `step_keys`, `wall_blocked`,
  `rotate`, `Keys` and `Player`.
* `cubecaster.game` has `Game`, `load_textures` and `main`.