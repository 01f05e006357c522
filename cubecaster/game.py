"""Game state, keyboard handling and the main window loop."""

from __future__ import annotations

import sys
from array import array
from dataclasses import dataclass, field, replace
from typing import Sequence

import pygame

from cubecaster.movement import Keys, Player, move_player, rotate
from cubecaster.raycast import Frame, RayHit, Texture, cast_rays
from cubecaster.scene import Scene, SceneError, load_scene
from cubecaster.xpm import XpmError, XpmImage, load_xpm

_USAGE = "Usage: cubecaster <file containing colours, textures and map (*.cub)>"

_KEY_FIELDS = {
    pygame.K_w: "forward",
    pygame.K_d: "strafe_right",
    pygame.K_s: "backward",
    pygame.K_a: "strafe_left",
    pygame.K_LEFT: "turn_left",
    pygame.K_RIGHT: "turn_right",
}


@dataclass
class Game:
    """A running scene: held keys, player state and the frame being drawn."""

    scene: Scene
    textures: Sequence[Texture]
    frame: Frame = field(default_factory=Frame)
    keys: Keys = field(default_factory=Keys)
    player: Player = field(init=False)
    running: bool = field(default=True, init=False)

    def __post_init__(self) -> None:
        self.player = Player(
            self.scene.player_x, self.scene.player_y, self.scene.player_angle
        )

    def key_press(self, key: int) -> None:
        """Mark a movement key as held; Escape stops the game."""
        name = _KEY_FIELDS.get(key)
        if name is not None:
            setattr(self.keys, name, True)
        if key == pygame.K_ESCAPE:
            self.running = False

    def key_release(self, key: int) -> None:
        """Mark a movement key as released."""
        name = _KEY_FIELDS.get(key)
        if name is not None:
            setattr(self.keys, name, False)

    def update(self) -> Player:
        """Move, then turn, the player according to the held keys."""
        moved = move_player(self.scene.game_map, self.player, self.keys)
        self.player = replace(moved, angle=rotate(moved.angle, self.keys))
        return self.player

    def render(self) -> list[RayHit | None]:
        """Draw the player's view into ``frame``; return each column's hit."""
        return cast_rays(
            self.frame,
            self.scene.game_map,
            self.player.x,
            self.player.y,
            self.player.angle,
            self.textures,
            self.scene.ceiling,
            self.scene.floor,
        )


def load_textures(scene: Scene) -> tuple[XpmImage, ...]:
    """Load the scene's four wall textures in NO, SO, EA, WE order."""
    return tuple(load_xpm(path) for path in scene.textures)


def _frame_surface(frame: Frame) -> pygame.Surface:
    pixels = array("I", ((colour & 0xFFFFFF) << 8 for colour in frame.pixels))
    if sys.byteorder == "little":
        pixels.byteswap()
    return pygame.image.frombuffer(pixels.tobytes(), (frame.width, frame.height), "RGBX")


def _run(game: Game) -> int:
    pygame.init()
    try:
        screen = pygame.display.set_mode((game.frame.width, game.frame.height))
        pygame.display.set_caption("cubecaster")
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return 1
                if event.type == pygame.KEYDOWN:
                    game.key_press(event.key)
                elif event.type == pygame.KEYUP:
                    game.key_release(event.key)
            if not game.running:
                break
            game.update()
            game.render()
            screen.blit(_frame_surface(game.frame), (0, 0))
            pygame.display.flip()
        return 0
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Load the scene named on the command line and run it in a window."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print(_USAGE)
        return 1
    try:
        scene = load_scene(args[0])
    except SceneError as exc:
        print(exc)
        return 1
    try:
        textures = load_textures(scene)
    except XpmError:
        print("Invalid texture!")
        return 1
    return _run(Game(scene, textures))


if __name__ == "__main__":
    sys.exit(main())