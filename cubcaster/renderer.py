"""Drawing frames of a scene: walls, sprites, floor, ceiling and a minimap."""

from __future__ import annotations

import math
from enum import IntEnum

from cubcaster.image import Image
from cubcaster.raycast import (
    Ray,
    Sprite,
    cast_rays,
    project_sprite,
    sort_sprites,
    wall_texture_key,
)
from cubcaster.scene import MAP_SCALE, Player, Scene

TURN_STEP = 0.2
WALL_COLOR = 0x00FF00
PLAYER_COLOR = 250000000
ALPHA_MASK = 0xFF000000
PLAYER_HALF = 2


class Key(IntEnum):
    """Key codes the game reacts to."""

    A = 0
    S = 1
    D = 2
    W = 13
    ESCAPE = 53
    LEFT = 123
    RIGHT = 124


def move_player(player: Player, key: int) -> Player:
    """Move or turn the player for a key press; Escape raises SystemExit.

    Unknown keys leave the player as it is. The player is changed in place
    and returned.
    """
    try:
        key = Key(key)
    except ValueError:
        return player
    step = 1 / MAP_SCALE
    c, s = math.cos(player.angle), math.sin(player.angle)
    if key is Key.W:
        player.x += c * step
        player.y += s * step
    elif key is Key.S:
        player.x -= c * step
        player.y -= s * step
    elif key is Key.A:
        player.x += s * step
        player.y -= c * step
    elif key is Key.D:
        player.x -= s * step
        player.y += c * step
    elif key is Key.LEFT:
        player.angle -= TURN_STEP
    elif key is Key.RIGHT:
        player.angle += TURN_STEP
    elif key is Key.ESCAPE:
        raise SystemExit(0)
    return player


def _usable(texture: Image | None) -> bool:
    return texture is not None and texture.width > 0 and texture.height > 0


def _sample(texture: Image, u: float, v: float) -> int:
    x = min(max(int(u), 0), texture.width - 1)
    y = min(max(int(v), 0), texture.height - 1)
    return texture.get_pixel(x, y)


class Renderer:
    """Renders a scene into a frame image using textures keyed by name.

    Texture keys are "north", "south", "west", "east" and "sprite".
    """

    def __init__(self, scene: Scene, textures: dict[str, Image] | None = None) -> None:
        self.scene = scene
        self.textures = dict(textures or {})
        self.frame = Image(scene.width, scene.height)
        self.plane = scene.projection_distance()
        self.rays: list[Ray] = []

    def clear(self) -> None:
        """Fill the upper half with the ceiling colour and the rest with the floor."""
        half = self.frame.height / 2
        for y in range(self.frame.height):
            color = self.scene.ceiling if y <= half else self.scene.floor
            for x in range(self.frame.width):
                self.frame.put_pixel(x, y, color)

    def draw_column(self, ray: Ray, column: int, texture: Image | None) -> None:
        """Draw the textured wall slice a ray hit into one screen column."""
        if not _usable(texture):
            return
        height = self.frame.height
        param = ray.size / texture.height
        coord = ray.x if ray.hit_x else ray.y
        tx = (coord - int(coord)) * texture.width
        wall_start = height / 2 - ray.size / 2
        offset = 0.0
        if ray.size > height:
            wall_start = 0.0
            offset = (ray.size - height) / 2 / param
        for i in range(math.ceil(min(ray.size, height))):
            color = _sample(texture, tx, offset + i / param)
            self.frame.put_pixel(column, int(wall_start + i), color)

    def draw_sprite(self, sprite: Sprite, rays: list[Ray]) -> None:
        """Draw a projected sprite where it is nearer than the walls behind it."""
        texture = self.textures.get("sprite")
        if not _usable(texture):
            return
        width, height = self.frame.width, self.frame.height
        size = sprite.size
        j = max(0, math.ceil(-sprite.x_offset))
        while j <= size and sprite.x_offset + j < width:
            column = int(sprite.x_offset) + j
            if 0 <= column < len(rays) and rays[column].distance > sprite.distance:
                z = max(0, math.ceil(-sprite.y_offset))
                while z < size and sprite.y_offset + z < height:
                    color = _sample(
                        texture, j * texture.height / size, z * texture.height / size
                    )
                    if color & ALPHA_MASK == 0:
                        self.frame.put_pixel(
                            sprite.x_offset + j, sprite.y_offset + z, color
                        )
                    z += 1
            j += 1

    def draw_minimap(self) -> None:
        """Outline every wall cell and the player in the top-left corner."""
        half = MAP_SCALE // 2
        for i, row in enumerate(self.scene.rows):
            for j, cell in enumerate(row):
                if cell == "1":
                    self.frame.draw_square_outline(
                        j * MAP_SCALE + half, i * MAP_SCALE + half, half, WALL_COLOR
                    )
        player = self.scene.player
        self.frame.draw_square_outline(
            int(player.x * MAP_SCALE), int(player.y * MAP_SCALE), PLAYER_HALF, PLAYER_COLOR
        )

    def render_frame(self) -> Image:
        """Render the whole view from the player's position and return the frame."""
        scene = self.scene
        width, height = self.frame.width, self.frame.height
        self.clear()
        self.rays = cast_rays(scene.rows, scene.player, width, self.plane)
        for column, ray in enumerate(self.rays):
            self.draw_column(ray, column, self.textures.get(wall_texture_key(ray)))
        sprites = sort_sprites(
            project_sprite(Sprite(x, y), scene.player, width, height, self.plane)
            for x, y in scene.sprites
        )
        for sprite in sprites:
            self.draw_sprite(sprite, self.rays)
        self.draw_minimap()
        return self.frame