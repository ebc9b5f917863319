"""Casting view rays through a grid map and projecting sprites onto the screen."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, replace

from cubcaster.scene import FOV, Player

STEP_DIVISOR = 120
REFINE_STEPS = 20
WALL_CELL = "1"

_MIN_DISTANCE = 1e-6


@dataclass
class Ray:
    """Where one screen column's ray hit a wall and how tall that wall appears."""

    x: float
    y: float
    angle: float
    distance: float
    size: float
    hit_x: bool
    quadrant: int


@dataclass
class Sprite:
    """A sprite on the map and, once projected, its place on the screen."""

    x: float
    y: float
    direction: float = 0.0
    distance: float = 0.0
    size: float = 0.0
    x_offset: float = 0.0
    y_offset: float = 0.0


def normalize_angle(angle: float) -> float:
    """Bring an angle that is at most one turn off back into [-pi, pi]."""
    if angle > math.pi:
        angle -= 2 * math.pi
    if angle < -math.pi:
        angle += 2 * math.pi
    return angle


def quadrant(angle: float) -> int:
    """Quadrant of a direction: 1 down-right, 2 down-left, 3 up-left, 4 up-right."""
    c, s = math.cos(angle), math.sin(angle)
    if c > 0 and s > 0:
        return 1
    if s > 0 and c < 0:
        return 2
    if c > 0 and s < 0:
        return 4
    return 3


def _is_wall(rows: list[str], x: float, y: float) -> bool:
    i, j = int(y), int(x)
    if y < 0 or x < 0 or i >= len(rows) or j >= len(rows[i]):
        return True
    return rows[i][j] == WALL_CELL


def cast_ray(rows: list[str], x: float, y: float, angle: float) -> tuple[float, float]:
    """March from (x, y) along ``angle`` until a wall, then refine the hit point.

    Positions outside the map count as walls.
    """
    dx = math.cos(angle) / STEP_DIVISOR
    dy = math.sin(angle) / STEP_DIVISOR
    while not _is_wall(rows, x, y):
        x += dx
        y += dy
    for _ in range(REFINE_STEPS):
        if _is_wall(rows, x - dx / 2, y - dy / 2):
            x -= dx / 2
            y -= dy / 2
        else:
            dx /= 2
            dy /= 2
    return x, y


def cast_rays(rows: list[str], player: Player, width: int, plane: float) -> list[Ray]:
    """Cast one ray per screen column across the field of view.

    The player's angle is normalised in place first.
    """
    player.angle = normalize_angle(player.angle)
    step = FOV / width if width else 0.0
    start = player.angle - FOV / 2
    rays = []
    for column in range(width):
        angle = start + column * step
        hx, hy = cast_ray(rows, player.x, player.y, angle)
        distance = math.hypot(hx - player.x, hy - player.y) * math.cos(player.angle - angle)
        distance = max(distance, _MIN_DISTANCE)
        rays.append(
            Ray(
                x=hx,
                y=hy,
                angle=angle,
                distance=distance,
                size=plane / distance,
                hit_x=abs(hy - round(hy)) < abs(hx - round(hx)),
                quadrant=quadrant(angle),
            )
        )
    return rays


def wall_texture_key(ray: Ray) -> str:
    """Name of the wall texture ("north", "south", "west", "east") a ray sees."""
    if ray.hit_x:
        return "north" if ray.quadrant in (3, 4) else "south"
    return "west" if ray.quadrant in (2, 3) else "east"


def project_sprite(
    sprite: Sprite, player: Player, width: int, height: int, plane: float
) -> Sprite:
    """Return ``sprite`` with its direction, distance, size and screen offsets set."""
    direction = normalize_angle(
        math.atan2(sprite.y - player.y, sprite.x - player.x) - player.angle
    )
    distance = math.hypot(player.x - sprite.x, player.y - sprite.y)
    size = plane / max(distance, _MIN_DISTANCE)
    return replace(
        sprite,
        direction=direction,
        distance=distance,
        size=size,
        x_offset=width / 2 + direction / (FOV / width) - size / 2,
        y_offset=height / 2 - size / 2,
    )


def sort_sprites(sprites: Iterable[Sprite]) -> list[Sprite]:
    """Sprites ordered farthest first, the order they are painted in."""
    return sorted(sprites, key=lambda sprite: sprite.distance, reverse=True)