"""Reading ``.cub`` scene descriptions: resolution, textures, colours and map."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from pathlib import Path

FOV = math.pi / 3
MAP_SCALE = 16

OPEN_CELLS = frozenset("02NSWE")
PLAYER_CELLS = frozenset("NSWE")
SPRITE_CELL = "2"

_LEADING_INT = re.compile(r"[\t\n\v\f\r ]*([+-]?)(\d*)")
_TEXTURE_KEYS = {"NO": "north", "SO": "south", "WE": "west", "EA": "east"}


class SceneError(ValueError):
    """Raised when a scene description cannot be used."""


@dataclass
class Player:
    """The player's position in map cells and viewing angle in radians."""

    x: float
    y: float
    angle: float


@dataclass
class Scene:
    """Everything a ``.cub`` file describes."""

    width: int = 0
    height: int = 0
    north: str | None = None
    south: str | None = None
    west: str | None = None
    east: str | None = None
    sprite: str | None = None
    floor: int = 0
    ceiling: int = 0
    rows: list[str] = field(default_factory=list)
    map_width: int = 0
    map_height: int = 0
    player: Player = field(default_factory=lambda: Player(0.0, 0.0, 0.0))
    sprites: list[tuple[float, float]] = field(default_factory=list)

    def projection_distance(self) -> float:
        """Distance from the eye to the projection plane, in pixels."""
        return self.width / 2 / math.tan(FOV / 2)


def split_fields(text: str, sep: str) -> list[str]:
    """Split ``text`` on the character ``sep``, dropping empty pieces."""
    return [piece for piece in text.split(sep) if piece]


def parse_int(text: str) -> int:
    """Read a leading optionally signed decimal integer; 0 if there is none."""
    match = _LEADING_INT.match(text)
    sign, digits = match.group(1), match.group(2)
    if not digits:
        return 0
    value = int(digits)
    return -value if sign == "-" else value


def check_cub_filename(path: str | Path) -> str:
    """Return ``path`` as a string if it names a ``.cub`` file, else raise."""
    name = str(path)
    if len(name) <= 4 or not name.endswith(".cub"):
        raise SceneError("wrong cub filename")
    return name


def heading_for(c: str) -> float:
    """Viewing angle for a player marker: N, S, W; anything else faces east."""
    return {"N": -math.pi / 2, "S": math.pi / 2, "W": math.pi}.get(c, 0.0)


def _is_component(text: str) -> bool:
    return 1 <= len(text) <= 3 and all(ch in "0123456789" for ch in text)


def parse_rgb(value: str, what: str) -> int:
    """Parse ``R,G,B`` into 0xRRGGBB; ``what`` names the surface in errors."""
    parts = split_fields(value, ",")
    if len(parts) < 3 or not all(_is_component(part) for part in parts[:3]):
        raise SceneError(f"wrong RGB param of {what}")
    red, green, blue = (parse_int(part) for part in parts[:3])
    if any(not 0 <= channel <= 255 for channel in (red, green, blue)):
        raise SceneError(f"wrong RGB param of {what}")
    return (red << 16) + (green << 8) + blue


def _bad_neighbour(rows: list[str], i: int, j: int) -> bool:
    if not 0 <= i < len(rows):
        return True
    row = rows[i]
    if not 0 <= j < len(row):
        return True
    return row[j] == " "


def is_valid_map(rows: list[str]) -> bool:
    """True if every open cell is surrounded by cells and the map has no stray characters."""
    for i, row in enumerate(rows):
        for j, cell in enumerate(row):
            if cell in OPEN_CELLS:
                if any(
                    _bad_neighbour(rows, i + di, j + dj)
                    for di in (-1, 0, 1)
                    for dj in (-1, 0, 1)
                    if di or dj
                ):
                    return False
            elif cell not in "1 ":
                return False
    return True


def find_player(rows: list[str]) -> Player:
    """Locate the single player marker and place the player at its cell centre."""
    found: Player | None = None
    for i, row in enumerate(rows):
        for j, cell in enumerate(row):
            if cell in PLAYER_CELLS:
                if found is not None:
                    raise SceneError("more than one player on the map")
                found = Player(j + 0.5, i + 0.5, heading_for(cell))
    if found is None:
        raise SceneError("no player on the map")
    return found


def find_sprites(rows: list[str]) -> list[tuple[float, float]]:
    """Centres of all sprite cells, in row order."""
    return [
        (j + 0.5, i + 0.5)
        for i, row in enumerate(rows)
        for j, cell in enumerate(row)
        if cell == SPRITE_CELL
    ]


def _field(words: list[str], index: int, line: str) -> str:
    try:
        return words[index]
    except IndexError:
        raise SceneError(f"incomplete line: {line!r}") from None


def _apply_setting(scene: Scene, line: str) -> None:
    words = split_fields(line, " ")
    key = line[0]
    if key == "R":
        scene.width = parse_int(_field(words, 1, line))
        scene.height = parse_int(_field(words, 2, line))
    elif key == "F":
        scene.floor = parse_rgb(_field(words, 1, line), "floor")
    elif key == "C":
        scene.ceiling = parse_rgb(_field(words, 1, line), "ceiling")
    elif line[:2] in _TEXTURE_KEYS:
        setattr(scene, _TEXTURE_KEYS[line[:2]], _field(words, 1, line))
    else:
        scene.sprite = _field(words, 1, line)


def _is_setting(line: str) -> bool:
    head = line[:2]
    return line[0] in "RFC" or head in _TEXTURE_KEYS or head == "S "


def parse_scene(text: str) -> Scene:
    """Parse the text of a ``.cub`` file into a scene."""
    lines = split_fields(text, "\n")
    scene = Scene()
    map_start: int | None = None
    for index, line in enumerate(lines):
        if _is_setting(line):
            _apply_setting(scene, line)
        elif line[0] in " 1":
            if map_start is None:
                map_start = index
            scene.map_height += 1
            scene.map_width = max(scene.map_width, len(line))
    if map_start is None:
        raise SceneError("no map in scene")
    scene.rows = lines[map_start:]
    scene.player = find_player(scene.rows)
    scene.sprites = find_sprites(scene.rows)
    return scene


def load_scene(path: str | Path) -> Scene:
    """Read and parse the ``.cub`` file at ``path``."""
    name = check_cub_filename(path)
    return parse_scene(Path(name).read_text(encoding="utf-8"))