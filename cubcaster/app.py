"""Command-line entry point: load a ``.cub`` scene and show it in a window."""

from __future__ import annotations

import sys
from array import array
from collections.abc import Sequence

from cubcaster.image import Image
from cubcaster.renderer import Key, Renderer, move_player
from cubcaster.scene import Scene, SceneError, load_scene
from cubcaster.xpm import XpmError, load_xpm

WINDOW_TITLE = "Game Window"
FRAMES_PER_SECOND = 60
_KEY_REPEAT_DELAY_MS = 200
_KEY_REPEAT_INTERVAL_MS = 30

_TEXTURE_SLOTS = ("north", "south", "west", "east", "sprite")


def load_textures(scene: Scene) -> dict[str, Image]:
    """Load the scene's XPM textures, keyed by slot name.

    Slots without a path, and files that cannot be read or parsed, are left
    out of the result.
    """
    textures: dict[str, Image] = {}
    for slot in _TEXTURE_SLOTS:
        path = getattr(scene, slot)
        if not path:
            continue
        try:
            textures[slot] = load_xpm(path)
        except (OSError, XpmError):
            continue
    return textures


def _report(message: str) -> None:
    print(f"Error\n{message}", file=sys.stderr)


def _frame_bytes(frame: Image) -> bytes:
    """Pixels as opaque ARGB bytes, one row after another."""
    data = array("I", ((p & 0xFFFFFF) | 0xFF000000 for p in frame.pixels))
    if sys.byteorder == "little":
        data.byteswap()
    return data.tobytes()


def _run_window(renderer: Renderer) -> None:
    import pygame

    key_map = {
        pygame.K_w: Key.W,
        pygame.K_s: Key.S,
        pygame.K_a: Key.A,
        pygame.K_d: Key.D,
        pygame.K_LEFT: Key.LEFT,
        pygame.K_RIGHT: Key.RIGHT,
        pygame.K_ESCAPE: Key.ESCAPE,
    }
    size = (renderer.scene.width, renderer.scene.height)
    pygame.init()
    try:
        screen = pygame.display.set_mode(size)
        pygame.display.set_caption(WINDOW_TITLE)
        pygame.key.set_repeat(_KEY_REPEAT_DELAY_MS, _KEY_REPEAT_INTERVAL_MS)
        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key in key_map:
                    try:
                        move_player(renderer.scene.player, key_map[event.key])
                    except SystemExit:
                        running = False
            if not running:
                break
            frame = renderer.render_frame()
            surface = pygame.image.frombuffer(_frame_bytes(frame), size, "ARGB")
            screen.blit(surface, (0, 0))
            pygame.display.flip()
            clock.tick(FRAMES_PER_SECOND)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the game on the ``.cub`` file named by the single argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print("Error: invalid number of args", file=sys.stderr)
        return 1
    path = args[0]
    try:
        scene = load_scene(path)
    except SceneError as error:
        _report(str(error))
        return 1
    except OSError as error:
        _report(f"cannot read {path}: {error.strerror or error}")
        return 1
    except UnicodeDecodeError:
        _report(f"cannot read {path}: not a text file")
        return 1
    if scene.width <= 0 or scene.height <= 0:
        _report("invalid resolution")
        return 1
    _run_window(Renderer(scene, load_textures(scene)))
    return 0


if __name__ == "__main__":
    sys.exit(main())