# cubcaster

A small first-person raycasting viewer. It reads a `.cub` scene file, which
gives the screen resolution, floor and ceiling colours, wall and sprite
textures in XPM format, and a grid map. It then shows the scene in a window
where you can walk around.

## Installing

```
pip install .
```

This installs `pygame`, which opens the window and reads the keyboard.
To run the tests, install the `test` extra (`pip install .[test]`) and run
`pytest`.

## Running

```
cubcaster path/to/scene.cub
```

The program takes exactly one argument, a file name that ends in `.cub`.
If the argument count is wrong, the file name does not end in `.cub`, the
file cannot be read or parsed, or the resolution is not positive, the
program prints an error to standard error and exits with status 1.

### Controls

| Key         | Action               |
|-------------|----------------------|
| W / S       | step forward / back  |
| A / D       | step sideways        |
| Left/Right  | turn                 |
| Escape      | quit                 |

Closing the window also quits. Each frame draws a minimap over the view in
the top-left corner, with every wall cell and the player outlined.

## The `.cub` format

```
R 640 480
NO ./textures/north.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
S ./textures/sprite.xpm
F 220,100,0
C 225,30,0
111111
100101
102001
1100N1
111111
```

* `R width height`: window size in pixels.
* `NO`, `SO`, `WE`, `EA`: wall textures. `S`: the sprite texture.
* `F r,g,b` and `C r,g,b`: floor and ceiling colours. Each part must be
  one to three digits and no more than 255. Anything else is an error.
* The map comes last. Its first line starts with `1` or a space, and every
  non-empty line from there to the end of the file is part of the map.
  `1` is a wall, `0` is empty floor, `2` is a sprite, and one of `N`, `S`,
  `E`, `W` marks where the player starts and which way they face. The map
  must hold exactly one player marker.

Empty lines are ignored. A texture that is missing or cannot be read as an
XPM image is skipped, and the walls or sprites that would use it are not
drawn.

## Using it as a library

The parts also work on their own:

* `cubcaster.scene`: `load_scene(path)` and `parse_scene(text)` return a
  `Scene`. `parse_rgb`, `find_player`, `find_sprites` and `is_valid_map`
  are available too. `is_valid_map(rows)` reports whether every open cell
  is surrounded by map cells on all eight sides and the map holds only
  known characters. Errors are raised as `SceneError`.
* `cubcaster.xpm`: `load_xpm(path)`, `parse_xpm_text(text)` and
  `parse_xpm(lines)` read XPM images into an `Image`. Colour `None` becomes
  the transparent value `0xFF000000`. Errors are raised as `XpmError`.
* `cubcaster.colors`: `lookup_color(name)` turns X11 colour names into
  `0xRRGGBB` values. `text_to_rgb(name, end)` also accepts `#RRGGBB` and
  gives 0 for unknown names.
* `cubcaster.image.Image`: a 32-bit pixel grid with `get_pixel`,
  `put_pixel` and `draw_square_outline`.
* `cubcaster.raycast`: `cast_rays(rows, player, width, plane)` returns
  one `Ray` per screen column. `project_sprite(...)` places a `Sprite`
  on the screen, and `sort_sprites` orders sprites farthest first.
* `cubcaster.renderer`: `Renderer(scene, textures).render_frame()` draws
  a whole frame into an `Image` without opening a window.
  `move_player(player, key)` applies a `Key` press to a `Player`.

## Limitations

* Loading a scene does not call `is_valid_map`, so the program does not
  reject an unclosed map. Call `is_valid_map` yourself if you need that
  check.
* Movement does not check for walls, so the player can walk through them.
* Only XPM textures are supported.
* There is no option to save a frame to a file, and there is no sound.