import math

import pytest

from cubcaster.image import Image
from cubcaster.raycast import Ray, Sprite
from cubcaster.renderer import (
    PLAYER_COLOR,
    WALL_COLOR,
    Key,
    Renderer,
    move_player,
)
from cubcaster.scene import MAP_SCALE, Player, parse_scene

HEADER = (
    "R {w} {h}\n"
    "NO ./n.xpm\n"
    "SO ./s.xpm\n"
    "WE ./w.xpm\n"
    "EA ./e.xpm\n"
    "S ./sp.xpm\n"
    "F 10,20,30\n"
    "C 40,50,60\n"
)

SMALL_MAP = "11111\n10001\n10N01\n10001\n11111\n"
SPRITE_MAP = "1111111\n1000001\n1002001\n1000001\n100N001\n1111111\n"

NORTH, SOUTH, WEST, EAST, SPRITE = 0x111111, 0x222222, 0x333333, 0x444444, 0x00ABCDEF


def _uniform(color, size=4):
    return Image(size, size, [color] * (size * size))


def _textures(sprite_color=SPRITE):
    return {
        "north": _uniform(NORTH),
        "south": _uniform(SOUTH),
        "west": _uniform(WEST),
        "east": _uniform(EAST),
        "sprite": _uniform(sprite_color),
    }


def _scene(map_text=SMALL_MAP, w=200, h=150):
    return parse_scene(HEADER.format(w=w, h=h) + map_text)


def _far_rays(count, distance=10.0):
    return [
        Ray(x=0.0, y=0.0, angle=0.0, distance=distance, size=1.0, hit_x=True, quadrant=1)
        for _ in range(count)
    ]


def test_move_forward_and_back_round_trip():
    player = Player(2.5, 2.5, 0.0)
    move_player(player, Key.W)
    assert player.x == pytest.approx(2.5 + 1 / MAP_SCALE)
    assert player.y == pytest.approx(2.5)
    move_player(player, Key.S)
    assert player.x == pytest.approx(2.5)


def test_move_strafe_left_and_right():
    player = Player(2.5, 2.5, 0.0)
    move_player(player, Key.A)
    assert player.y == pytest.approx(2.5 - 1 / MAP_SCALE)
    move_player(player, Key.D)
    assert player.y == pytest.approx(2.5)
    assert player.x == pytest.approx(2.5)


def test_turning_keys_rotate():
    player = Player(0.0, 0.0, 1.0)
    move_player(player, Key.LEFT)
    assert player.angle == pytest.approx(0.8)
    move_player(player, int(Key.RIGHT))
    assert player.angle == pytest.approx(1.0)


def test_unknown_key_changes_nothing():
    player = Player(1.5, 1.5, 0.3)
    assert move_player(player, 99) == Player(1.5, 1.5, 0.3)


def test_escape_exits():
    with pytest.raises(SystemExit):
        move_player(Player(0.0, 0.0, 0.0), Key.ESCAPE)


def test_clear_fills_ceiling_and_floor():
    scene = _scene()
    renderer = Renderer(scene, _textures())
    renderer.clear()
    assert renderer.frame.get_pixel(0, 0) == scene.ceiling
    assert renderer.frame.get_pixel(199, 149) == scene.floor
    assert renderer.frame.get_pixel(100, 75) == scene.ceiling


def test_draw_column_centres_wall():
    renderer = Renderer(_scene(), _textures())
    ray = Ray(x=2.5, y=1.0, angle=0.0, distance=1.5, size=30.0, hit_x=True, quadrant=4)
    renderer.draw_column(ray, 5, _uniform(0x123456))
    assert renderer.frame.get_pixel(5, 75) == 0x123456
    assert renderer.frame.get_pixel(5, 0) == 0
    assert renderer.frame.get_pixel(6, 75) == 0


def test_draw_column_tall_wall_fills_column():
    renderer = Renderer(_scene(), _textures())
    ray = Ray(x=2.5, y=1.0, angle=0.0, distance=0.1, size=1000.0, hit_x=True, quadrant=4)
    renderer.draw_column(ray, 5, _uniform(0x123456))
    assert all(renderer.frame.get_pixel(5, y) == 0x123456 for y in range(150))


def test_draw_column_picks_texture_column_from_hit():
    renderer = Renderer(_scene(), _textures())
    texture = Image(2, 1, [0x0000AA, 0x0000BB])
    left = Ray(x=2.25, y=1.0, angle=0.0, distance=1.0, size=10.0, hit_x=True, quadrant=4)
    right = Ray(x=2.75, y=1.0, angle=0.0, distance=1.0, size=10.0, hit_x=True, quadrant=4)
    renderer.draw_column(left, 1, texture)
    renderer.draw_column(right, 2, texture)
    assert renderer.frame.get_pixel(1, 75) == 0x0000AA
    assert renderer.frame.get_pixel(2, 75) == 0x0000BB


def test_draw_column_without_texture_draws_nothing():
    renderer = Renderer(_scene(), {})
    ray = Ray(x=2.5, y=1.0, angle=0.0, distance=1.0, size=50.0, hit_x=True, quadrant=4)
    renderer.draw_column(ray, 5, None)
    assert all(renderer.frame.get_pixel(5, y) == 0 for y in range(150))


def test_draw_sprite_opaque_in_front_of_walls():
    renderer = Renderer(_scene(), _textures())
    sprite = Sprite(0.0, 0.0, distance=1.0, size=4.0, x_offset=10.0, y_offset=10.0)
    renderer.draw_sprite(sprite, _far_rays(200))
    assert renderer.frame.get_pixel(10, 10) == SPRITE
    assert renderer.frame.get_pixel(13, 13) == SPRITE
    assert renderer.frame.get_pixel(9, 10) == 0


def test_draw_sprite_hidden_behind_nearer_wall():
    renderer = Renderer(_scene(), _textures())
    sprite = Sprite(0.0, 0.0, distance=1.0, size=4.0, x_offset=10.0, y_offset=10.0)
    renderer.draw_sprite(sprite, _far_rays(200, distance=0.5))
    assert renderer.frame.get_pixel(10, 10) == 0


def test_draw_sprite_transparent_pixels_skipped():
    renderer = Renderer(_scene(), _textures(sprite_color=0xFF000000))
    sprite = Sprite(0.0, 0.0, distance=1.0, size=4.0, x_offset=10.0, y_offset=10.0)
    renderer.draw_sprite(sprite, _far_rays(200))
    assert renderer.frame.get_pixel(10, 10) == 0


def test_draw_sprite_partly_off_screen():
    renderer = Renderer(_scene(), _textures())
    sprite = Sprite(0.0, 0.0, distance=1.0, size=6.0, x_offset=-3.0, y_offset=-3.0)
    renderer.draw_sprite(sprite, _far_rays(200))
    assert renderer.frame.get_pixel(0, 0) == SPRITE
    assert renderer.frame.get_pixel(3, 3) == 0


def test_draw_minimap_walls_and_player():
    scene = _scene()
    renderer = Renderer(scene, _textures())
    renderer.draw_minimap()
    assert renderer.frame.get_pixel(0, 0) == WALL_COLOR
    assert renderer.frame.get_pixel(MAP_SCALE, 0) == WALL_COLOR
    px = int(scene.player.x * MAP_SCALE)
    py = int(scene.player.y * MAP_SCALE)
    assert renderer.frame.get_pixel(px - 2, py) == PLAYER_COLOR & 0xFFFFFFFF
    assert renderer.frame.get_pixel(px, py) == 0


def test_render_frame_shows_north_wall_ahead():
    scene = _scene()
    renderer = Renderer(scene, _textures())
    frame = renderer.render_frame()
    assert frame is renderer.frame
    assert len(renderer.rays) == scene.width
    assert frame.get_pixel(100, 75) == NORTH
    assert frame.get_pixel(199, 0) == scene.ceiling
    assert frame.get_pixel(199, 149) == scene.floor


def test_render_frame_draws_sprite_in_front():
    scene = _scene(SPRITE_MAP, w=400, h=300)
    renderer = Renderer(scene, _textures())
    frame = renderer.render_frame()
    assert frame.get_pixel(200, 150) == SPRITE


def test_render_frame_transparent_sprite_shows_wall():
    scene = _scene(SPRITE_MAP, w=400, h=300)
    renderer = Renderer(scene, _textures(sprite_color=0xFF000000))
    frame = renderer.render_frame()
    assert frame.get_pixel(200, 150) == NORTH


def test_render_frame_normalizes_player_angle():
    scene = _scene()
    scene.player.angle = -math.pi / 2 + 2 * math.pi
    Renderer(scene, _textures()).render_frame()
    assert scene.player.angle == pytest.approx(-math.pi / 2)