import pytest

from cubcaster.image import Image


def test_new_image_is_blank():
    img = Image(3, 2)
    assert img.pixels == [0] * 6


def test_put_then_get_round_trip():
    img = Image(4, 3)
    img.put_pixel(2, 1, 0x123456)
    assert img.get_pixel(2, 1) == 0x123456
    assert img.pixels[1 * 4 + 2] == 0x123456


def test_color_is_stored_as_unsigned_32_bits():
    img = Image(1, 1)
    img.put_pixel(0, 0, -1)
    assert img.get_pixel(0, 0) == 0xFFFFFFFF


def test_out_of_bounds_write_is_dropped():
    img = Image(2, 2)
    img.put_pixel(5, 0, 0xFF)
    img.put_pixel(-1, 1, 0xFF)
    img.put_pixel(0, 2, 0xFF)
    assert img.pixels == [0, 0, 0, 0]


def test_out_of_bounds_read_raises():
    img = Image(2, 2)
    with pytest.raises(IndexError):
        img.get_pixel(2, 0)
    with pytest.raises(IndexError):
        img.get_pixel(0, -1)


def test_float_coordinates_are_truncated():
    img = Image(3, 3)
    img.put_pixel(1.7, 2.2, 0xAB)
    assert img.get_pixel(1, 2) == 0xAB


def test_mismatched_pixel_buffer_rejected():
    with pytest.raises(ValueError):
        Image(2, 2, [1, 2, 3])


def test_existing_pixels_are_kept():
    img = Image(2, 1, [7, 9])
    assert img.get_pixel(1, 0) == 9


def test_square_outline_sets_only_border():
    img = Image(10, 10)
    img.draw_square_outline(5, 5, 2, 0xFF00)
    set_points = {
        (x, y) for y in range(10) for x in range(10) if img.get_pixel(x, y) == 0xFF00
    }
    for x, y in set_points:
        assert x in (3, 7) or y in (3, 7)
        assert 3 <= x <= 7 and 3 <= y <= 7
    for corner in [(3, 3), (7, 3), (3, 7), (7, 7)]:
        assert corner in set_points
    assert img.get_pixel(5, 5) == 0
    assert (5, 3) in set_points and (3, 5) in set_points


def test_square_outline_clips_at_edges():
    img = Image(4, 4)
    img.draw_square_outline(0, 0, 2, 0xFF)
    assert img.get_pixel(2, 0) == 0xFF
    assert img.get_pixel(0, 2) == 0xFF
    assert img.get_pixel(1, 1) == 0