"""In-memory 32-bit pixel images."""

from __future__ import annotations

from dataclasses import dataclass, field

_MASK = 0xFFFFFFFF


@dataclass
class Image:
    """A ``width`` x ``height`` grid of 0xAARRGGBB pixels stored row by row."""

    width: int
    height: int
    pixels: list[int] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("image dimensions must not be negative")
        size = self.width * self.height
        if not self.pixels:
            self.pixels = [0] * size
        elif len(self.pixels) != size:
            raise ValueError(
                f"expected {size} pixels for a {self.width}x{self.height} image, "
                f"got {len(self.pixels)}"
            )

    def _contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel at (x, y); raise IndexError outside the image."""
        x, y = int(x), int(y)
        if not self._contains(x, y):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.pixels[y * self.width + x]

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set the pixel at (x, y); writes outside the image are dropped."""
        x, y = int(x), int(y)
        if self._contains(x, y):
            self.pixels[y * self.width + x] = color & _MASK

    def draw_square_outline(self, cx: int, cy: int, half: int, color: int) -> None:
        """Draw the outline of the square spanning ``cx ± half``, ``cy ± half``."""
        left, right = cx - half, cx + half
        top, bottom = cy - half, cy + half
        for y in range(top, bottom + 1):
            self.put_pixel(left, y, color)
            self.put_pixel(right, y, color)
        for x in range(left, right + 1):
            self.put_pixel(x, top, color)
            self.put_pixel(x, bottom, color)