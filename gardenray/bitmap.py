"""Copying rectangles between byte-per-pixel bitmaps."""

from __future__ import annotations

SCREEN_WIDTH = 320


def _check_rect(x1, y1, width, height, row_width, length):
    if width < 0 or height < 0:
        raise ValueError("width and height must not be negative")
    if width == 0 or height == 0:
        return
    if x1 < 0 or y1 < 0 or x1 + width > row_width:
        raise IndexError("rectangle lies outside the bitmap")
    if (y1 + height - 1) * row_width + x1 + width > length:
        raise IndexError("rectangle lies outside the bitmap")


def grab(x1, y1, width, height, swidth, screen):
    """Copy a rectangle out of a bitmap whose rows are ``swidth`` bytes."""
    _check_rect(x1, y1, width, height, swidth, len(screen))
    return b"".join(
        bytes(screen[start:start + width])
        for start in range((y1) * swidth + x1,
                           (y1 + height) * swidth + x1, swidth)
    ) if width and height else b""


def blit(x1, y1, width, height, screen, sprite):
    """Copy ``sprite`` into the 320-wide ``screen`` at (x1, y1), in place."""
    if len(sprite) < width * height:
        raise ValueError(
            f"sprite holds {len(sprite)} bytes, needs {width * height}"
        )
    _check_rect(x1, y1, width, height, SCREEN_WIDTH, len(screen))
    for row in range(height):
        start = (y1 + row) * SCREEN_WIDTH + x1
        screen[start:start + width] = sprite[row * width:(row + 1) * width]