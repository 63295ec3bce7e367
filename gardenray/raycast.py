"""Light-sourced raycasting of a grid maze with textured walls, floor and ceiling."""

from __future__ import annotations

import math
from dataclasses import dataclass

from gardenray.lighting import MAX_LIGHT

SCREEN_WIDTH = 320
SCREEN_HEIGHT = 200
WALL_HEIGHT = 64
VIEWER_DISTANCE = 192
VIEWPORT_LEFT = 0
VIEWPORT_RIGHT = 319
VIEWPORT_TOP = 0
VIEWPORT_BOT = 199
VIEWPORT_CENTER = VIEWPORT_TOP + (VIEWPORT_BOT - VIEWPORT_TOP) // 2
SCREEN_CENTER_COLUMN = 160
HORIZON_ROW = 100
IMAGE_WIDTH = 64
IMAGE_HEIGHT = 64
TILES_PER_ROW = 5
CELL_SIZE = 64
RAY_LENGTH = 1024
MIN_SLOPE = 0.0001


@dataclass(frozen=True)
class View:
    """Where the viewer stands, which way they look and how bright it is.

    An angle of 0 looks along increasing y; angles are in radians.
    """

    x: int = 8 * 64 + 32
    y: int = 8 * 64 + 32
    angle: float = 3.14
    height: int = 32
    ambient: int = 0


@dataclass(frozen=True)
class RayHit:
    """The point where a ray first meets a wall cube."""

    x: float
    y: float
    xmaze: int
    ymaze: int
    tile: int
    column: int


def new_screen():
    """A blank 320x200 byte-per-pixel screen."""
    return bytearray(SCREEN_WIDTH * SCREEN_HEIGHT)


def _tdiv(a, b):
    """Integer division truncating towards zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _cell(grid, xmaze, ymaze):
    """The map value at (xmaze, ymaze), or None outside the map."""
    if 0 <= xmaze < len(grid):
        column = grid[xmaze]
        if 0 <= ymaze < len(column):
            return column[ymaze]
    return None


def _tile_origin(tile):
    if tile < 0:
        raise ValueError(f"tile numbers must not be negative, got {tile}")
    row, col = divmod(tile, TILES_PER_ROW)
    return row * SCREEN_WIDTH * IMAGE_HEIGHT + col * IMAGE_WIDTH


def cast_ray(walls, xview, yview, radians):
    """Follow a ray from grid line to grid line until it reaches a wall.

    Raises ValueError if the ray leaves the map without meeting a wall.
    """
    xdiff = int(-RAY_LENGTH * math.sin(radians))
    ydiff = int(RAY_LENGTH * math.cos(radians))
    if xdiff == 0:
        xdiff = 1
    slope = ydiff / xdiff
    if slope == 0:
        slope = MIN_SLOPE

    x = float(xview)
    y = float(yview)
    while True:
        base_x = int(x) & ~0x3F
        base_y = int(y) & ~0x3F
        grid_x = base_x + CELL_SIZE if xdiff > 0 else base_x - 1
        grid_y = base_y + CELL_SIZE if ydiff > 0 else base_y - 1

        xcross_x, xcross_y = float(grid_x), y + slope * (grid_x - x)
        ycross_x, ycross_y = x + (grid_y - y) / slope, float(grid_y)

        xdist = int(math.hypot(xcross_x - x, xcross_y - y))
        ydist = int(math.hypot(ycross_x - x, ycross_y - y))

        if xdist < ydist:
            x, y = xcross_x, xcross_y
            column = int(y) & 0x3F
        else:
            x, y = ycross_x, ycross_y
            column = int(x) & 0x3F

        xmaze = int(x / CELL_SIZE)
        ymaze = int(y / CELL_SIZE)
        tile = _cell(walls, xmaze, ymaze)
        if tile is None:
            raise ValueError(
                f"ray from ({xview}, {yview}) left the map without hitting a wall"
            )
        if tile:
            return RayHit(x=x, y=y, xmaze=xmaze, ymaze=ymaze,
                          tile=tile, column=column)


@dataclass
class _Renderer:
    screen: bytearray
    view: View
    textures: bytes
    light_table: list
    levels: bytes

    def shade(self, distance, color):
        if self.levels:
            index = max(0, min(distance, len(self.levels) - 1))
            base = self.levels[index]
        else:
            base = 0
        level = max(0, min(base + self.view.ambient, MAX_LIGHT))
        return self.light_table[level][color]

    def wall(self, column, hit, cos_col):
        """Draw one wall slice; return the clipped (top, bot) rows."""
        view = self.view
        raw = int(math.hypot(hit.x - view.x, hit.y - view.y))
        distance = int(raw * cos_col) or 1

        height = _tdiv(VIEWER_DISTANCE * WALL_HEIGHT, distance)
        bot = _tdiv(VIEWER_DISTANCE * view.height, distance) + VIEWPORT_CENTER
        top = bot - height + 1

        t = hit.column
        iheight = IMAGE_HEIGHT
        yratio = WALL_HEIGHT / height if height else float(WALL_HEIGHT)
        if top < VIEWPORT_TOP:
            clipped = VIEWPORT_TOP - top
            t += int(clipped * yratio) * SCREEN_WIDTH
            iheight = int(iheight - clipped * yratio)
            top = VIEWPORT_TOP
        if bot > VIEWPORT_BOT:
            iheight = int(iheight - (bot - VIEWPORT_BOT) * yratio)
            bot = VIEWPORT_BOT

        tileptr = _tile_origin(hit.tile - 1) + t
        offset = top * SCREEN_WIDTH + column
        tyerror = IMAGE_HEIGHT
        for _ in range(iheight):
            while tyerror >= IMAGE_HEIGHT:
                if offset < len(self.screen):
                    self.screen[offset] = self.shade(
                        distance, self.textures[tileptr]
                    )
                tyerror -= IMAGE_HEIGHT
                offset += SCREEN_WIDTH
            tyerror += height
            tileptr += SCREEN_WIDTH
        return top, bot

    def plane_pixel(self, grid, row, column, ratio, radians, cos_col):
        view = self.view
        distance = int(ratio * VIEWER_DISTANCE / cos_col)
        x = int(-distance * math.sin(radians)) + view.x
        y = int(distance * math.cos(radians)) + view.y
        tile = _cell(grid, _tdiv(x, CELL_SIZE), _tdiv(y, CELL_SIZE))
        if tile is None:
            return
        t = (y & 0x3F) * SCREEN_WIDTH + (x & 0x3F)
        tileptr = _tile_origin(tile) + t
        self.screen[row * SCREEN_WIDTH + column] = self.shade(
            distance, self.textures[tileptr]
        )


def draw_maze(walls, floor, ceiling, screen, view, textures, light_table, levels):
    """Render the maze as seen from ``view`` into ``screen`` and return it.

    ``walls``, ``floor`` and ``ceiling`` are grids indexed ``[x][y]``;
    ``textures`` is a 320-wide sheet of 64x64 tiles, five to a row;
    ``light_table`` maps a light level and colour to a shaded colour;
    ``levels`` gives the light level for each distance.
    """
    if len(screen) < SCREEN_WIDTH * SCREEN_HEIGHT:
        raise ValueError(
            f"screen must hold {SCREEN_WIDTH * SCREEN_HEIGHT} bytes, "
            f"got {len(screen)}"
        )
    renderer = _Renderer(screen=screen, view=view, textures=textures,
                         light_table=light_table, levels=levels)

    for column in range(VIEWPORT_LEFT, VIEWPORT_RIGHT):
        column_angle = math.atan(
            (column - SCREEN_CENTER_COLUMN) / VIEWER_DISTANCE
        )
        radians = view.angle + column_angle
        cos_col = math.cos(column_angle)

        hit = cast_ray(walls, view.x, view.y, radians)
        top, bot = renderer.wall(column, hit, cos_col)

        # Rows at or beyond the horizon would look behind the viewer.
        for row in range(bot, VIEWPORT_BOT + 1):
            if row <= HORIZON_ROW:
                continue
            ratio = view.height / (row - HORIZON_ROW)
            renderer.plane_pixel(floor, row, column, ratio, radians, cos_col)

        for row in range(top - 1, VIEWPORT_TOP - 1, -1):
            if row >= HORIZON_ROW:
                continue
            ratio = (WALL_HEIGHT - view.height) / (HORIZON_ROW - row)
            renderer.plane_pixel(ceiling, row, column, ratio, radians, cos_col)

    return screen