"""Raycast rendering with per-square light maps and tiled light maps."""

from __future__ import annotations

import math
from dataclasses import dataclass

from gardenray.lighting import MAX_LIGHT
from gardenray.raycast import (
    CELL_SIZE,
    HORIZON_ROW,
    IMAGE_HEIGHT,
    SCREEN_CENTER_COLUMN,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    VIEWER_DISTANCE,
    VIEWPORT_BOT,
    VIEWPORT_CENTER,
    VIEWPORT_LEFT,
    VIEWPORT_RIGHT,
    VIEWPORT_TOP,
    WALL_HEIGHT,
    _cell,
    _tdiv,
    _tile_origin,
    cast_ray,
)


def _square_light(lights):
    """Extra light taken from one value per map square."""

    def light(xmaze, ymaze, texel):
        return _cell(lights, xmaze, ymaze) or 0

    return light


def _tiled_light(lights, light_maps):
    """Extra light read texel by texel from a tile of the light-map sheet."""

    def light(xmaze, ymaze, texel):
        tile = _cell(lights, xmaze, ymaze) or 0
        return light_maps[_tile_origin(tile) + texel]

    return light


@dataclass
class _Renderer:
    screen: bytearray
    view: object
    textures: bytes
    light_table: list
    levels: bytes

    def shade(self, distance, color, extra):
        if self.levels:
            base = self.levels[max(0, min(distance, len(self.levels) - 1))]
        else:
            base = 0
        level = max(0, min(base + self.view.ambient + extra, MAX_LIGHT))
        return self.light_table[level][color]

    def wall(self, column, hit, cos_col, light):
        """Draw one wall slice; return the clipped (top, bot) rows."""
        view = self.view
        raw = int(math.hypot(hit.x - view.x, hit.y - view.y))
        distance = int(raw * cos_col) or 1

        height = _tdiv(VIEWER_DISTANCE * WALL_HEIGHT, distance)
        bot = _tdiv(VIEWER_DISTANCE * view.height, distance) + VIEWPORT_CENTER
        top = bot - height

        texel = hit.column
        iheight = IMAGE_HEIGHT
        yratio = WALL_HEIGHT / height if height else float(WALL_HEIGHT)
        if top < VIEWPORT_TOP:
            clipped = VIEWPORT_TOP - top
            texel += int(clipped * yratio) * SCREEN_WIDTH
            iheight = int(iheight - clipped * yratio)
            top = VIEWPORT_TOP
        if bot > VIEWPORT_BOT:
            iheight = int(iheight - (bot - VIEWPORT_BOT) * yratio)
            bot = VIEWPORT_BOT

        tileptr = _tile_origin(hit.tile - 1) + texel
        offset = top * SCREEN_WIDTH + column
        tyerror = IMAGE_HEIGHT
        for _ in range(iheight):
            while tyerror >= IMAGE_HEIGHT:
                if offset < len(self.screen):
                    extra = light(hit.xmaze, hit.ymaze, texel)
                    self.screen[offset] = self.shade(
                        distance, self.textures[tileptr], extra
                    )
                tyerror -= IMAGE_HEIGHT
                offset += SCREEN_WIDTH
            tyerror += height
            tileptr += SCREEN_WIDTH
            texel += SCREEN_WIDTH
        return top, bot

    def plane_pixel(self, grid, light, row, column, ratio, radians, cos_col):
        view = self.view
        distance = int(ratio * VIEWER_DISTANCE / cos_col)
        x = int(-distance * math.sin(radians)) + view.x
        y = int(distance * math.cos(radians)) + view.y
        xmaze, ymaze = _tdiv(x, CELL_SIZE), _tdiv(y, CELL_SIZE)
        tile = _cell(grid, xmaze, ymaze)
        if tile is None:
            return
        texel = (y & 0x3F) * SCREEN_WIDTH + (x & 0x3F)
        extra = light(xmaze, ymaze, texel)
        self.screen[row * SCREEN_WIDTH + column] = self.shade(
            distance, self.textures[_tile_origin(tile) + texel], extra
        )


def _render(walls, floor, ceiling, screen, view, textures, light_table,
            levels, floor_light, ceiling_light):
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
        # Walls take their extra light from the floor lights of their square.
        top, bot = renderer.wall(column, hit, cos_col, floor_light)

        # Rows at or beyond the horizon would look behind the viewer.
        for row in range(bot + 1, VIEWPORT_BOT + 1):
            if row <= HORIZON_ROW:
                continue
            ratio = view.height / (row - HORIZON_ROW)
            renderer.plane_pixel(floor, floor_light, row, column,
                                 ratio, radians, cos_col)

        for row in range(top - 1, VIEWPORT_TOP - 1, -1):
            if row >= HORIZON_ROW:
                continue
            ratio = (WALL_HEIGHT - view.height) / (HORIZON_ROW - row)
            renderer.plane_pixel(ceiling, ceiling_light, row, column,
                                 ratio, radians, cos_col)

    return screen


def draw_maze_lightmapped(walls, floor, ceiling, floor_lights, ceiling_lights,
                          screen, view, textures, light_table, levels):
    """Render the maze with extra light added per map square.

    ``floor_lights`` and ``ceiling_lights`` are grids indexed ``[x][y]``
    whose values are added to the distance light level; walls use the
    floor value of the square they stand on. Returns ``screen``.
    """
    return _render(walls, floor, ceiling, screen, view, textures,
                   light_table, levels,
                   _square_light(floor_lights), _square_light(ceiling_lights))


def draw_maze_tiled(walls, floor, ceiling, floor_lights, ceiling_lights,
                    screen, view, textures, light_maps, light_table, levels):
    """Render the maze with extra light read from tiled light maps.

    ``floor_lights`` and ``ceiling_lights`` pick, for each square, a tile of
    the 320-wide ``light_maps`` sheet whose texels add light pixel by pixel;
    walls use the floor light tile of their square. Returns ``screen``.
    """
    return _render(walls, floor, ceiling, screen, view, textures,
                   light_table, levels,
                   _tiled_light(floor_lights, light_maps),
                   _tiled_light(ceiling_lights, light_maps))