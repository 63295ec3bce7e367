"""Render still views of the demo maze with light-sourcing or light maps."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from gardenray.lighting import MAX_LIGHT, PALETTE_SIZE, light_levels, load_light_table
from gardenray.lightmaps import draw_maze_lightmapped, draw_maze_tiled
from gardenray.pcx import PcxError, load_pcx
from gardenray.raycast import (
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    View,
    draw_maze,
    new_screen,
)

DEFAULT_ANGLE = 3.14
DEFAULT_INTENSITY = float(MAX_LIGHT)
DEFAULT_AMBIENT = 0
MULTIPLIER = 3.0
PPM_MAXVAL = 63

WALLS = (
    (2, 2, 2, 2, 7, 4, 7, 2, 2, 2, 2, 2, 2, 2, 2, 2),
    (9, 2, 0, 2, 0, 0, 0, 2, 0, 0, 0, 0, 0, 0, 0, 2),
    (9, 0, 0, 0, 0, 0, 0, 0, 8, 0, 0, 0, 0, 0, 0, 2),
    (9, 0, 0, 0, 0, 0, 0, 0, 0, 6, 0, 0, 0, 0, 0, 2),
    (9, 0, 0, 0, 0, 0, 0, 0, 0, 0, 2, 2, 0, 0, 0, 2),
    (9, 0, 0, 0, 0, 0, 0, 0, 0, 0, 2, 2, 0, 0, 0, 2),
    (9, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 9, 9, 0, 0, 2),
    (9, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 4, 0, 0, 2),
    (2, 2, 2, 0, 0, 0, 0, 0, 0, 0, 0, 9, 9, 0, 0, 2),
    (5, 0, 0, 0, 0, 0, 0, 0, 0, 0, 2, 2, 0, 0, 0, 2),
    (2, 2, 2, 0, 0, 0, 2, 2, 0, 2, 0, 0, 0, 0, 0, 2),
    (7, 0, 0, 0, 0, 0, 0, 2, 0, 2, 0, 0, 0, 0, 0, 2),
    (7, 0, 0, 0, 0, 0, 0, 2, 0, 0, 0, 0, 0, 0, 0, 2),
    (7, 0, 0, 0, 0, 0, 0, 2, 0, 2, 0, 0, 0, 0, 0, 2),
    (7, 7, 7, 7, 7, 0, 0, 2, 0, 2, 0, 0, 0, 0, 0, 2),
    (2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2),
)

_PLAIN = (2,) * 16
FLOOR = (
    _PLAIN, _PLAIN, _PLAIN, _PLAIN,
    (2, 2, 2, 2, 5, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2),
    (2, 2, 2, 5, 5, 5, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2),
    (2, 2, 5, 5, 5, 5, 5, 2, 2, 2, 2, 2, 2, 2, 2, 2),
    (2, 2, 2, 5, 5, 5, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2),
    (2, 2, 2, 2, 5, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2, 2),
    _PLAIN, _PLAIN, _PLAIN, _PLAIN, _PLAIN, _PLAIN, _PLAIN,
)

_SKY = (9,) * 16
CEILING = (_SKY,) * 16

_SKY_A = (9, 9, 9, 12, 12, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9)
_SKY_B = (9, 12, 12, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9, 9)
SKYLIGHT_CEILING = (
    _SKY, _SKY, _SKY, _SKY, _SKY, _SKY,
    _SKY_A, _SKY_A,
    _SKY,
    _SKY_B,
    _SKY, _SKY, _SKY, _SKY, _SKY, _SKY,
)

_DARK = (0,) * 16

SQUARE_FLOOR_LIGHTS = (
    _DARK, _DARK, _DARK,
    (32, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    _DARK, _DARK,
    (0, 0, 0, 16, 16, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 16, 16, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 32, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (32, 32, 32, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 32, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    _DARK,
    (0, 0, 0, 0, 0, 0, 0, 32, 32, 32, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 32, 32, 32, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 32, 32, 32, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 32, 0, 0, 0, 0, 0, 0, 0),
)

SQUARE_CEILING_LIGHTS = (
    _DARK, _DARK, _DARK, _DARK, _DARK, _DARK,
    (0, 0, 0, 32, 32, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 32, 32, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    _DARK,
    (0, 32, 32, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    _DARK, _DARK,
    (0, 0, 0, 0, 0, 0, 0, 0, 32, 32, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 32, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 32, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 0, 32, 0, 0, 0, 0, 0, 0, 0),
)

TILED_FLOOR_LIGHTS = (
    (0, 0, 0, 0, 1, 2, 3, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 2, 7, 12, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 3, 8, 13, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    _DARK, _DARK, _DARK,
    (5, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 1, 6, 11, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 2, 7, 12, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 3, 8, 13, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    _DARK, _DARK, _DARK, _DARK,
    (0, 0, 0, 0, 0, 0, 0, 7, 7, 0, 0, 0, 0, 0, 0, 0),
    (0, 0, 0, 0, 0, 0, 0, 7, 4, 0, 0, 0, 0, 0, 0, 0),
)

TILED_CEILING_LIGHTS = (
    _DARK, _DARK, _DARK, _DARK, _DARK, _DARK, _DARK, _DARK,
    (0, 0, 0, 0, 0, 0, 5, 0, 0, 0, 0, 0, 0, 0, 0, 0),
    _DARK, _DARK, _DARK, _DARK, _DARK,
    (0, 0, 0, 0, 0, 0, 0, 7, 0, 0, 0, 0, 0, 0, 0, 0),
    _DARK,
)


class SceneKind(Enum):
    """The three ways of lighting the demo maze."""

    LITESOURCE = "litesource"
    LIGHTMAP = "lightmap"
    TILED = "tiled"


@dataclass(frozen=True)
class _Scene:
    walls: tuple
    floor: tuple
    ceiling: tuple
    floor_lights: tuple = ()
    ceiling_lights: tuple = ()


_SCENES = {
    SceneKind.LITESOURCE: _Scene(WALLS, FLOOR, CEILING),
    SceneKind.LIGHTMAP: _Scene(WALLS, FLOOR, SKYLIGHT_CEILING,
                               SQUARE_FLOOR_LIGHTS, SQUARE_CEILING_LIGHTS),
    SceneKind.TILED: _Scene(WALLS, FLOOR, CEILING,
                            TILED_FLOOR_LIGHTS, TILED_CEILING_LIGHTS),
}


def render_scene(kind, textures, light_table, angle=DEFAULT_ANGLE,
                 intensity=DEFAULT_INTENSITY, ambient=DEFAULT_AMBIENT,
                 light_maps=None):
    """Render the demo maze lit in the manner of ``kind``; return the screen.

    ``light_maps`` is the 320-wide light-map tile sheet, needed only for
    the tiled scene.
    """
    kind = SceneKind(kind)
    scene = _SCENES[kind]
    view = View(angle=angle, ambient=int(ambient))
    levels = light_levels(intensity, MULTIPLIER)
    screen = new_screen()
    if kind is SceneKind.LITESOURCE:
        return draw_maze(scene.walls, scene.floor, scene.ceiling, screen,
                         view, textures, light_table, levels)
    if kind is SceneKind.LIGHTMAP:
        return draw_maze_lightmapped(scene.walls, scene.floor, scene.ceiling,
                                     scene.floor_lights, scene.ceiling_lights,
                                     screen, view, textures, light_table,
                                     levels)
    if light_maps is None:
        raise ValueError("the tiled scene needs a light-map sheet")
    return draw_maze_tiled(scene.walls, scene.floor, scene.ceiling,
                           scene.floor_lights, scene.ceiling_lights,
                           screen, view, textures, light_maps, light_table,
                           levels)


def write_ppm(screen, palette, path):
    """Save a 320x200 screen as a binary PPM using a 6-bit VGA palette."""
    screen = bytes(screen)
    palette = bytes(palette)
    if len(screen) != SCREEN_WIDTH * SCREEN_HEIGHT:
        raise ValueError(
            f"screen must hold {SCREEN_WIDTH * SCREEN_HEIGHT} bytes, "
            f"got {len(screen)}"
        )
    if len(palette) != 3 * PALETTE_SIZE:
        raise ValueError(
            f"palette must hold {3 * PALETTE_SIZE} bytes, got {len(palette)}"
        )
    colors = [palette[i:i + 3] for i in range(0, len(palette), 3)]
    header = f"P6\n{SCREEN_WIDTH} {SCREEN_HEIGHT}\n{PPM_MAXVAL}\n".encode("ascii")
    Path(path).write_bytes(header + b"".join(colors[pixel] for pixel in screen))


def _parser():
    parser = argparse.ArgumentParser(
        description="Render a lit view of the demo maze to a PPM image."
    )
    parser.add_argument("angle", nargs="?", type=float, default=DEFAULT_ANGLE)
    parser.add_argument("intensity", nargs="?", type=float,
                        default=DEFAULT_INTENSITY)
    parser.add_argument("ambient", nargs="?", type=float,
                        default=DEFAULT_AMBIENT)
    parser.add_argument("--scene", choices=[k.value for k in SceneKind],
                        default=SceneKind.LITESOURCE.value)
    parser.add_argument("--textures", default="walls.pcx")
    parser.add_argument("--light-table", default="litesorc.dat")
    parser.add_argument("--light-maps", default="litemaps.pcx")
    parser.add_argument("--output", default="maze.ppm")
    return parser


def main(argv=None):
    """Render the chosen scene and write it to a PPM file."""
    args = _parser().parse_args(argv)
    kind = SceneKind(args.scene)
    try:
        textures = load_pcx(args.textures)
        light_maps = (load_pcx(args.light_maps).pixels
                      if kind is SceneKind.TILED else None)
        light_table = load_light_table(args.light_table)
        screen = render_scene(kind, textures.pixels, light_table,
                              args.angle, args.intensity, int(args.ambient),
                              light_maps)
        write_ppm(screen, textures.palette, args.output)
    except (PcxError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())