# gardenray

`gardenray` draws first-person views of a grid maze using raycasting. It
renders into a 320×200 screen of 8-bit palette indices. Walls, floors and
ceilings are texture-mapped from 64×64 tiles, and every pixel is shaded by a
light level that depends on distance. The package can also read and pack the
files these views are built from: PCX images, which supply textures and
palettes, and light-sourcing tables, which map each colour to its darker
shades.

It is pure Python and has no third-party dependencies.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command-line tools

### Building a light-sourcing table

```
gardenray-makelite palette.pcx litesorc.dat
```

This reads the 256-colour palette of a PCX file. For every colour it computes
33 light levels. Level 0 is a target colour, black by default, and level 32 is
the colour itself. Each level is matched to the nearest palette colour, and
the result is written as 33 rows of 256 bytes. You can give target components
after the two file names, in this order:

```
gardenray-makelite palette.pcx litesorc.dat RED BLUE GREEN
```

The components are on the palette's 0–63 scale.

### Rendering a demo scene

```
gardenray-demo [ANGLE] [INTENSITY] [AMBIENT] [--scene {litesource,lightmap,tiled}]
               [--textures walls.pcx] [--light-table litesorc.dat]
               [--light-maps litemaps.pcx] [--output maze.ppm]
```

This renders the built-in 16×16 maze and writes the picture as a binary PPM
image. The scene can be lit in three ways:

* `litesource` uses distance lighting only.
* `lightmap` adds extra light for each map square.
* `tiled` reads extra light from a sheet of light-map tiles. Only this scene
  reads `--light-maps`.

The three positional arguments are optional. The viewing angle is in radians
and defaults to 3.14. The light intensity defaults to 32. The ambient light
level defaults to 0.

## Library use

### PCX images

```python
from gardenray.pcx import load_pcx, compress_image

image = load_pcx("walls.pcx")        # PcxImage
print(image.width, image.height)      # taken from the header bounds
pixels = image.pixels                 # one byte per pixel
palette = image.palette               # 768 bytes, scaled to 0-63
packed = compress_image(pixels)       # runs of zero / non-zero pixels
```

* `parse_pcx` does the same job as `load_pcx`, but on bytes already held in
  memory.
* `decode_rle` expands a PCX run-length stream by itself.
* `PcxHeader.from_bytes` decodes only the 128-byte header.

`PcxError` is raised when a file cannot be opened, when it is not a version-5
PCX, or when it is wider than 320 or taller than 200.

### Lighting

```python
from gardenray.lighting import (
    build_light_table, light_levels, save_light_table, load_light_table,
)

table = build_light_table(image.palette, (0, 0, 0))   # 33 rows of 256 bytes
levels = light_levels(32, 3)          # light level for each distance below 1024
save_light_table(table, "litesorc.dat")
table = load_light_table("litesorc.dat")
```

### Drawing a view

```python
from gardenray.raycast import View, new_screen, draw_maze, cast_ray

screen = new_screen()                 # bytearray of 320*200 palette indices
view = View(x=544, y=544, angle=3.14, height=32, ambient=0)
draw_maze(walls, floor, ceiling, screen, view, image.pixels, table, levels)
```

`walls`, `floor` and `ceiling` are grids of tile numbers indexed `[x][y]`, and
each map square is 64 units across. A wall value of 0 is open space. Tiles come
from a texture sheet 320 pixels wide, with five tiles to a row.

`cast_ray(walls, x, y, radians)` follows a single ray and returns a `RayHit`.
The hit gives the point where the ray struck, the map square, the tile number
and the texture column. `cast_ray` raises `ValueError` if the ray leaves the
map without striking a wall.

`gardenray.lightmaps` has two lit variants of `draw_maze`:

* `draw_maze_lightmapped` adds a light value for each map square.
* `draw_maze_tiled` adds light texel by texel from a sheet of light-map tiles.

### Other helpers

* `gardenray.demo.render_scene` renders one of the built-in scenes, chosen by
  a `SceneKind`.
* `gardenray.demo.write_ppm` saves a screen, with its palette, as a PPM image.
* `gardenray.bitmap.grab` copies a rectangle out of a bitmap.
  `gardenray.bitmap.blit` copies a sprite into a 320-wide screen, in place.
* `gardenray.frames.FrameTimer` keeps the most recent frame times, 500 by
  default. `average_ms()` returns the average time per frame, and `report()`
  describes the average and the frame rate.

## What it does not do

`gardenray` renders still images only. It does not:

* open a window or drive a display;
* read the keyboard, mouse or joystick;
* let you walk through the maze;
* draw an overhead map.

To see a view, write it to a file with `write_ppm` or `gardenray-demo`.