import pytest

from gardenray.lighting import MAX_DISTANCE, MAX_LIGHT
from gardenray.lightmaps import draw_maze_lightmapped, draw_maze_tiled
from gardenray.raycast import View, new_screen

SIZE = 16
ZERO_LEVELS = bytes(MAX_DISTANCE)
LEVEL_TABLE = [bytes([level]) * 256 for level in range(MAX_LIGHT + 1)]
IDENTITY_TABLE = [bytes(range(256))] * (MAX_LIGHT + 1)


def grid(value):
    return [[value] * SIZE for _ in range(SIZE)]


def bordered_walls(tile=1):
    walls = grid(0)
    for i in range(SIZE):
        walls[0][i] = walls[SIZE - 1][i] = tile
        walls[i][0] = walls[i][SIZE - 1] = tile
    return walls


def sheet(fills):
    data = bytearray(320 * 200)
    for tile, value in fills.items():
        r, c = divmod(tile, 5)
        for row in range(64):
            start = (r * 64 + row) * 320 + c * 64
            data[start:start + 64] = bytes([value]) * 64
    return bytes(data)


def pixel(screen, row, column):
    return screen[row * 320 + column]


def lightmapped(floor_lights, ceiling_lights, view=View(),
                table=LEVEL_TABLE, textures=None):
    screen = bytearray([255]) * (320 * 200)
    return draw_maze_lightmapped(
        bordered_walls(), grid(2), grid(9), floor_lights, ceiling_lights,
        screen, view, textures or sheet({}), table, ZERO_LEVELS,
    )


def test_ambient_only_gives_uniform_level():
    screen = lightmapped(grid(0), grid(0), View(ambient=4))
    assert set(screen) <= {4, 255}
    assert pixel(screen, 199, 160) == 4


def test_textures_are_sampled_per_surface():
    textures = sheet({0: 10, 2: 50, 9: 90})
    screen = lightmapped(grid(0), grid(0), table=IDENTITY_TABLE,
                         textures=textures)
    assert pixel(screen, 199, 160) == 50
    assert pixel(screen, 0, 160) == 90
    assert pixel(screen, 99, 160) == 10


def test_floor_lights_brighten_floor_and_walls_but_not_ceiling():
    screen = lightmapped(grid(5), grid(0))
    assert pixel(screen, 199, 160) == 5
    assert pixel(screen, 99, 160) == 5
    assert pixel(screen, 0, 160) == 0


def test_ceiling_lights_brighten_only_ceiling():
    screen = lightmapped(grid(0), grid(6))
    assert pixel(screen, 0, 160) == 6
    assert pixel(screen, 199, 160) == 0


def test_light_level_is_clamped_to_maximum():
    screen = lightmapped(grid(MAX_LIGHT), grid(MAX_LIGHT),
                         View(ambient=MAX_LIGHT))
    assert set(screen) <= {MAX_LIGHT, 255}
    assert pixel(screen, 199, 0) == MAX_LIGHT


def test_tiled_with_dark_light_maps_matches_unlit_lightmapped():
    view = View(ambient=3)
    expected = lightmapped(grid(0), grid(0), view)
    screen = bytearray([255]) * (320 * 200)
    draw_maze_tiled(bordered_walls(), grid(2), grid(9), grid(0), grid(0),
                    screen, view, sheet({}), sheet({}), LEVEL_TABLE,
                    ZERO_LEVELS)
    assert screen == expected


def test_uniform_light_tiles_match_square_lights():
    view = View(ambient=2)
    expected = lightmapped(grid(7), grid(7), view)
    screen = bytearray([255]) * (320 * 200)
    draw_maze_tiled(bordered_walls(), grid(2), grid(9), grid(0), grid(0),
                    screen, view, sheet({}), sheet({0: 7}), LEVEL_TABLE,
                    ZERO_LEVELS)
    assert screen == expected


def test_tiled_light_tile_selection():
    screen = new_screen()
    draw_maze_tiled(bordered_walls(), grid(2), grid(9), grid(1), grid(0),
                    screen, View(), sheet({}), sheet({1: 7}), LEVEL_TABLE,
                    ZERO_LEVELS)
    assert pixel(screen, 199, 160) == 7
    assert pixel(screen, 99, 160) == 7
    assert pixel(screen, 0, 160) == 0


def test_short_screen_is_rejected():
    with pytest.raises(ValueError):
        draw_maze_lightmapped(bordered_walls(), grid(2), grid(9), grid(0),
                              grid(0), bytearray(100), View(), sheet({}),
                              LEVEL_TABLE, ZERO_LEVELS)


def test_open_map_raises():
    with pytest.raises(ValueError):
        draw_maze_tiled(grid(0), grid(2), grid(9), grid(0), grid(0),
                        new_screen(), View(), sheet({}), sheet({}),
                        LEVEL_TABLE, ZERO_LEVELS)


def test_returns_the_screen_passed_in():
    screen = new_screen()
    result = draw_maze_lightmapped(bordered_walls(), grid(2), grid(9),
                                   grid(0), grid(0), screen, View(),
                                   sheet({}), LEVEL_TABLE, ZERO_LEVELS)
    assert result is screen