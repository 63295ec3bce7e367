"""Light-sourcing tables: palette remapping by light level."""

from __future__ import annotations

import sys
from pathlib import Path

from gardenray.pcx import PcxError, load_pcx

MAX_LIGHT = 32
PALETTE_SIZE = 256
GRID_SIZE = 16
MAX_DISTANCE = 64 * GRID_SIZE
DEFAULT_MULTIPLIER = 3.0


def _palette_colors(palette):
    palette = bytes(palette)
    if len(palette) != 3 * PALETTE_SIZE:
        raise ValueError(
            f"palette must hold {3 * PALETTE_SIZE} bytes, got {len(palette)}"
        )
    return [tuple(palette[i:i + 3]) for i in range(0, len(palette), 3)]


def _color_columns(palette, target):
    """Yield, colour by colour, the best match at every light level."""
    colors = _palette_colors(palette)
    target = tuple(target)
    if len(target) != 3:
        raise ValueError("target must be a (red, green, blue) triple")
    first_index = {}
    for index, color in enumerate(colors):
        first_index.setdefault(color, index)
    candidates = list(first_index.items())
    cache = {}

    def closest(ideal):
        if ideal not in cache:
            _, cache[ideal] = min(
                candidates,
                key=lambda item: sum(
                    abs(component - wanted)
                    for component, wanted in zip(item[0], ideal)
                ),
            )
        return cache[ideal]

    for color in colors:
        yield bytes(
            closest(tuple(
                (component - aim) / MAX_LIGHT * level + aim
                for component, aim in zip(color, target)
            ))
            for level in range(MAX_LIGHT + 1)
        )


def _rows_from_columns(columns):
    return [bytes(column[level] for column in columns)
            for level in range(MAX_LIGHT + 1)]


def build_light_table(palette, target=(0, 0, 0)):
    """Build the table mapping (level, colour) to the nearest palette colour.

    Level ``MAX_LIGHT`` is full brightness; level 0 fades every colour
    entirely towards ``target``. Returns one 256-byte row per level.
    """
    return _rows_from_columns(list(_color_columns(palette, target)))


def light_levels(intensity, multiplier=DEFAULT_MULTIPLIER):
    """Light level for every distance below ``MAX_DISTANCE``."""
    if intensity < 0:
        raise ValueError("intensity must not be negative")
    levels = bytearray(MAX_DISTANCE)
    for distance in range(1, MAX_DISTANCE):
        ratio = min(intensity / distance * multiplier, 1.0)
        levels[distance] = int(ratio * MAX_LIGHT)
    return bytes(levels)


def save_light_table(table, path):
    """Write a light table as raw bytes, level by level."""
    rows = [bytes(row) for row in table]
    if len(rows) != MAX_LIGHT + 1 or any(len(r) != PALETTE_SIZE for r in rows):
        raise ValueError(
            f"light table must be {MAX_LIGHT + 1} rows of {PALETTE_SIZE} bytes"
        )
    Path(path).write_bytes(b"".join(rows))


def load_light_table(path):
    """Read a light table written by :func:`save_light_table`."""
    data = Path(path).read_bytes()
    needed = (MAX_LIGHT + 1) * PALETTE_SIZE
    if len(data) < needed:
        raise ValueError(f"light table needs {needed} bytes, got {len(data)}")
    return [data[level * PALETTE_SIZE:(level + 1) * PALETTE_SIZE]
            for level in range(MAX_LIGHT + 1)]


def main(argv=None):
    """Build a light table from a PCX file's palette and save it."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 1:
        print("You must type a name for the source file.")
        return 1
    if len(args) < 2:
        print("You must type a name for the target file.")
        return 1
    try:
        values = [int(float(text)) for text in args[2:5]]
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    values += [0] * (3 - len(values))
    red, blue, green = values

    print("Loading palette.")
    try:
        image = load_pcx(args[0])
    except PcxError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print("Calculating lightsourcing tables", end="", flush=True)
    columns = []
    for column in _color_columns(image.palette, (red, green, blue)):
        print(".", end="", flush=True)
        columns.append(column)

    print("\nWriting lightsourcing tables to disk.")
    try:
        save_light_table(_rows_from_columns(columns), args[1])
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print("Done!")
    return 0