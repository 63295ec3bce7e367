import struct

import pytest

from gardenray import lighting

GRAY = bytes(v for i in range(256) for v in (i % 64,) * 3)


def make_pcx(palette):
    header = struct.pack(
        "<4B6h48s2B2h58s",
        10, 5, 1, 8, 0, 0, 0, 0, 72, 72,
        bytes(48), 0, 1, 1, 1, bytes(58),
    )
    return header + bytes([0, 12]) + bytes(b << 2 for b in palette)


def test_light_levels_full_near_viewer():
    levels = lighting.light_levels(lighting.MAX_LIGHT)
    assert len(levels) == lighting.MAX_DISTANCE
    assert levels[1] == lighting.MAX_LIGHT


def test_light_levels_fall_off():
    levels = lighting.light_levels(10, 2.0)
    tail = list(levels[1:])
    assert all(a >= b for a, b in zip(tail, tail[1:]))
    assert tail[-1] < tail[0]
    assert max(tail) <= lighting.MAX_LIGHT


def test_light_levels_zero_intensity():
    assert lighting.light_levels(0) == bytes(lighting.MAX_DISTANCE)


def test_light_levels_negative_rejected():
    with pytest.raises(ValueError):
        lighting.light_levels(-1)


def test_table_shape():
    table = lighting.build_light_table(GRAY)
    assert len(table) == lighting.MAX_LIGHT + 1
    assert all(len(row) == lighting.PALETTE_SIZE for row in table)


def test_full_light_maps_to_first_identical_color():
    table = lighting.build_light_table(GRAY)
    assert table[lighting.MAX_LIGHT] == bytes(i % 64 for i in range(256))


def test_no_light_fades_to_target():
    table = lighting.build_light_table(GRAY)
    assert table[0] == bytes(256)
    table = lighting.build_light_table(GRAY, (63, 63, 63))
    assert table[0] == bytes([63]) * 256


def test_half_light_halves_even_grays():
    table = lighting.build_light_table(GRAY)
    half = table[lighting.MAX_LIGHT // 2]
    assert [half[2 * k] for k in range(32)] == list(range(32))


def test_bad_palette_rejected():
    with pytest.raises(ValueError):
        lighting.build_light_table(bytes(10))


def test_save_load_round_trip(tmp_path):
    table = lighting.build_light_table(GRAY)
    path = tmp_path / "litesorc.dat"
    lighting.save_light_table(table, path)
    assert path.stat().st_size == (lighting.MAX_LIGHT + 1) * lighting.PALETTE_SIZE
    assert lighting.load_light_table(path) == table


def test_save_rejects_wrong_shape(tmp_path):
    with pytest.raises(ValueError):
        lighting.save_light_table([bytes(256)] * 3, tmp_path / "x.dat")


def test_load_short_file_rejected(tmp_path):
    path = tmp_path / "short.dat"
    path.write_bytes(bytes(100))
    with pytest.raises(ValueError):
        lighting.load_light_table(path)


def test_main_needs_source(capsys):
    assert lighting.main([]) == 1
    assert "You must type a name for the source file." in capsys.readouterr().out


def test_main_needs_target(capsys):
    assert lighting.main(["in.pcx"]) == 1
    assert "You must type a name for the target file." in capsys.readouterr().out


def test_main_writes_table(tmp_path, capsys):
    source = tmp_path / "pal.pcx"
    source.write_bytes(make_pcx(GRAY))
    target = tmp_path / "litesorc.dat"
    assert lighting.main([str(source), str(target)]) == 0
    assert "Done!" in capsys.readouterr().out
    table = lighting.load_light_table(target)
    assert table == lighting.build_light_table(GRAY)


def test_main_target_color(tmp_path):
    source = tmp_path / "pal.pcx"
    source.write_bytes(make_pcx(GRAY))
    target = tmp_path / "bright.dat"
    assert lighting.main([str(source), str(target), "63", "63", "63"]) == 0
    assert lighting.load_light_table(target)[0] == bytes([63]) * 256


def test_main_missing_source(tmp_path):
    assert lighting.main([str(tmp_path / "none.pcx"), str(tmp_path / "o")]) == 1
    assert not (tmp_path / "o").exists()