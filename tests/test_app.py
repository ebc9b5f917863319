import pytest

from cubcaster.app import load_textures, main
from cubcaster.scene import Scene
from cubcaster.xpm import TRANSPARENT

XPM_TEXT = (
    "/* XPM */\n"
    "static char *tex[] = {\n"
    '"2 1 2 1",\n'
    '"a c #FF0000",\n'
    '"b c None",\n'
    '"ab"\n'
    "};\n"
)


@pytest.fixture
def xpm_file(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text(XPM_TEXT)
    return path


def test_load_textures_reads_each_slot(xpm_file):
    scene = Scene(north=str(xpm_file), sprite=str(xpm_file))
    textures = load_textures(scene)
    assert sorted(textures) == ["north", "sprite"]
    north = textures["north"]
    assert (north.width, north.height) == (2, 1)
    assert north.get_pixel(0, 0) == 0xFF0000
    assert north.get_pixel(1, 0) == TRANSPARENT


def test_load_textures_without_paths_is_empty():
    assert load_textures(Scene()) == {}


def test_load_textures_skips_missing_and_broken_files(tmp_path, xpm_file):
    broken = tmp_path / "broken.xpm"
    broken.write_text('"not a header"\n')
    scene = Scene(
        north=str(tmp_path / "missing.xpm"),
        south=str(broken),
        west=str(xpm_file),
    )
    textures = load_textures(scene)
    assert list(textures) == ["west"]


@pytest.mark.parametrize("argv", [[], ["a.cub", "--save"], ["a.cub", "b.cub", "c.cub"]])
def test_main_rejects_wrong_argument_count(argv, capsys):
    assert main(argv) == 1
    assert "Error: invalid number of args" in capsys.readouterr().err


def test_main_rejects_non_cub_filename(capsys):
    assert main(["map.txt"]) == 1
    assert "wrong cub filename" in capsys.readouterr().err


def test_main_reports_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.cub")]) == 1
    assert capsys.readouterr().err.startswith("Error\n")


def test_main_reports_scene_without_map(tmp_path, capsys):
    path = tmp_path / "empty.cub"
    path.write_text("R 640 480\nF 1,2,3\n")
    assert main([str(path)]) == 1
    assert "no map in scene" in capsys.readouterr().err


def test_main_reports_bad_colour(tmp_path, capsys):
    path = tmp_path / "colour.cub"
    path.write_text("R 640 480\nF 300,0,0\n111\n1N1\n111\n")
    assert main([str(path)]) == 1
    assert "wrong RGB param of floor" in capsys.readouterr().err


def test_main_rejects_zero_resolution(tmp_path, capsys):
    path = tmp_path / "flat.cub"
    path.write_text("R 0 0\n111\n1N1\n111\n")
    assert main([str(path)]) == 1
    assert "invalid resolution" in capsys.readouterr().err