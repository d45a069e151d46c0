import json
from pathlib import Path

import pytest
from PIL import Image

from autotiler.cli import main
from autotiler.layer import pack_index
from autotiler.mapfile import parse_map_manifest
from autotiler.placeholder import generate_placeholder_sheet


@pytest.fixture
def source(tmp_path: Path) -> Path:
    path = tmp_path / "grass.png"
    generate_placeholder_sheet().save(path)
    return path


@pytest.fixture
def map_file(tmp_path: Path, source: Path) -> Path:
    path = tmp_path / "map.json"
    data = {
        "width": 3,
        "height": 3,
        "autotiles": [{"name": "grass", "file": source.name}],
        "layers": [[-1] * 9, [0, 0, 0, 0, -1, 0, 0, 0, 0]],
    }
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_template(tmp_path: Path, capsys):
    out = tmp_path / "sheets" / "placeholder.png"
    main(["template", "-o", str(out), "--seed", "3"])

    with Image.open(out) as img:
        assert img.size == (64, 96)
    assert "placeholder.png" in capsys.readouterr().out


def test_compile(source: Path, capsys):
    main(["compile", str(source), "--preview", "--scale", "1"])

    strip = source.with_name("grass_256.png")
    with Image.open(strip) as img:
        assert img.size == (32, 8192)
    assert source.with_name("grass_256_preview.png").exists()
    assert "Done!" in capsys.readouterr().out


def test_compile_malformed(tmp_path: Path, capsys):
    path = tmp_path / "tiny.png"
    Image.new("RGBA", (32, 32)).save(path)

    with pytest.raises(SystemExit) as exc:
        main(["compile", str(path)])
    assert exc.value.code == 1
    assert "expected at least 64x96" in capsys.readouterr().err


def test_compile_missing(tmp_path: Path, capsys):
    with pytest.raises(SystemExit) as exc:
        main(["compile", str(tmp_path / "missing.png")])
    assert exc.value.code == 1
    assert capsys.readouterr().err.startswith("Error:")


def test_encode(map_file: Path):
    main(["encode", str(map_file)])

    manifest = parse_map_manifest(map_file.with_name("map_encoded.json"))
    assert manifest.autotiles[0].name == "grass"
    assert manifest.layers[0][0] == -209
    assert manifest.layers[0][4] == -256
    assert manifest.layers[1][4] == pack_index(0, 0)


def test_encode_unknown_slot(tmp_path: Path, capsys):
    path = tmp_path / "map.json"
    path.write_text(
        json.dumps({"width": 1, "height": 1, "autotiles": [], "layers": [[-1]]}),
        encoding="utf-8",
    )
    with pytest.raises(SystemExit):
        main(["encode", str(path)])
    assert "unknown autotile slots: [0]" in capsys.readouterr().err


def test_encode_bad_manifest(tmp_path: Path, capsys):
    path = tmp_path / "map.json"
    path.write_text(json.dumps({"width": 2, "layers": []}), encoding="utf-8")
    with pytest.raises(SystemExit):
        main(["encode", str(path)])
    assert "Missing 'height'" in capsys.readouterr().err


def test_encode_wrong_layer_length(tmp_path: Path, capsys):
    path = tmp_path / "map.json"
    path.write_text(
        json.dumps({"width": 2, "height": 2, "layers": [[0, 0, 0]]}),
        encoding="utf-8",
    )
    with pytest.raises(SystemExit):
        main(["encode", str(path)])
    assert "Layer #0" in capsys.readouterr().err


def test_render(map_file: Path, tmp_path: Path):
    main(["encode", str(map_file)])
    encoded = map_file.with_name("map_encoded.json")
    out = tmp_path / "render.png"
    main(["render", str(encoded), "-o", str(out)])

    with Image.open(out) as img:
        assert img.size == (96, 96)
        assert img.getchannel("A").getextrema() == (255, 255)


def test_render_missing_layer(map_file: Path, capsys):
    with pytest.raises(SystemExit):
        main(["render", str(map_file), "--layer", "5"])
    assert "Layer #5 not found" in capsys.readouterr().err
