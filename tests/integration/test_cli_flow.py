"""Integration tests for CLI config + command flow."""

from pathlib import Path

import numpy as np
import pytest

import foilmesh.cli as cli
from foilmesh.io import read_dat

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda _config: None)


def _write_config(path: Path) -> None:
    path.write_text(
        "\n".join(
            [
                "generation:",
                "  naca: '0012'",
                "  points: 25",
                "extrusion:",
                "  span: 0.5",
                "  sections: 3",
                "logging:",
                "  level: WARNING",
            ]
        ),
        encoding="utf-8",
    )


def test_generate_writes_obj_and_dat(tmp_path):
    obj_path = tmp_path / "wing.obj"
    dat_path = tmp_path / "wing.dat"

    rc = cli._main_with_argv([
        "generate", "2412", "--points", "30", "--span", "1", "--sections", "4",
        "--twist", "5", "--obj", str(obj_path), "--dat", str(dat_path),
    ])

    assert rc == 0
    lines = obj_path.read_text(encoding="utf-8").splitlines()
    vertex_lines = [line for line in lines if line.startswith("v ")]
    face_lines = [line for line in lines if line.startswith("f ")]
    assert len(vertex_lines) == 5 * 60
    assert len(face_lines) == 2 * 60 * 4 + 2 * 58

    dat_lines = dat_path.read_text(encoding="utf-8").splitlines()
    assert dat_lines[0] == "NACA 2412"
    assert len(dat_lines) == 61
    assert read_dat(dat_path).shape == (60, 2)


def test_generate_honors_file_and_cli_overrides(tmp_path, capsys):
    config_path = tmp_path / "foilmesh.yaml"
    _write_config(config_path)

    rc = cli._main_with_argv(["--config", str(config_path), "generate", "--sections", "2"])

    assert rc == 0
    out = capsys.readouterr().out
    # 25 stations per surface, 3 rings
    assert "NACA 0012: 50 outline points, 150 vertices" in out


def test_generate_unsupported_descriptor(capsys):
    rc = cli._main_with_argv(["generate", "23456789"])
    assert rc == 1
    assert "has not been implemented" in capsys.readouterr().err


def test_generate_rejects_zero_sections(capsys):
    rc = cli._main_with_argv(["generate", "2412", "--sections", "0"])
    assert rc == 1
    assert "Invalid settings" in capsys.readouterr().err


def test_generate_missing_config_file(tmp_path, capsys):
    rc = cli._main_with_argv(["--config", str(tmp_path / "nope.yaml"), "generate"])
    assert rc == 1
    assert "Configuration file not found" in capsys.readouterr().err


def test_extrude_dat(tmp_path):
    dat_path = tmp_path / "profile.dat"
    obj_path = tmp_path / "profile.obj"
    assert cli._main_with_argv(["generate", "4412", "--points", "40", "--dat", str(dat_path)]) == 0

    rc = cli._main_with_argv([
        "extrude-dat", str(dat_path), "--resample", "64", "--span", "0.3",
        "--sections", "2", "--anchor", "none", "--obj", str(obj_path),
    ])

    assert rc == 0
    vertices = np.array([line.split()[1:] for line in obj_path.read_text(encoding="utf-8").splitlines()
                         if line.startswith("v ")], dtype=float)
    assert vertices.shape == (3 * 64, 3)
    np.testing.assert_allclose(np.unique(vertices[:, 2]), [-0.15, 0.0, 0.15])


def test_extrude_dat_bad_file(tmp_path, capsys):
    dat_path = tmp_path / "empty.dat"
    dat_path.write_text("just a title\n", encoding="utf-8")
    assert cli._main_with_argv(["extrude-dat", str(dat_path)]) == 1
    assert "No coordinate rows" in capsys.readouterr().err


def test_config_validate_and_show(tmp_path, capsys):
    config_path = tmp_path / "foilmesh.yaml"
    _write_config(config_path)

    assert cli._main_with_argv(["--config", str(config_path), "config", "validate"]) == 0
    assert "Configuration is valid" in capsys.readouterr().out

    assert cli._main_with_argv(["--config", str(config_path), "config", "show"]) == 0
    out = capsys.readouterr().out
    assert "GENERATION:" in out
    assert "naca: 0012" in out


def test_config_template_round_trip(tmp_path):
    template = tmp_path / "template.yaml"
    assert cli._main_with_argv(["config", "template", "--output", str(template)]) == 0
    assert cli._main_with_argv(["--config", str(template), "config", "validate"]) == 0
