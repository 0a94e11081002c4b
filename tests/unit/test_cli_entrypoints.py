"""Unit tests for CLI parsing and override handling."""

import argparse
from pathlib import Path

import pytest

import foilmesh.cli as cli
from foilmesh.geometry.naca import Spacing
from foilmesh.mesh.extrude import AnchorPolicy


def _parse(argv):
    return cli.create_parser().parse_args(argv)


def test_generate_arguments_parse():
    args = _parse(["--debug", "generate", "23012", "--points", "30", "--span", "2",
                   "--twist", "-4", "--scale", "1", "0.5", "--anchor", "center"])
    assert args.command == "generate"
    assert args.naca == "23012"
    assert args.points == 30
    assert args.scale == [1.0, 0.5]
    assert args.debug


def test_overrides_are_applied_and_validated():
    args = _parse(["--verbose", "generate", "4415", "--spacing", "linear", "--closed-te",
                   "--twist", "6", "--scale", "1.2", "0.8", "--aoa", "3", "--anchor", "none"])
    config = cli.load_configuration(args)

    assert config.logging.level == "INFO"
    assert config.generation.naca == "4415"
    assert config.generation.spacing is Spacing.LINEAR
    assert config.generation.closed_trailing_edge
    assert config.extrusion.twist_enabled
    assert config.extrusion.twist == 6.0
    assert config.extrusion.scale_enabled
    assert (config.extrusion.root_scale, config.extrusion.tip_scale) == (1.2, 0.8)
    assert config.extrusion.angle_of_attack == 3.0
    assert config.extrusion.anchor is AnchorPolicy.NONE


def test_no_twist_wins_over_config(tmp_path):
    config_path = tmp_path / "foilmesh.yaml"
    config_path.write_text("extrusion:\n  twist: 10\n", encoding="utf-8")
    args = _parse(["--config", str(config_path), "generate", "--no-twist"])
    config = cli.load_configuration(args)
    assert config.extrusion.twist == 10.0
    assert not config.extrusion.twist_enabled


def test_invalid_override_raises_value_error():
    args = _parse(["generate", "2412", "--sections", "0"])
    with pytest.raises(ValueError):
        cli.load_configuration(args)


def test_dispatch_routes_to_handler(monkeypatch):
    captured = {}

    def fake_generate(args):
        captured["command"] = args.command
        return 0

    monkeypatch.setattr(cli, "main_generate", fake_generate)
    rc = cli._dispatch_command(argparse.Namespace(command="generate"))

    assert rc == 0
    assert captured["command"] == "generate"


def test_unknown_command_returns_error():
    assert cli._dispatch_command(argparse.Namespace(command="bogus")) == 1


def test_no_command_prints_help(capsys):
    assert cli._main_with_argv([]) == 1
    assert "usage" in capsys.readouterr().out


def test_config_template_defaults_to_foilmesh_yaml(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    assert cli._main_with_argv(["config", "template"]) == 0
    assert Path(tmp_path / "foilmesh.yaml").exists()
