"""Tests for CLI module.

Tests the command-line interface for column trees and configuration.
"""

from __future__ import annotations

import json

import pytest

from headgrid.cli import format_config_show, load_column_file, main
from headgrid.config import HeadGridSettings
from headgrid.constants import NBSP
from headgrid.exceptions import HeadGridException


COLUMNS = [
    {"name": "G", "columns": [{"key": "a", "name": "A"}, {"key": "b", "name": "B"}]},
    {"key": "c", "name": "C"},
]


def _write_json(directory, data, name="columns.json"):
    path = directory / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestMainEntryPoint:
    """Tests for CLI main entry point."""

    def test_no_args_prints_help_text(self, capsys):
        assert main([]) == 0
        output = capsys.readouterr().out
        assert "usage:" in output.lower()
        assert "grid" in output
        assert "leaves" in output
        assert "config" in output


class TestTreeCommands:
    """leaves and grid commands."""

    def test_grid(self, isolated_config, capsys):
        path = _write_json(isolated_config, COLUMNS)
        assert main(["grid", str(path)]) == 0
        grid = json.loads(capsys.readouterr().out)
        assert grid == [
            [
                {"type": "group", "colspan": 2, "name": "G"},
                {"type": "blank", "colspan": 1, "name": NBSP},
            ],
            [
                {"type": "leaf", "colspan": 1, "key": "a", "name": "A"},
                {"type": "leaf", "colspan": 1, "key": "b", "name": "B"},
                {"type": "leaf", "colspan": 1, "key": "c", "name": "C"},
            ],
        ]

    def test_leaves(self, isolated_config, capsys):
        path = _write_json(isolated_config, {"columns": COLUMNS})
        assert main(["leaves", str(path)]) == 0
        leaves = json.loads(capsys.readouterr().out)
        assert [lf["key"] for lf in leaves] == ["a", "b", "c"]

    def test_toml_input(self, isolated_config, capsys):
        path = isolated_config / "columns.toml"
        path.write_text(
            '[[columns]]\nname = "G"\n'
            '[[columns.columns]]\nkey = "a"\n'
            '[[columns.columns]]\nkey = "b"\n'
            '[[columns]]\nfield = "c"\nheaderName = "C"\n',
            encoding="utf-8",
        )
        assert main(["grid", str(path), "--indent", "0"]) == 0
        grid = json.loads(capsys.readouterr().out)
        assert [cell["name"] for cell in grid[1]] == ["a", "b", "C"]

    def test_strict_rejects_duplicates(self, isolated_config, capsys):
        path = _write_json(isolated_config, [{"key": "a"}, {"key": "a"}])
        assert main(["leaves", str(path), "--strict"]) == 1
        assert "Duplicate column key" in capsys.readouterr().err

    def test_empty_group_without_strict(self, isolated_config, capsys):
        path = _write_json(isolated_config, [{"name": "Empty", "columns": []}])
        assert main(["grid", str(path)]) == 1
        assert "malformed column tree" in capsys.readouterr().err

    def test_missing_file(self, isolated_config, capsys):
        assert main(["grid", str(isolated_config / "nope.json")]) == 1
        assert "Error" in capsys.readouterr().err

    def test_invalid_json(self, isolated_config, capsys):
        path = isolated_config / "broken.json"
        path.write_text("[{", encoding="utf-8")
        assert main(["grid", str(path)]) == 1
        assert "Error" in capsys.readouterr().err

    def test_invalid_definition(self, isolated_config, capsys):
        path = _write_json(isolated_config, [{"type": "sparkline"}])
        assert main(["grid", str(path)]) == 1
        assert "Invalid column definition" in capsys.readouterr().err

    def test_load_column_file_rejects_scalar(self, isolated_config):
        path = _write_json(isolated_config, {"columns": 3})
        with pytest.raises(HeadGridException, match="Expected a list of columns"):
            load_column_file(path)


class TestConfigCommand:
    """config and init commands."""

    def test_config_show(self, capsys):
        assert main(["config", "--show"]) == 0
        output = capsys.readouterr().out
        assert "[log]" in output
        assert "[grid]" in output

    def test_config_toml(self, capsys):
        assert main(["config", "--toml"]) == 0
        assert "strict = false" in capsys.readouterr().out

    def test_config_env(self, capsys):
        assert main(["config", "--env"]) == 0
        assert "HEADGRID_GRID__STRICT" in capsys.readouterr().out

    def test_config_sources(self, capsys, monkeypatch):
        monkeypatch.setenv("HEADGRID_GRID__STRICT", "true")
        assert main(["config", "--sources"]) == 0
        output = capsys.readouterr().out
        assert "headgrid.toml" in output
        assert "1 vars" in output

    def test_config_output_file(self, isolated_config, capsys):
        target = isolated_config / "out.toml"
        assert main(["config", "--toml", "-o", str(target)]) == 0
        assert "[grid]" in target.read_text(encoding="utf-8")
        assert "Configuration written" in capsys.readouterr().out

    def test_init_creates_file(self, isolated_config):
        assert main(["init"]) == 0
        content = (isolated_config / "headgrid.toml").read_text(encoding="utf-8")
        assert content.startswith("# headgrid Configuration File")
        assert HeadGridSettings().grid.strict is False

    def test_init_refuses_overwrite(self, isolated_config, capsys):
        (isolated_config / "headgrid.toml").write_text("", encoding="utf-8")
        assert main(["init"]) == 1
        assert "already exists" in capsys.readouterr().err

    def test_init_force(self, isolated_config):
        (isolated_config / "headgrid.toml").write_text("", encoding="utf-8")
        assert main(["init", "--force"]) == 0
        assert "[log]" in (isolated_config / "headgrid.toml").read_text(encoding="utf-8")

    def test_format_config_show(self):
        output = format_config_show(HeadGridSettings())
        assert output.startswith("headgrid Configuration")
        assert "strict = False" in output
