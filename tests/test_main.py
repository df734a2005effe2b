"""Tests for the command line launcher."""

import pytest

from moodbooster.config import GameConfig
from moodbooster.main import build_parser, load_config, main, parse_resolution


class TestParseResolution:
    """Tests for WIDTHxHEIGHT parsing."""

    def test_valid(self):
        assert parse_resolution("540x960") == (540, 960)

    @pytest.mark.parametrize("value", ["540", "axb", "0x100", "100x-5"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_resolution(value)


class TestArguments:
    """Tests for argument parsing and config overrides."""

    def test_game_arguments_become_overrides(self):
        args = build_parser().parse_args(['--duration', '30', '--cooldown', '0.5', '--auto-start'])
        cfg = load_config(args)
        assert cfg.game_duration == 30.0
        assert cfg.consume_cooldown == 0.5
        assert cfg.attract_auto_start is True

    def test_defaults_leave_config_untouched(self):
        args = build_parser().parse_args([])
        cfg = load_config(args)
        assert cfg == GameConfig()
        assert args.seed is None
        assert not args.fullscreen

    def test_yaml_config(self, tmp_path):
        path = tmp_path / "kiosk.yaml"
        path.write_text("game_duration: 20\n")
        args = build_parser().parse_args(['--config', str(path), '--spawn-interval', '2'])
        cfg = load_config(args)
        assert cfg.game_duration == 20.0
        assert cfg.spawn_interval == 2.0


class TestMain:
    """Tests for error exits (no window is opened)."""

    def test_invalid_config_exits_1(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("- not a mapping\n")
        assert main(['--config', str(path)]) == 1
        assert "ERROR" in capsys.readouterr().out

    def test_invalid_value_exits_1(self, capsys):
        assert main(['--duration', '-5']) == 1
        assert "ERROR" in capsys.readouterr().out

    def test_invalid_resolution_exits_1(self, capsys):
        assert main(['--resolution', 'big']) == 1
        assert "Invalid resolution" in capsys.readouterr().out
