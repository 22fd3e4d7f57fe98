"""Tests for the command-line driver and settings."""

import json

import pytest

from cli import main
from config import load_settings


class TestCli:
    """End-to-end runs over files on disk."""

    def test_events_json(self, events_file, capsys):
        assert main([str(events_file), "--workers", "1"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out[0]["players"] == ["Jane Doe", "John Smith"]
        assert "players" not in out[1]

    def test_names_and_teams(self, events_file, names_csv, tmp_path, capsys):
        teams = tmp_path / "teams.txt"
        teams.write_text("Harold Night\n", encoding="utf-8")
        rc = main([str(events_file), "--names", str(names_csv), "--teams", str(teams), "--format", "summary"])
        assert rc == 0
        out = capsys.readouterr().out
        assert "Players:     Jane Doe, John Smith" in out
        assert "Teams:       Harold Night" in out

    def test_text_mode(self, tmp_path, capsys):
        src = tmp_path / "desc.txt"
        src.write_text("Featuring Sam Okafor and J. Rivera", encoding="utf-8")
        assert main([str(src), "--text"]) == 0
        assert capsys.readouterr().out.splitlines() == ["J. Rivera", "Sam Okafor"]

    def test_missing_source(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.json")]) == 1
        assert capsys.readouterr().err.startswith("error:")

    def test_bad_name_dict(self, events_file, tmp_path, capsys):
        assert main([str(events_file), "--names", str(tmp_path / "nope.csv")]) == 1
        assert "name dictionary" in capsys.readouterr().err


class TestSettings:
    """Environment-driven configuration."""

    def test_defaults(self):
        s = load_settings()
        assert s.data_dir == "/data"
        assert s.events_jsonl_path.endswith("events.jsonl")
        assert s.names_csv == ""
        assert s.max_workers == 4
        assert s.log_level == "INFO"

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("DATA_DIR", "/tmp/players")
        monkeypatch.setenv("INFER_MAX_WORKERS", "2")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        s = load_settings()
        assert s.events_jsonl_path == "/tmp/players/events.jsonl"
        assert s.max_workers == 2
        assert s.log_level == "DEBUG"

    def test_bad_worker_count(self, monkeypatch):
        monkeypatch.setenv("INFER_MAX_WORKERS", "many")
        with pytest.raises(ValueError, match="INFER_MAX_WORKERS"):
            load_settings()


class TestCliBadEvents:
    """Well-formed JSON carrying wrongly typed fields."""

    def test_scalar_players_field(self, tmp_path, capsys):
        src = tmp_path / "events.json"
        src.write_text('[{"uid": "a", "players": 5}]', encoding="utf-8")
        assert main([str(src)]) == 1
        assert "players must be a list of strings" in capsys.readouterr().err
