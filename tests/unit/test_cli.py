"""Tests for the seedstream CLI."""

from __future__ import annotations

import json

import pytest

from seedstream.cli import main, parse_seed
from seedstream.seeds import batch_fingerprint, generate
from seedstream.types import SeedSpec


class TestParseSeed:
    def test_sentinels(self):
        assert parse_seed("auto") is SeedSpec.AUTO
        assert parse_seed("REUSE") is SeedSpec.REUSE_OR_AUTO

    def test_integer(self):
        assert parse_seed("42") == 42
        assert parse_seed("-3") == -3

    def test_invalid(self):
        with pytest.raises(Exception, match="expected 'auto'"):
            parse_seed("forty-two")


class TestGenerateCommand:
    def test_json_output(self, capsys):
        assert main(["generate", "--count", "3", "--seed", "42", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        expected = generate(3, 42)
        assert data["count"] == 3
        assert data["seeds"] == [list(s) for s in expected]
        assert data["fingerprint"] == batch_fingerprint(expected)

    def test_table_output(self, capsys):
        assert main(["generate", "-n", "2", "-s", "7"]) == 0
        out = capsys.readouterr().out
        assert "Fingerprint" in out
        assert batch_fingerprint(generate(2, 7)) in out

    def test_auto_seed(self, capsys):
        assert main(["generate", "--count", "2", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert len(data["seeds"]) == 2

    def test_zero_count(self, capsys):
        assert main(["generate", "--count", "0"]) == 0
        assert "No seeds" in capsys.readouterr().out

    def test_negative_count(self, capsys):
        assert main(["generate", "--count", "-1"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_seed_exits(self):
        with pytest.raises(SystemExit):
            main(["generate", "--count", "1", "--seed", "bogus"])


class TestCheckCommand:
    def test_valid_file(self, tmp_path, capsys):
        path = tmp_path / "seeds.json"
        seeds = generate(4, 42)
        path.write_text(json.dumps([list(s) for s in seeds]))
        assert main(["check", str(path)]) == 0
        out = capsys.readouterr().out
        assert "OK: 4 seeds" in out
        assert batch_fingerprint(seeds) in out

    def test_valid_file_json(self, tmp_path, capsys):
        path = tmp_path / "seeds.json"
        path.write_text(json.dumps([list(s) for s in generate(2, 1)]))
        assert main(["check", str(path), "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["valid"] is True
        assert data["count"] == 2

    def test_scalar_seeds(self, tmp_path, capsys):
        path = tmp_path / "seeds.json"
        path.write_text("[1, 2, 3]")
        assert main(["check", str(path)]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_not_a_list(self, tmp_path, capsys):
        path = tmp_path / "seeds.json"
        path.write_text('{"seed": 1}')
        assert main(["check", str(path)]) == 1
        assert "JSON list" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["check", str(tmp_path / "nope.json")]) == 1
        assert "cannot read" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()
