"""CLI smoke tests."""

import json

import pytest

from kiacha.cli import main


class TestCli:

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_route_json(self, capsys):
        assert main(["route", "Can you help me debug this function?", "--json"]) == 0
        result = json.loads(capsys.readouterr().out)
        assert result["primary_domain"] == "code"

    def test_route_text(self, capsys):
        assert main(["route", "hello"]) == 0
        assert "Primary: general" in capsys.readouterr().out

    def test_ask(self, capsys):
        assert main(["ask", "debug my code", "--user", "ana", "--json"]) == 0
        result = json.loads(capsys.readouterr().out)
        assert result["response"]["domain"] == "code"
        assert result["personality"] == "balanced"

    def test_ask_unknown_personality(self, capsys):
        assert main(["ask", "debug", "--personality", "grumpy"]) == 1
        assert "Unknown personality" in capsys.readouterr().err

    def test_personalities(self, capsys):
        assert main(["personalities"]) == 0
        assert "Sweet Kiacha" in capsys.readouterr().out

    def test_compare(self, capsys):
        assert main(["personalities", "--compare", "sweet", "mysterious", "--json"]) == 0
        result = json.loads(capsys.readouterr().out)
        assert result["shared_strengths"] == ["psychology", "creativity"]

    def test_event(self, capsys):
        assert main(["event", "user_praise", "--user", "ana"]) == 0
        assert "Mood:" in capsys.readouterr().out

    def test_event_rejects_unknown_kind(self):
        with pytest.raises(SystemExit) as excinfo:
            main(["event", "teleportation"])
        assert excinfo.value.code == 2
