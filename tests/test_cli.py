"""Tests for the terminal client."""

from __future__ import annotations

import requests

from app.api import cli


class TestFormatResult:
    def test_success(self):
        line = cli.format_result(1, {"result": "Success", "data": {"success": True}})
        assert line == '[1] Success: {"success": true}'

    def test_failure(self):
        line = cli.format_result(2, {"result": "Failed", "error": "boom"})
        assert line == "[2] Failed: boom"


class TestMain:
    def test_prints_results(self, monkeypatch, capsys):
        seen = []

        def _fake_submit(goal, server_url):
            seen.append((goal, server_url))
            return {
                "message": "Goal execution completed",
                "results": [{"result": "Failed", "error": "No endpoint found for task type: x"}],
            }

        monkeypatch.setattr(cli, "submit_goal", _fake_submit)

        code = cli.main(["Prepare", "Q3", "report", "--url", "http://srv:5000"])

        out = capsys.readouterr().out
        assert code == 0
        assert seen == [("Prepare Q3 report", "http://srv:5000")]
        assert "Goal execution completed" in out
        assert "[1] Failed: No endpoint found for task type: x" in out

    def test_connection_error(self, monkeypatch, capsys):
        def _fail(goal, server_url):
            raise requests.exceptions.ConnectionError("refused")

        monkeypatch.setattr(cli, "submit_goal", _fail)

        assert cli.main(["a goal"]) == 1
        assert "Request failed" in capsys.readouterr().err

    def test_empty_prompt(self, monkeypatch, capsys):
        monkeypatch.setattr("builtins.input", lambda prompt: "   ")

        assert cli.main([]) == 1
        assert "No goal given." in capsys.readouterr().err
