"""Tests for cli.py — argparse, global flags, error envelopes, dispatch."""

import json

import pytest

from weeek_cli.cli import _emit_cli_error, _extract_global_flags, build_parser, main
from weeek_cli.exceptions import (
    AmbiguousError,
    CliError,
    ConfigurationError,
    PartialFailure,
    TransportError,
)
from weeek_cli.models import SubtaskOutcome, TaskCreationReport

# ---------------------------------------------------------------------------
# _extract_global_flags
# ---------------------------------------------------------------------------


class TestExtractGlobalFlags:
    def test_no_flags(self):
        assert _extract_global_flags(["projects"]) == ("json", False, False, ["projects"])

    def test_format_after_command(self):
        fmt, quiet, verbose, remaining = _extract_global_flags(["board", "Rel", "--format", "table"])
        assert fmt == "table"
        assert remaining == ["board", "Rel"]

    def test_invalid_format(self):
        with pytest.raises(CliError, match="Invalid format"):
            _extract_global_flags(["--format", "csv", "projects"])

    def test_quiet_and_verbose(self):
        assert _extract_global_flags(["-q", "users"])[1] is True
        assert _extract_global_flags(["users", "-v"])[2] is True

    def test_quiet_verbose_exclusive(self):
        with pytest.raises(CliError, match="mutually exclusive"):
            _extract_global_flags(["-q", "-v", "users"])

    def test_version_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            _extract_global_flags(["--version"])
        assert exc_info.value.code == 0
        assert "weeek-cli" in capsys.readouterr().out


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class TestParser:
    def test_create_flags(self):
        ns = build_parser().parse_args(
            ["create", "Main", "-b", "Release", "-c", "Backlog", "-u", "ann", "-p", "2",
             "-d", "Text", "-s", "A,B"]
        )
        assert ns.title == "Main"
        assert ns.board == "Release"
        assert ns.column == "Backlog"
        assert ns.assignee == "ann"
        assert ns.priority == "2"
        assert ns.description == "Text"
        assert ns.subtasks == "A,B"

    def test_create_defaults(self):
        ns = build_parser().parse_args(["create", "Main"])
        assert ns.priority == "0"
        assert ns.board is None

    def test_run_method_uppercased(self):
        ns = build_parser().parse_args(["run", "get", "tm/tasks", "-p", "boardId=1"])
        assert ns.method == "GET"
        assert ns.params == "boardId=1"

    def test_timer_action_choices(self):
        with pytest.raises(CliError):
            build_parser().parse_args(["timer", "pause", "5"])

    def test_missing_argument_raises_cli_error(self):
        with pytest.raises(CliError):
            build_parser().parse_args(["move", "5"])


# ---------------------------------------------------------------------------
# Error output
# ---------------------------------------------------------------------------


class TestEmitCliError:
    def test_json_envelope(self, capsys):
        _emit_cli_error(AmbiguousError("[ERROR] Multiple boards", "rel"), "json")
        payload = json.loads(capsys.readouterr().err)
        assert payload["ok"] is False
        assert payload["error"]["type"] == "ambiguous"
        assert payload["error"]["exit_code"] == 1

    def test_transport_status(self, capsys):
        _emit_cli_error(TransportError(401, "Unauthorized", "bad token"), "json")
        payload = json.loads(capsys.readouterr().err)
        assert payload["error"]["status"] == 401
        assert "HTTP 401" in payload["error"]["message"]

    def test_partial_failure_report(self, capsys):
        report = TaskCreationReport(
            task={"id": 1}, subtasks=[SubtaskOutcome("A", False, error="boom")]
        )
        _emit_cli_error(PartialFailure("[ERROR] partial", report), "json")
        payload = json.loads(capsys.readouterr().err)
        assert payload["error"]["exit_code"] == 3
        assert payload["report"]["subtasks"][0]["error"] == "boom"

    def test_table_prints_message(self, capsys):
        _emit_cli_error(ConfigurationError("[SETUP_NEEDED] key"), "table")
        assert capsys.readouterr().err.strip() == "[SETUP_NEEDED] key"


# ---------------------------------------------------------------------------
# main()
# ---------------------------------------------------------------------------


class TestMain:
    def test_no_args_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "Usage: weeek-cli" in capsys.readouterr().out

    def test_version_command(self, capsys):
        with pytest.raises(SystemExit):
            main(["version"])
        assert capsys.readouterr().out.startswith("weeek-cli ")

    def test_missing_key_exits_2(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["projects"])
        assert exc_info.value.code == 2
        payload = json.loads(capsys.readouterr().err)
        assert payload["error"]["type"] == "configuration"

    def test_spec_commands_need_no_key(self, tmp_path, capsys, monkeypatch):
        spec = tmp_path / "weeek_spec.json"
        spec.write_text(json.dumps({"tags": [{"name": "Tasks"}], "paths": {}}), encoding="utf-8")
        monkeypatch.setenv("WEEEK_SPEC_PATH", str(spec))
        main(["tags"])
        assert json.loads(capsys.readouterr().out) == ["Tasks"]

    def test_invalid_priority_exits_1(self, monkeypatch, capsys):
        monkeypatch.setenv("WEEEK_API_KEY", "k")
        with pytest.raises(SystemExit) as exc_info:
            main(["create", "Main", "-p", "7"])
        assert exc_info.value.code == 1
        assert "Invalid priority" in capsys.readouterr().err
