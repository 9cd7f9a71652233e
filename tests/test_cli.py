"""Tests for the CLI: intercepted subcommands and the click entry point."""

from __future__ import annotations

import json
import sys
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from cxmcp.__main__ import _click_main, _is_interactive, main
from cxmcp.core.config import Config
from cxmcp.mcp import LaunchDefinition, ServerRegistry, ServerStore


@pytest.fixture
def codex_dir(tmp_path, monkeypatch):
    d = tmp_path / ".codex"
    monkeypatch.setenv("CXMCP_CODEX_DIR", str(d))
    monkeypatch.setenv("CXMCP_MMCP_PATH", str(tmp_path / ".mmcp.json"))
    monkeypatch.delenv("CI", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)
    return d


def _registry(codex_dir) -> ServerRegistry:
    return ServerRegistry(ServerStore.from_config(Config(codex_dir=codex_dir)))


def _run(monkeypatch, *argv: str) -> int:
    monkeypatch.setattr(sys, "argv", ["cxmcp", *argv])
    with pytest.raises(SystemExit) as exc:
        main()
    return exc.value.code


# ── subcommands ─────────────────────────────────────────────────────


class TestListSubcommand:
    def test_empty(self, codex_dir, monkeypatch, capsys):
        assert _run(monkeypatch, "list") == 0
        assert "No MCP servers configured" in capsys.readouterr().out

    def test_shows_both_partitions(self, codex_dir, monkeypatch, capsys):
        registry = _registry(codex_dir)
        registry.add("on", LaunchDefinition("echo", ("hi",)))
        registry.add("off", LaunchDefinition("echo"))
        registry.disable("off")
        assert _run(monkeypatch, "list") == 0
        out = capsys.readouterr().out
        assert "on - ✓ Enabled" in out
        assert "off - ✗ Disabled" in out
        assert "echo hi" in out


class TestAddSubcommand:
    def test_add_command(self, codex_dir, monkeypatch, capsys):
        code = _run(monkeypatch, "add", "--env", "TOKEN=abc", "fs", "--", "npx", "-y", "server-fs")
        assert code == 0
        assert "added fs" in capsys.readouterr().out
        assert _registry(codex_dir).get("fs").definition == LaunchDefinition(
            "npx", ("-y", "server-fs"), {"TOKEN": "abc"}
        )

    def test_add_preset(self, codex_dir, monkeypatch):
        assert _run(monkeypatch, "add", "docs", "--preset", "context7") == 0
        assert _registry(codex_dir).get("docs").definition == LaunchDefinition(
            "npx", ("context7-mcp",)
        )

    def test_unknown_preset(self, codex_dir, monkeypatch, capsys):
        assert _run(monkeypatch, "add", "docs", "--preset", "nope") == 1
        assert "unknown preset" in capsys.readouterr().out

    def test_missing_command_shows_usage(self, codex_dir, monkeypatch, capsys):
        assert _run(monkeypatch, "add", "fs") == 1
        out = capsys.readouterr().out
        assert "usage: cxmcp add" in out
        assert "context7" in out

    def test_duplicate_exits_1(self, codex_dir, monkeypatch, capsys):
        _registry(codex_dir).add("fs", LaunchDefinition("x"))
        assert _run(monkeypatch, "add", "fs", "--", "y") == 1
        assert "already exists" in capsys.readouterr().out
        assert _registry(codex_dir).get("fs").command == "x"


class TestEnableDisableSubcommands:
    def test_disable_then_enable(self, codex_dir, monkeypatch):
        _registry(codex_dir).add("fs", LaunchDefinition("x"))
        assert _run(monkeypatch, "disable", "fs") == 0
        assert _registry(codex_dir).get("fs").enabled is False
        assert _run(monkeypatch, "enable", "fs") == 0
        assert _registry(codex_dir).get("fs").enabled is True

    def test_missing_name_exits_1(self, codex_dir, monkeypatch, capsys):
        assert _run(monkeypatch, "enable", "ghost") == 1
        assert "Server 'ghost' not found" in capsys.readouterr().out

    def test_no_args_shows_usage(self, codex_dir, monkeypatch, capsys):
        assert _run(monkeypatch, "disable") == 1
        assert "usage: cxmcp disable" in capsys.readouterr().out

    def test_verbose_flag_is_not_a_name(self, codex_dir, monkeypatch):
        _registry(codex_dir).add("fs", LaunchDefinition("x"))
        assert _run(monkeypatch, "disable", "-v", "fs") == 0


class TestCodexDirOption:
    def test_after_subcommand(self, codex_dir, tmp_path, monkeypatch):
        other = tmp_path / "other"
        _registry(codex_dir).add("fs", LaunchDefinition("x"))
        _registry(other).add("fs", LaunchDefinition("x"))
        assert _run(monkeypatch, "disable", "fs", "--codex-dir", str(other)) == 0
        assert _registry(other).get("fs").enabled is False
        assert _registry(codex_dir).get("fs").enabled is True

    def test_before_subcommand(self, codex_dir, tmp_path, monkeypatch, capsys):
        other = tmp_path / "other"
        _registry(other).add("elsewhere", LaunchDefinition("x"))
        assert _run(monkeypatch, "--codex-dir", str(other), "list") == 0
        assert "elsewhere - ✓ Enabled" in capsys.readouterr().out

    def test_equals_form(self, codex_dir, tmp_path, monkeypatch):
        other = tmp_path / "other"
        assert _run(monkeypatch, f"--codex-dir={other}", "add", "fs", "--", "x") == 0
        assert _registry(other).get("fs").command == "x"
        assert _registry(codex_dir).list() == []

    def test_missing_value(self, codex_dir, monkeypatch, capsys):
        _registry(codex_dir).add("fs", LaunchDefinition("x"))
        assert _run(monkeypatch, "disable", "fs", "--codex-dir") == 2
        assert "--codex-dir requires a directory" in capsys.readouterr().out
        assert _registry(codex_dir).get("fs").enabled is True

    def test_options_after_separator_belong_to_command(self, codex_dir, monkeypatch):
        assert _run(monkeypatch, "add", "fs", "--", "tool", "-v", "--codex-dir", "d") == 0
        assert _registry(codex_dir).get("fs").args == ("-v", "--codex-dir", "d")


class TestStatusSubcommand:
    def test_reports_unreachable(self, codex_dir, monkeypatch, capsys):
        _registry(codex_dir).add("ghost", LaunchDefinition("/nonexistent/xyz"))
        assert _run(monkeypatch, "status") == 0
        out = capsys.readouterr().out
        assert "ghost" in out
        assert "not found" in out

    def test_reports_reachable(self, codex_dir, monkeypatch, capsys):
        _registry(codex_dir).add("py", LaunchDefinition(sys.executable))
        assert _run(monkeypatch, "status", "py") == 0
        assert "Running" in capsys.readouterr().out


class TestMmcpSubcommands:
    def test_export(self, codex_dir, tmp_path, monkeypatch, capsys):
        _registry(codex_dir).add("gh", LaunchDefinition("gh-mcp"))
        assert _run(monkeypatch, "export-to-mmcp") == 0
        out = capsys.readouterr().out
        assert "Added: gh" in out
        assert "Export completed" in out
        data = json.loads((tmp_path / ".mmcp.json").read_text())
        assert data["mcpServers"]["gh"]["command"] == "gh-mcp"

    def test_export_nothing(self, codex_dir, monkeypatch, capsys):
        assert _run(monkeypatch, "export-to-mmcp") == 0
        assert "No MCP servers found" in capsys.readouterr().out

    def test_import(self, codex_dir, tmp_path, monkeypatch, capsys):
        (tmp_path / ".mmcp.json").write_text(
            json.dumps({"mcpServers": {"gh": {"command": "gh-mcp", "args": []}}})
        )
        assert _run(monkeypatch, "import-from-mmcp") == 0
        assert "Imported: gh" in capsys.readouterr().out
        assert _registry(codex_dir).get("gh").enabled is True


# ── click entry point ───────────────────────────────────────────────


class TestIsInteractive:
    def _check(self, tty: bool, show_help: bool = False) -> bool:
        with patch("cxmcp.__main__.sys") as fake_sys:
            fake_sys.stdout.isatty.return_value = tty
            fake_sys.stdin.isatty.return_value = tty
            return _is_interactive(show_help)

    def test_tty(self, monkeypatch):
        monkeypatch.delenv("CI", raising=False)
        assert self._check(tty=True) is True

    def test_ci_env_disables(self, monkeypatch):
        monkeypatch.setenv("CI", "true")
        assert self._check(tty=True) is False

    def test_help_flag_disables(self, monkeypatch):
        monkeypatch.delenv("CI", raising=False)
        assert self._check(tty=True, show_help=True) is False

    def test_no_tty_disables(self, monkeypatch):
        monkeypatch.delenv("CI", raising=False)
        assert self._check(tty=False) is False



class TestClickMain:
    def test_non_tty_lists_servers(self, codex_dir):
        _registry(codex_dir).add("gh", LaunchDefinition("gh-mcp"))
        result = CliRunner().invoke(_click_main, ["--codex-dir", str(codex_dir)])
        assert result.exit_code == 0
        assert "Codex MCP Control Panel" in result.output
        assert "gh - ✓ Enabled" in result.output

    def test_help_lists_and_shows_usage(self, codex_dir):
        result = CliRunner().invoke(_click_main, ["-h"])
        assert result.exit_code == 0
        assert "No MCP servers configured" in result.output
        assert "export-to-mmcp" in result.output

    def test_non_tty_skips_menu(self, codex_dir):
        with patch("cxmcp.__main__.run_interactive") as interactive:
            result = CliRunner().invoke(_click_main, [])
        assert result.exit_code == 0
        interactive.assert_not_called()

    def test_tty_runs_menu(self, codex_dir):
        with (
            patch("cxmcp.__main__._is_interactive", return_value=True),
            patch("cxmcp.__main__.run_interactive") as interactive,
        ):
            result = CliRunner().invoke(_click_main, [])
        assert result.exit_code == 0
        interactive.assert_called_once()

    def test_unhandled_error_exits_1(self, codex_dir):
        with patch("cxmcp.__main__.display_server_list", side_effect=RuntimeError("boom")):
            result = CliRunner().invoke(_click_main, [])
        assert result.exit_code == 1
        assert "error: boom" in result.output
