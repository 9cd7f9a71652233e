"""CLI entry point: subcommands, interactive menu, or a one-shot listing."""

from __future__ import annotations

import os
import sys

import click
from rich.markup import escape

from .core.config import Config, load_config
from .core.utils import format_command, setup_logging
from .mcp import (
    LaunchDefinition,
    RegistryError,
    ServerRegistry,
    ServerStore,
    probe_all,
)
from .mcp.mmcp import export_to_mmcp, import_from_mmcp
from .mcp.presets import PRESETS, get_preset
from .tui import console, display_server_list, run_interactive
from .tui.renderer import display_probe_results, print_welcome


def _make_registry(config: Config) -> ServerRegistry:
    return ServerRegistry(ServerStore.from_config(config))


def _is_interactive(show_help: bool) -> bool:
    if show_help or os.getenv("CI") == "true":
        return False
    return sys.stdout.isatty() and sys.stdin.isatty()


# ── Subcommands ─────────────────────────────────────────────────────


def _cmd_list(config: Config, args: list[str]) -> int:
    display_server_list(_make_registry(config).list())
    return 0


def _cmd_status(config: Config, args: list[str]) -> int:
    entries = _make_registry(config).list()
    if args:
        entries = [e for e in entries if e.name in args]
    with console.status("checking servers...", spinner="dots"):
        results = probe_all(entries, config.probe_timeout)
    display_probe_results(results)
    return 0


def _cmd_enable(config: Config, args: list[str]) -> int:
    if not args:
        console.print("usage: cxmcp enable <name>...", style="dim")
        return 1
    registry = _make_registry(config)
    for name in args:
        registry.enable(name)
        console.print(f"enabled [bold]{escape(name)}[/bold]")
    return 0


def _cmd_disable(config: Config, args: list[str]) -> int:
    if not args:
        console.print("usage: cxmcp disable <name>...", style="dim")
        return 1
    registry = _make_registry(config)
    for name in args:
        registry.disable(name)
        console.print(f"disabled [bold]{escape(name)}[/bold]")
    return 0


def _cmd_add(config: Config, args: list[str]) -> int:
    """Parse `cxmcp add [--env KEY=VAL]... <name> (--preset <p> | -- command args...)`."""
    command_args: list[str] = []
    if "--" in args:
        idx = args.index("--")
        command_args = args[idx + 1 :]
        args = args[:idx]

    preset_name = None
    env_vars: dict[str, str] = {}
    positional: list[str] = []
    i = 0
    while i < len(args):
        if args[i] in ("--preset", "-p") and i + 1 < len(args):
            preset_name = args[i + 1]
            i += 2
        elif args[i] in ("--env", "-e") and i + 1 < len(args):
            k, _, v = args[i + 1].partition("=")
            env_vars[k] = v
            i += 2
        else:
            positional.append(args[i])
            i += 1

    if not positional or (not command_args and not preset_name):
        console.print(
            "usage: cxmcp add [--env KEY=VAL]... <name> (--preset <preset> | -- command args...)",
            style="dim",
        )
        console.print(f"presets: {', '.join(p.name for p in PRESETS)}", style="dim")
        return 1

    name = positional[0]
    if preset_name:
        try:
            preset = get_preset(preset_name)
        except KeyError:
            console.print(f"unknown preset [bold]{escape(preset_name)}[/bold]", style="red")
            return 1
        command, cmd_args = preset.command, list(preset.args)
    else:
        command, cmd_args = command_args[0], command_args[1:]

    definition = LaunchDefinition(command, tuple(cmd_args), env_vars or None)
    _make_registry(config).add(name, definition)
    console.print(
        f"added [bold]{escape(name)}[/bold]: {escape(format_command(command, cmd_args))}"
    )
    return 0


def _cmd_export(config: Config, args: list[str]) -> int:
    console.print("\n  📤 Exporting Codex MCP servers to mmcp\n", style="bold blue")
    report = export_to_mmcp(_make_registry(config), config.mmcp_path)

    if not report.added and not report.updated:
        console.print("  ⚠️  No MCP servers found in Codex configuration", style="yellow")
        console.print(f"  Make sure you have MCP servers configured in {config.config_path}\n", style="dim")
        return 0

    for name in report.added:
        console.print(f"    ✓ Added: {escape(name)}", style="green")
    for name in report.updated:
        console.print(f"    ✓ Updated: {escape(name)}", style="yellow")
    console.print()
    console.print("  ✅ Export completed successfully!", style="green")
    console.print(f"    • New servers: {len(report.added)}", style="dim")
    console.print(f"    • Updated servers: {len(report.updated)}", style="dim")
    console.print(f"    • Saved to: {report.path}\n", style="dim")
    console.print("  🚀 Next steps:", style="bold cyan")
    console.print("    1. Install mmcp (if not installed): npm install -g mmcp", style="dim")
    console.print("    2. Add target CLI: mmcp agents add codex-cli", style="dim")
    console.print("    3. Apply settings: mmcp apply\n", style="dim")
    return 0


def _cmd_import(config: Config, args: list[str]) -> int:
    console.print("\n  📥 Importing from mmcp to Codex\n", style="bold blue")
    report = import_from_mmcp(_make_registry(config), config.mmcp_path)

    if not report.added and not report.skipped:
        console.print(f"  ⚠️  No MCP servers found in {report.path}\n", style="yellow")
        return 0

    for name in report.added:
        console.print(f"    ✓ Imported: {escape(name)}", style="green")
    for name in report.skipped:
        console.print(f"    • Skipped: {escape(name)} (already configured or invalid)", style="dim")
    console.print()
    console.print(
        f"  ✅ Imported {len(report.added)} server(s), skipped {len(report.skipped)}\n",
        style="green",
    )
    return 0


SUBCOMMANDS = {
    "list": _cmd_list,
    "status": _cmd_status,
    "enable": _cmd_enable,
    "disable": _cmd_disable,
    "add": _cmd_add,
    "export-to-mmcp": _cmd_export,
    "import-from-mmcp": _cmd_import,
}


def _pop_global_options(argv: list[str]) -> tuple[list[str], str | None, bool]:
    """Strip `--codex-dir DIR` and `-v` from *argv*; a bare `--` ends the scan."""
    rest: list[str] = []
    codex_dir = None
    verbose = False
    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--":
            rest.extend(argv[i:])
            break
        if arg in ("--verbose", "-v"):
            verbose = True
        elif arg == "--codex-dir":
            if i + 1 == len(argv) or argv[i + 1] == "--":
                raise click.UsageError("--codex-dir requires a directory")
            codex_dir = argv[i + 1]
            i += 1
        elif arg.startswith("--codex-dir="):
            codex_dir = arg.partition("=")[2]
        else:
            rest.append(arg)
        i += 1
    return rest, codex_dir, verbose


def _handle_subcommand(
    argv: list[str], codex_dir: str | None = None, verbose: bool = False
) -> int:
    sub, rest = argv[0], argv[1:]
    config = load_config(codex_dir=codex_dir, verbose=verbose)
    setup_logging(config.verbose)
    try:
        return SUBCOMMANDS[sub](config, rest)
    except RegistryError as e:
        console.print(f"error: {escape(str(e))}", style="bold red")
        return 1
    except Exception as e:
        console.print(f"error: {escape(str(e))}", style="bold red")
        if config.verbose:
            console.print_exception()
        return 1


def _usage() -> None:
    console.print("usage: cxmcp [--codex-dir DIR] [-v] [<command>]", style="dim")
    console.print()
    console.print("  [bold](none)[/bold]            Interactive server menu")
    console.print("  [bold]list[/bold]              List configured servers")
    console.print("  [bold]status[/bold]            Check whether server commands launch")
    console.print("  [bold]enable[/bold]            Move servers back into config.toml")
    console.print("  [bold]disable[/bold]           Move servers into the backup file")
    console.print("  [bold]add[/bold]               Add a server (command or preset)")
    console.print("  [bold]export-to-mmcp[/bold]    Copy active servers to ~/.mmcp.json")
    console.print("  [bold]import-from-mmcp[/bold]  Add servers from ~/.mmcp.json")
    console.print()
    console.print("examples:", style="dim")
    console.print("  cxmcp add docs --preset context7", style="dim")
    console.print("  cxmcp add fs -- npx -y @modelcontextprotocol/server-filesystem ~", style="dim")
    console.print("  cxmcp disable fs", style="dim")


# ── CLI entry point ─────────────────────────────────────────────────


@click.command(context_settings={"help_option_names": []})
@click.option(
    "--codex-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Codex config directory (default ~/.codex)",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--help", "-h", "show_help", is_flag=True, help="List servers and show usage")
def _click_main(codex_dir: str | None, verbose: bool, show_help: bool):
    """cxmcp: Codex MCP control panel."""
    config = load_config(codex_dir=codex_dir, verbose=verbose)
    setup_logging(config.verbose)
    registry = _make_registry(config)

    try:
        print_welcome(config)
        if not _is_interactive(show_help):
            display_server_list(registry.list())
            if show_help:
                _usage()
            return
        run_interactive(config, registry)
    except KeyboardInterrupt:
        console.print("\ninterrupted", style="dim")
    except Exception as e:
        console.print(f"error: {escape(str(e))}", style="bold red")
        if config.verbose:
            console.print_exception()
        sys.exit(1)


def main():
    """Entry point; one-shot subcommands are dispatched before click parses argv."""
    try:
        argv, codex_dir, verbose = _pop_global_options(sys.argv[1:])
    except click.UsageError as e:
        console.print(f"error: {escape(e.message)}", style="bold red")
        sys.exit(2)
    if argv and argv[0] in SUBCOMMANDS:
        sys.exit(_handle_subcommand(argv, codex_dir, verbose))
    _click_main()


if __name__ == "__main__":
    main()
