"""Rich-based output: banner, server listings, probe status."""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.markup import escape

from ..core.utils import format_command, short_cwd
from ..mcp.models import Entry, ProbeResult

console = Console()

TITLE = "MCP Server Manager"


def print_welcome(config) -> None:
    console.print()
    console.print("  🔧 cxmcp - Codex MCP Control Panel", style="bold blue")
    console.print("  Interactive MCP server management tool for Codex CLI", style="dim")
    console.print(f"  {short_cwd(config.config_path)}", style="dim")
    if config.verbose:
        console.print(f"  backup: {short_cwd(config.backup_path)}", style="dim")
        console.print(f"  probe timeout: {config.probe_timeout:.1f}s", style="dim")


def display_server_list(entries: Iterable[Entry]) -> None:
    """One-shot listing used outside a terminal (CI, pipes, --help)."""
    entries = list(entries)
    console.print()
    console.print("  MCP Servers", style="bold blue")
    console.print()

    if not entries:
        console.print("  No MCP servers configured", style="yellow")
        return

    for entry in entries:
        status = "[green]✓ Enabled[/green]" if entry.enabled else "[red]✗ Disabled[/red]"
        console.print(f"  [bold]{escape(entry.name)}[/bold] - {status}")
        console.print(f"    Command: {escape(format_command(entry.command, entry.args))}", style="dim")
    console.print()


def display_server_details(entries: Iterable[Entry], results: Iterable[ProbeResult]) -> None:
    entries = list(entries)
    by_name = {r.name: r for r in results}

    console.print()
    console.print("  📋 Detailed Server Information", style="bold blue")
    console.print()

    if not entries:
        console.print("  No MCP servers configured", style="yellow")
        return

    for entry in entries:
        console.print(f"  [bold]{escape(entry.name)}[/bold]")
        console.print(f"    Command: {escape(entry.command)}", style="dim")
        console.print(f"    Args: {escape(' '.join(entry.args))}", style="dim")
        if entry.definition.env:
            keys = ", ".join(sorted(entry.definition.env))
            console.print(f"    Env: {escape(keys)}", style="dim")
        state = "[green]enabled[/green]" if entry.enabled else "[red]disabled[/red]"
        console.print(f"    State: {state}")
        result = by_name.get(entry.name)
        if result:
            console.print(f"    Status: {format_probe(result)}")
        console.print()


def display_probe_results(results: Iterable[ProbeResult]) -> None:
    results = list(results)
    if not results:
        console.print("no MCP servers configured", style="dim")
        return
    width = max(len(r.name) for r in results)
    for r in results:
        console.print(f"  [bold]{escape(r.name):<{width}}[/bold]  {format_probe(r)}")


def format_probe(result: ProbeResult) -> str:
    if result.reachable:
        return "[green]✓ Running[/green]"
    text = "[red]✗ Not running[/red]"
    if result.detail:
        text += f" [red]({escape(result.detail)})[/red]"
    return text
