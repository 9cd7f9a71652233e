"""Interactive control loop: probe, show the menu, apply the choice, repeat."""

from __future__ import annotations

import time
from collections.abc import Sequence

from rich.markup import escape

from ..mcp.models import Entry, ProbeResult, ServerNotFoundError
from ..mcp.prober import probe_all
from ..mcp.registry import ServerRegistry
from .renderer import TITLE, console, display_server_details
from .selector import MenuItem, Selector, confirm, wait_for_key

TOGGLE_PREFIX = "toggle:"
MESSAGE_PAUSE = 1.5


def build_menu(entries: Sequence[Entry], results: Sequence[ProbeResult]) -> list[MenuItem]:
    by_name = {r.name: r for r in results}
    items = [
        MenuItem("📋 List all servers", "list"),
        MenuItem("🔄 Refresh status", "refresh"),
    ]
    for entry in entries:
        result = by_name.get(entry.name)
        if result is not None:
            status = "running" if result.reachable else "error"
        else:
            status = "enabled" if entry.enabled else "disabled"
        mark = "✓" if entry.enabled else "✗"
        items.append(MenuItem(f"{mark} {entry.name}", f"{TOGGLE_PREFIX}{entry.name}", status))
    items.append(MenuItem("❌ Quit", "quit"))
    return items


def run_interactive(config, registry: ServerRegistry, pause: float = MESSAGE_PAUSE) -> None:
    cursor = 0

    while True:
        entries = registry.list()
        with console.status("checking servers...", spinner="dots"):
            results = probe_all(entries, config.probe_timeout)

        console.clear()
        selector = Selector(TITLE, build_menu(entries, results), cursor)
        choice = selector.show()
        cursor = selector.cursor

        if choice is None or choice == "quit":
            break

        try:
            handle_choice(registry, choice, entries, results, pause=pause)
        except KeyboardInterrupt:
            console.print("\n  interrupted", style="dim")
        except Exception as e:
            console.print(f"\n  ✗ Error: {escape(str(e))}", style="red")
            if config.verbose:
                console.print_exception()
            time.sleep(pause)

    console.print("\n  👋 Goodbye!\n", style="green")


def handle_choice(
    registry: ServerRegistry,
    choice: str,
    entries: Sequence[Entry],
    results: Sequence[ProbeResult],
    pause: float = MESSAGE_PAUSE,
) -> None:
    if choice == "list":
        console.clear()
        display_server_details(entries, results)
        wait_for_key()
    elif choice == "refresh":
        console.print("\n  🔄 Refreshing server status...", style="yellow")
    elif choice.startswith(TOGGLE_PREFIX):
        toggle_server(registry, choice[len(TOGGLE_PREFIX) :])
        time.sleep(pause)


def toggle_server(registry: ServerRegistry, name: str) -> bool | None:
    """Confirm, then toggle *name*. Returns the new state, or None if nothing changed."""
    try:
        entry = registry.get(name)
    except ServerNotFoundError:
        console.print(f"\n  ✗ Server '{escape(name)}' not found", style="red")
        return None

    action = "Disable" if entry.enabled else "Enable"
    if not confirm(f"{action} server '{name}'?"):
        console.print("\n  Operation cancelled", style="dim")
        return None

    new_state = registry.toggle(name)
    label = "enabled" if new_state else "disabled"
    console.print(f"\n  ✓ Server '{escape(name)}' {label}", style="green")
    return new_state
