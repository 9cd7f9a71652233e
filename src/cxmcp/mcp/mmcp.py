"""Export/import between the Codex partitions and mmcp's ~/.mmcp.json."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from .models import LaunchDefinition, PersistenceError
from .registry import ServerRegistry

log = logging.getLogger(__name__)


@dataclass
class TransferReport:
    path: Path
    added: list[str] = field(default_factory=list)
    updated: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def read_mmcp_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError) as e:
        log.debug("ignoring unreadable %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def write_mmcp_file(path: Path, data: dict) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2) + "\n")
    except OSError as e:
        raise PersistenceError(path, e.strerror or str(e)) from e


def export_to_mmcp(registry: ServerRegistry, path: Path) -> TransferReport:
    """Merge the active servers into mmcp's server table.

    Other keys of the mmcp file (``agents``...) are kept as they are.
    """
    report = TransferReport(path)
    active = registry.store.load_active()
    if not active:
        return report

    data = read_mmcp_file(path)
    servers = data.get("mcpServers")
    if not isinstance(servers, dict):
        servers = {}

    for name, definition in active.items():
        (report.updated if name in servers else report.added).append(name)
        servers[name] = definition.to_dict()

    data["mcpServers"] = servers
    write_mmcp_file(path, data)
    return report


def import_from_mmcp(registry: ServerRegistry, path: Path) -> TransferReport:
    """Add mmcp servers that Codex does not know yet; existing names are skipped."""
    report = TransferReport(path)
    servers = read_mmcp_file(path).get("mcpServers")
    if not isinstance(servers, dict):
        return report

    known = {entry.name for entry in registry.list()}
    for name, raw in servers.items():
        if not name or name in known or not isinstance(raw, dict) or not raw.get("command"):
            report.skipped.append(name)
            continue
        registry.add(name, LaunchDefinition.from_dict(raw))
        report.added.append(name)
    return report
