"""Partition files: active servers in config.toml, disabled ones in the backup file."""

from __future__ import annotations

import contextlib
import logging
import os
import tomllib
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomli_w

from .models import LaunchDefinition, PersistenceError

if TYPE_CHECKING:
    from cxmcp.core.config import Config

log = logging.getLogger(__name__)

ACTIVE_KEY = "mcp_servers"
DISABLED_KEY = "disabled_servers"


def read_toml_file(path: Path, strict: bool = False) -> dict[str, Any]:
    """Parse *path*; a missing or unreadable file is an empty document.

    With *strict*, an existing file that cannot be parsed raises
    PersistenceError instead, so a rewrite never drops its contents.
    """
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, OSError, UnicodeDecodeError) as e:
        if strict:
            raise PersistenceError(path, f"existing file is unreadable ({e})") from e
        log.debug("ignoring unreadable %s: %s", path, e)
        return {}


def write_toml_file(path: Path, data: dict[str, Any]) -> None:
    """Replace *path* with *data*, raising PersistenceError on I/O failure."""
    tmp = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(tomli_w.dumps(data), encoding="utf-8")
        os.replace(tmp, path)
    except OSError as e:
        with contextlib.suppress(OSError):
            tmp.unlink()
        raise PersistenceError(path, e.strerror or str(e)) from e


def servers_from_table(table: Any) -> dict[str, LaunchDefinition]:
    if not isinstance(table, dict):
        return {}
    servers: dict[str, LaunchDefinition] = {}
    for name, raw in table.items():
        if isinstance(raw, dict):
            servers[name] = LaunchDefinition.from_dict(raw)
        else:
            log.debug("skipping malformed server entry %r", name)
    return servers


def servers_to_table(servers: dict[str, LaunchDefinition]) -> dict[str, dict]:
    return {name: definition.to_dict() for name, definition in servers.items()}


class ServerStore:
    """Load and save the two server partitions.

    Loads fail soft (absent or corrupt files read as empty); saves replace
    the whole file and propagate errors. Saving the active partition refuses
    to overwrite a config.toml it cannot parse.
    """

    def __init__(self, config_path: Path, backup_path: Path):
        self.config_path = config_path
        self.backup_path = backup_path

    @classmethod
    def from_config(cls, config: Config) -> ServerStore:
        return cls(config.config_path, config.backup_path)

    def load_active(self) -> dict[str, LaunchDefinition]:
        return servers_from_table(read_toml_file(self.config_path).get(ACTIVE_KEY))

    def save_active(self, servers: dict[str, LaunchDefinition]) -> None:
        # config.toml belongs to Codex; keep every other table it holds
        data = read_toml_file(self.config_path, strict=True)
        data[ACTIVE_KEY] = servers_to_table(servers)
        write_toml_file(self.config_path, data)

    def load_disabled(self) -> dict[str, LaunchDefinition]:
        return servers_from_table(read_toml_file(self.backup_path).get(DISABLED_KEY))

    def save_disabled(self, servers: dict[str, LaunchDefinition]) -> None:
        write_toml_file(self.backup_path, {DISABLED_KEY: servers_to_table(servers)})
