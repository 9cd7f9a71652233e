"""MCP: server partitions, enable/disable registry, launch probes."""

from .models import (
    DuplicateServerError,
    Entry,
    LaunchDefinition,
    PersistenceError,
    ProbeResult,
    RegistryError,
    ServerNotFoundError,
)
from .prober import probe, probe_all
from .registry import ServerRegistry
from .store import ServerStore, read_toml_file, write_toml_file

__all__ = [
    "DuplicateServerError",
    "Entry",
    "LaunchDefinition",
    "PersistenceError",
    "ProbeResult",
    "RegistryError",
    "ServerNotFoundError",
    "ServerRegistry",
    "ServerStore",
    "probe",
    "probe_all",
    "read_toml_file",
    "write_toml_file",
]
