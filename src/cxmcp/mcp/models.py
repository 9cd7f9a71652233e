"""MCP server data models: LaunchDefinition, Entry, ProbeResult, errors."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class LaunchDefinition:
    """How to start one MCP server process."""

    command: str
    args: tuple[str, ...] = ()
    env: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        # normalise list args and empty env so equality follows content
        object.__setattr__(self, "args", tuple(str(a) for a in self.args))
        if self.env is not None:
            env = {str(k): str(v) for k, v in self.env.items()}
            object.__setattr__(self, "env", MappingProxyType(env) if env else None)

    def __hash__(self) -> int:
        env = tuple(sorted(self.env.items())) if self.env else ()
        return hash((self.command, self.args, env))

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> LaunchDefinition:
        """Build from a parsed config table; missing fields get defaults."""
        command = raw.get("command") or ""
        args = raw.get("args")
        env = raw.get("env")
        return cls(
            command=str(command),
            args=tuple(args) if isinstance(args, (list, tuple)) else (),
            env=env if isinstance(env, Mapping) else None,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"command": self.command, "args": list(self.args)}
        if self.env:
            data["env"] = dict(self.env)
        return data


@dataclass(frozen=True)
class Entry:
    """A named launch definition plus its partition membership."""

    name: str
    definition: LaunchDefinition
    enabled: bool

    @property
    def command(self) -> str:
        return self.definition.command

    @property
    def args(self) -> tuple[str, ...]:
        return self.definition.args


@dataclass(frozen=True)
class ProbeResult:
    name: str
    reachable: bool
    detail: str | None = None


# ── Errors ──────────────────────────────────────────────────────────


class RegistryError(Exception):
    """Base class for registry/store failures surfaced to the user."""


class ServerNotFoundError(RegistryError):
    def __init__(self, name: str):
        super().__init__(f"Server '{name}' not found")
        self.name = name


class DuplicateServerError(RegistryError):
    def __init__(self, name: str):
        super().__init__(f"Server '{name}' already exists")
        self.name = name


class PersistenceError(RegistryError):
    """A partition file could not be written."""

    def __init__(self, path: Path, reason: str = ""):
        msg = f"could not write {path}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.path = path
        self.reason = reason
