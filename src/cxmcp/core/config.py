"""Configuration: env, paths, probe timeout."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_PROBE_TIMEOUT = 6.0

CONFIG_FILENAME = "config.toml"
BACKUP_FILENAME = "cxmcp_backup.toml"


@dataclass
class Config:
    codex_dir: Path = field(default_factory=lambda: Path.home() / ".codex")
    mmcp_path: Path = field(default_factory=lambda: Path.home() / ".mmcp.json")
    probe_timeout: float = DEFAULT_PROBE_TIMEOUT
    verbose: bool = False

    @property
    def config_path(self) -> Path:
        """Active servers live in Codex's own config file."""
        return self.codex_dir / CONFIG_FILENAME

    @property
    def backup_path(self) -> Path:
        return self.codex_dir / BACKUP_FILENAME


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def load_config(
    codex_dir: str | Path | None = None,
    verbose: bool = False,
) -> Config:
    """Load config with priority: CLI args > env > .env > defaults."""
    load_dotenv()

    config = Config()

    if env_dir := os.getenv("CXMCP_CODEX_DIR"):
        config.codex_dir = Path(env_dir).expanduser()
    if env_mmcp := os.getenv("CXMCP_MMCP_PATH"):
        config.mmcp_path = Path(env_mmcp).expanduser()
    config.probe_timeout = _env_float("CXMCP_PROBE_TIMEOUT", config.probe_timeout)
    if os.getenv("DEBUG"):
        config.verbose = True

    if codex_dir:
        config.codex_dir = Path(codex_dir).expanduser()
    if verbose:
        config.verbose = True

    return config
