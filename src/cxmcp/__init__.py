"""cxmcp: control panel for the MCP servers configured in Codex CLI."""

__version__ = "0.1.0"
