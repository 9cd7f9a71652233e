"""Built-in launch definitions for commonly used MCP servers."""

from __future__ import annotations

from dataclasses import dataclass

from .models import LaunchDefinition


@dataclass(frozen=True)
class Preset:
    name: str
    display_name: str
    command: str
    args: tuple[str, ...]
    description: str

    @property
    def definition(self) -> LaunchDefinition:
        return LaunchDefinition(self.command, self.args)


PRESETS: tuple[Preset, ...] = (
    Preset("context7", "Context7 MCP", "npx", ("context7-mcp",), "Official library documentation lookup"),
    Preset(
        "sequential-thinking",
        "Sequential Thinking MCP",
        "npx",
        ("sequential-thinking-mcp",),
        "Multi-step reasoning and analysis",
    ),
    Preset("arxiv", "ArXiv MCP", "npx", ("arxiv-mcp-server",), "Search and download academic papers"),
    Preset("playwright", "Playwright MCP", "npx", ("playwright-mcp",), "Browser automation and testing"),
    Preset("serena", "Serena MCP", "npx", ("serena-mcp",), "Semantic code understanding"),
    Preset("youtube", "YouTube MCP", "npx", ("youtube-mcp",), "YouTube content access"),
    Preset("notion", "Notion MCP", "npx", ("notion-mcp",), "Notion workspace integration"),
    Preset("chrome-tabs", "Chrome Tabs MCP", "npx", ("chrome-tabs-mcp",), "Browser tab access and control"),
)


def get_preset(name: str) -> Preset:
    for preset in PRESETS:
        if preset.name == name:
            return preset
    raise KeyError(name)
