"""Key-driven menu and single-keypress prompts.

prompt_toolkit's Application switches the terminal to raw mode for the
duration of ``run()`` and restores it on every exit path, exceptions
included, so none of the helpers here touch terminal modes directly.

Menu keys:
  Up/Down/k/j    move the cursor
  Enter/Space    select the current item
  q/Escape/C-c   cancel
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from prompt_toolkit import Application
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import FormattedTextControl, HSplit, Layout, Window

AFFIRMATIVE = ("y", "yes")

# status -> (glyph, style)
STATUS_GLYPHS: dict[str, tuple[str, str]] = {
    "enabled": ("✓", "fg:ansigreen"),
    "disabled": ("✗", "fg:ansired"),
    "running": ("●", "fg:ansigreen"),
    "stopped": ("○", "fg:ansired"),
    "error": ("!", "fg:ansired"),
}


@dataclass(frozen=True)
class MenuItem:
    label: str
    value: str
    status: str | None = None


class Selector:
    """Single-choice menu; ``show()`` returns the chosen value or None."""

    def __init__(self, title: str, items: Sequence[MenuItem], cursor: int = 0):
        self.title = title
        self.items = list(items)
        self.cursor = max(0, min(cursor, len(self.items) - 1))
        self.result: str | None = None

    @property
    def current(self) -> MenuItem:
        if not self.items:
            raise IndexError("selector has no items")
        return self.items[self.cursor]

    def move(self, delta: int) -> None:
        if self.items:
            self.cursor = max(0, min(len(self.items) - 1, self.cursor + delta))

    def render(self) -> FormattedText:
        parts: list[tuple[str, str]] = [("bold fg:ansiblue", f"\n  {self.title}\n\n")]
        if not self.items:
            parts.append(("fg:ansiyellow", "  No MCP servers found\n"))
        for i, item in enumerate(self.items):
            selected = i == self.cursor
            parts.append(("fg:ansigreen", "▶ ") if selected else ("", "  "))
            parts.append(("reverse" if selected else "", item.label))
            if item.status in STATUS_GLYPHS:
                glyph, style = STATUS_GLYPHS[item.status]
                parts.append((style, f" {glyph}"))
            parts.append(("", "\n"))
        parts.append(("fg:ansigray", "\n  ↑/↓: Navigate  ENTER/SPACE: Select  Q: Quit\n"))
        return FormattedText(parts)

    def _key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("up")
        @kb.add("k")
        def _up(event):
            self.move(-1)

        @kb.add("down")
        @kb.add("j")
        def _down(event):
            self.move(1)

        @kb.add("enter")
        @kb.add(" ")
        def _select(event):
            if self.items:
                self.result = self.current.value
                event.app.exit()

        @kb.add("q")
        @kb.add("Q")
        @kb.add("escape", eager=True)
        @kb.add("c-c")
        def _cancel(event):
            self.result = None
            event.app.exit()

        return kb

    def show(self) -> str | None:
        self.result = None
        layout = Layout(HSplit([Window(FormattedTextControl(self.render))]))
        app: Application = Application(
            layout=layout, key_bindings=self._key_bindings(), full_screen=False
        )
        try:
            app.run()
        except (KeyboardInterrupt, EOFError):
            return None
        return self.result


def _read_key(prompt: FormattedText) -> str | None:
    """Show *prompt* and return the data of the next keypress."""
    pressed: list[str | None] = [None]
    kb = KeyBindings()

    @kb.add("<any>")
    def _key(event):
        pressed[0] = event.data
        event.app.exit()

    layout = Layout(HSplit([Window(FormattedTextControl(prompt), dont_extend_height=True)]))
    app: Application = Application(layout=layout, key_bindings=kb, full_screen=False)
    try:
        app.run()
    except (KeyboardInterrupt, EOFError):
        return None
    return pressed[0]


def confirm(message: str) -> bool:
    """Ask a y/N question; anything but an explicit yes is a no."""
    key = _read_key(
        FormattedText(
            [("fg:ansiyellow", "\n? "), ("", f"{message} "), ("fg:ansigray", "(y/N) ")]
        )
    )
    return (key or "").strip().lower() in AFFIRMATIVE


def wait_for_key(message: str = "Press any key to continue...") -> None:
    _read_key(FormattedText([("fg:ansigray", f"  {message}")]))
