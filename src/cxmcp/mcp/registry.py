"""ServerRegistry: enable/disable state machine over the two partitions."""

from __future__ import annotations

import logging

from .models import DuplicateServerError, Entry, LaunchDefinition, ServerNotFoundError
from .store import ServerStore

log = logging.getLogger(__name__)


class ServerRegistry:
    """Merged view of the active and disabled partitions.

    Every operation reloads both files first and persists before returning,
    so nothing is cached between calls.

    Moving an entry writes the destination file before the source file. The
    pair is not transactional: if the second write fails the entry is left
    in both files (listed once, as active) and the error propagates. The next
    toggle/enable/disable of that name removes the stale copy.
    """

    def __init__(self, store: ServerStore):
        self.store = store

    def list(self) -> list[Entry]:
        active = self.store.load_active()
        disabled = self.store.load_disabled()
        entries = [Entry(name, d, True) for name, d in active.items()]
        entries += [Entry(name, d, False) for name, d in disabled.items() if name not in active]
        return entries

    def get(self, name: str) -> Entry:
        for entry in self.list():
            if entry.name == name:
                return entry
        raise ServerNotFoundError(name)

    def add(self, name: str, definition: LaunchDefinition) -> None:
        if not name:
            raise ValueError("server name must not be empty")
        active = self.store.load_active()
        disabled = self.store.load_disabled()
        if name in active or name in disabled:
            raise DuplicateServerError(name)
        active[name] = definition
        self.store.save_active(active)
        log.debug("added %s", name)

    def toggle(self, name: str) -> bool:
        """Move *name* to the other partition; return its new enabled state."""
        active = self.store.load_active()
        disabled = self.store.load_disabled()

        if name in active:
            disabled[name] = active.pop(name)
            self.store.save_disabled(disabled)
            self.store.save_active(active)
            log.debug("disabled %s", name)
            return False

        if name in disabled:
            active[name] = disabled.pop(name)
            self.store.save_active(active)
            self.store.save_disabled(disabled)
            log.debug("enabled %s", name)
            return True

        raise ServerNotFoundError(name)

    def enable(self, name: str) -> None:
        active = self.store.load_active()
        disabled = self.store.load_disabled()
        if name in active:
            if name in disabled:
                del disabled[name]
                self.store.save_disabled(disabled)
            return
        if name not in disabled:
            raise ServerNotFoundError(name)
        self.toggle(name)

    def disable(self, name: str) -> None:
        active = self.store.load_active()
        disabled = self.store.load_disabled()
        if name in active:
            self.toggle(name)
            return
        if name not in disabled:
            raise ServerNotFoundError(name)
