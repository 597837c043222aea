"""Protocol definitions for the host collaborators the engine drives.

This module has no dependencies beyond the view shapes. Any host (the
Textual host in edgebar_groups.tui.host, or a test double) satisfies these
structurally; nothing needs to inherit from them.

Collaborator contract:
- All calls are synchronous and run on the host's single event loop.
- Window state is read live on every call; the engine never caches it.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from edgebar_groups.positions import Position
from edgebar_groups.views import Edgebar, View, Window


class Editor(Protocol):
    """Window subsystem of the host editor."""

    def list_edgebar_windows(self) -> Sequence[tuple[Window, View | None]]:
        """Return every live window that belongs to any edgebar.

        Each entry pairs the window with its owning view. The view is None
        when the window can no longer be resolved to a view; callers skip
        such entries.
        """
        ...

    def dispatch_command(self, name: str) -> None:
        """Run a named editor command. May raise; callers protect the call."""
        ...


class Layout(Protocol):
    """Configured edgebar layout, read-only from the engine's perspective."""

    def edgebar(self, position: Position) -> Edgebar | None:
        """Return the edgebar docked at ``position``, or None if absent."""
        ...
