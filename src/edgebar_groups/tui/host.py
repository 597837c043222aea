"""Textual host: edgebars as docked containers inside a running App.

Implements both host collaborators (Editor and Layout) over Textual widgets:

- EdgebarDock: one container per position, docked to that edge.
- PanelView: a named panel at one position with its open action.
- PanelWindow: one mounted widget realizing a view.

Pinned panels are never removed on close; hide() collapses them to their
title line and the window stays valid. reveal() expands them again when
their group is reconciled, and is_window_shown() keeps collapsed windows
out of the toggle check.

// [LAW:locality-or-seam] All Textual widget plumbing for edgebars lives here;
// the engine only sees the Editor/Layout protocols.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass

from textual.app import App
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.widgets import Static

from edgebar_groups.config import PanelOptions
from edgebar_groups.groups import GroupRegistry
from edgebar_groups.positions import POSITIONS, Position
from edgebar_groups.views import OpenAction, as_open_action, filter_by_titles

logger = logging.getLogger(__name__)


class UnknownCommandError(KeyError):
    """A command-string open action names no registered command."""


@dataclass(frozen=True)
class PanelSpec:
    """Specification for one panel the host can open."""

    title: str
    position: Position
    pinned: bool = False
    command: str | None = None  # open via this command instead of mounting directly


def dock_id(position: Position) -> str:
    return f"edgebar-{position.value}"


class EdgebarDock(Vertical):
    """Container docked to one screen edge; hidden while it holds nothing."""

    DEFAULT_CSS = """
    EdgebarDock {
        display: none;
    }
    EdgebarDock.-left {
        dock: left;
        width: 30;
        height: 1fr;
        border-right: solid $accent;
    }
    EdgebarDock.-right {
        dock: right;
        width: 30;
        height: 1fr;
        border-left: solid $accent;
    }
    EdgebarDock.-top {
        dock: top;
        height: 8;
        layout: horizontal;
        border-bottom: solid $accent;
    }
    EdgebarDock.-bottom {
        dock: bottom;
        height: 8;
        layout: horizontal;
        border-top: solid $accent;
    }
    """

    def __init__(self, position: Position) -> None:
        super().__init__(id=dock_id(position), classes=f"-{position.value}")
        self.position = position


class PanelWidget(Static):
    """Placeholder body of a panel window, titled with its view title."""

    DEFAULT_CSS = """
    PanelWidget {
        height: 1fr;
        width: 1fr;
        border: round $panel-lighten-2;
        padding: 0 1;
    }
    PanelWidget.-collapsed {
        height: 3;
        color: $text-muted;
    }
    """

    def __init__(self, window: PanelWindow) -> None:
        super().__init__(window.view.title)
        self.border_title = window.view.title
        self._window = window

    def on_unmount(self) -> None:
        self._window.mark_closed()

    def on_click(self) -> None:
        # A collapsed pinned panel expands again when clicked.
        if self._window.hidden:
            self._window.show()


class PanelWindow:
    """A live instance of a PanelView."""

    def __init__(self, view: PanelView) -> None:
        self.view = view
        self.hidden = False
        self._closed = False
        self.widget = PanelWidget(self)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "hidden" if self.hidden else "open"
        return f"PanelWindow({self.view.title!r}, {state})"

    def is_valid(self) -> bool:
        return not self._closed

    def is_pinned(self) -> bool:
        return self.view.pinned

    def hide(self) -> None:
        self.hidden = True
        self.widget.add_class("-collapsed")

    def show(self) -> None:
        self.hidden = False
        self.widget.remove_class("-collapsed")

    def close(self) -> None:
        if self._closed:
            return
        self.mark_closed()
        self.widget.remove()

    def mark_closed(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.view.forget(self)


class PanelView:
    """A named panel at one edgebar."""

    def __init__(self, spec: PanelSpec, open_action: OpenAction) -> None:
        self.title = spec.title
        self.position = spec.position
        self.pinned = spec.pinned
        self.open_action = open_action
        self._windows: list[PanelWindow] = []

    def __repr__(self) -> str:
        return f"PanelView({self.title!r}, {self.position.value})"

    @property
    def windows(self) -> list[PanelWindow]:
        return list(self._windows)

    def attach(self, window: PanelWindow) -> None:
        self._windows.append(window)

    def forget(self, window: PanelWindow) -> None:
        if window in self._windows:
            self._windows.remove(window)


@dataclass
class HostEdgebar:
    """The views configured at one position."""

    position: Position
    views: list[PanelView]


class TextualHost:
    """Editor + Layout collaborator over a Textual App's edgebar docks."""

    def __init__(self, app: App, specs: Iterable[PanelSpec]) -> None:
        self._app = app
        self._commands: dict[str, Callable[[], object]] = {}
        self._edgebars: dict[Position, HostEdgebar] = {}
        for spec in specs:
            action = as_open_action(
                spec.command or functools.partial(self.open_panel, spec.title, spec.position)
            )
            edgebar = self._edgebars.setdefault(spec.position, HostEdgebar(spec.position, []))
            edgebar.views.append(PanelView(spec, action))

    # -- Layout --------------------------------------------------------------

    def edgebar(self, position: Position) -> HostEdgebar | None:
        return self._edgebars.get(position)

    def find_view(self, title: str, position: Position) -> PanelView | None:
        edgebar = self._edgebars.get(position)
        if edgebar is None:
            return None
        return next((v for v in edgebar.views if v.title == title), None)

    # -- Editor --------------------------------------------------------------

    def list_edgebar_windows(self) -> list[tuple[PanelWindow, PanelView]]:
        return [
            (win, view)
            for pos in POSITIONS
            if pos in self._edgebars
            for view in self._edgebars[pos].views
            for win in view.windows
            if win.is_valid()
        ]

    def register_command(self, name: str, fn: Callable[[], object]) -> None:
        self._commands[name] = fn

    def dispatch_command(self, name: str) -> None:
        fn = self._commands.get(name)
        if fn is None:
            raise UnknownCommandError(name)
        fn()

    # -- Materializing panels ------------------------------------------------

    def open_panel(self, title: str, position: Position) -> PanelWindow:
        """Mount a new window for the view ``title`` at ``position``."""
        view = self.find_view(title, position)
        if view is None:
            raise LookupError(f"no panel {title!r} at {position.value}")
        dock = self._app.query_one(f"#{dock_id(position)}", EdgebarDock)
        window = PanelWindow(view)
        view.attach(window)
        dock.mount(window.widget)
        dock.display = True
        return window

    # -- Collapsed pinned panels ---------------------------------------------

    @staticmethod
    def is_window_shown(window: PanelWindow) -> bool:
        return not window.hidden

    def reveal(self, position: Position, titles: Iterable[str]) -> None:
        """Expand collapsed windows of the views named by ``titles``."""
        edgebar = self._edgebars.get(position)
        if edgebar is None:
            return
        for view in filter_by_titles(edgebar.views, titles):
            for win in view.windows:
                if win.hidden:
                    logger.debug("expand %r at %s", view.title, position.value)
                    win.show()

    def sync_docks(self) -> None:
        """Show docks holding a live window; hide the rest."""
        live = {view.position for _, view in self.list_edgebar_windows()}
        for pos in POSITIONS:
            try:
                dock = self._app.query_one(f"#{dock_id(pos)}", EdgebarDock)
            except NoMatches:
                continue
            dock.display = pos in live


def specs_for_registry(
    registry: GroupRegistry,
    panels: Mapping[str, PanelOptions] | None = None,
) -> list[PanelSpec]:
    """One PanelSpec per distinct (position, title) named by any group."""
    panels = panels or {}
    specs: dict[tuple[Position, str], PanelSpec] = {}
    for pos, indexed in registry:
        for group in indexed.groups:
            for title in group.titles:
                opts = panels.get(title, PanelOptions())
                specs.setdefault(
                    (pos, title),
                    PanelSpec(title=title, position=pos, pinned=opts.pinned, command=opts.command),
                )
    return list(specs.values())
