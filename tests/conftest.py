"""Pytest configuration and shared doubles for edgebar-groups tests.

FakeHost stands in for the host editor: it owns views and windows, records
every close/hide/open in ``events`` and implements both the Editor and the
Layout collaborator.
"""

import pytest

from edgebar_groups.engine import EdgebarGroups
from edgebar_groups.groups import Group, GroupRegistry
from edgebar_groups.positions import Position
from edgebar_groups.views import OpenCallable, OpenCommand


class FakeWindow:
    def __init__(self, view, *, pinned=False):
        self.view = view
        self.pinned = pinned
        self.hidden = False
        self.valid = True

    def __repr__(self):
        return f"FakeWindow({self.view.title!r}, valid={self.valid}, hidden={self.hidden})"

    def is_valid(self):
        return self.valid

    def is_pinned(self):
        return self.pinned

    def hide(self):
        # Hidden pinned windows stay valid.
        self.hidden = True
        self.view.host.events.append(("hide", self.view.title))

    def close(self):
        self.valid = False
        self.view.host.events.append(("close", self.view.title))


class FakeView:
    def __init__(self, host, title, position, *, pinned=False, command=None):
        self.host = host
        self.title = title
        self.position = position
        self.pinned = pinned
        self.windows = []
        self.open_calls = 0
        self.open_action = OpenCommand(command) if command else OpenCallable(self.materialize)

    def __repr__(self):
        return f"FakeView({self.title!r})"

    def materialize(self):
        self.open_calls += 1
        self.host.events.append(("open", self.title))
        win = FakeWindow(self, pinned=self.pinned)
        self.windows.append(win)
        return win


class FakeEdgebar:
    def __init__(self, position):
        self.position = position
        self.views = []


class FakeHost:
    """Editor + Layout double over plain Python objects."""

    def __init__(self):
        self.edgebars = {}
        self.events = []
        self.commands = {}
        self.dispatched = []

    def add_view(self, title, position=Position.LEFT, *, pinned=False, command=None, is_open=False):
        edgebar = self.edgebars.setdefault(position, FakeEdgebar(position))
        view = FakeView(self, title, position, pinned=pinned, command=command)
        edgebar.views.append(view)
        if is_open:
            view.windows.append(FakeWindow(view, pinned=pinned))
        return view

    def view(self, title, position=Position.LEFT):
        return next(v for v in self.edgebars[position].views if v.title == title)

    def open_titles(self, position=Position.LEFT):
        edgebar = self.edgebars.get(position)
        if edgebar is None:
            return set()
        return {v.title for v in edgebar.views if any(w.is_valid() for w in v.windows)}

    # Layout
    def edgebar(self, position):
        return self.edgebars.get(position)

    # Editor
    def list_edgebar_windows(self):
        return [
            (win, view)
            for edgebar in self.edgebars.values()
            for view in edgebar.views
            for win in view.windows
            if win.is_valid()
        ]

    def dispatch_command(self, name):
        self.dispatched.append(name)
        self.commands[name]()


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def make_engine(host):
    """Factory fixture: engine over ``host`` with groups given per position."""

    def _factory(groups_by_pos, **kwargs) -> EdgebarGroups:
        registry = GroupRegistry(
            {pos: [Group(**g) if isinstance(g, dict) else g for g in groups] for pos, groups in groups_by_pos.items()}
        )
        return EdgebarGroups(registry, host, host, **kwargs)

    return _factory


@pytest.fixture
def left_engine(host, make_engine):
    """Scenario layout: Explorer open at left; groups [Explorer], [Outline, Tags]."""
    host.add_view("Explorer", is_open=True)
    host.add_view("Outline")
    host.add_view("Tags")
    return make_engine(
        {
            Position.LEFT: [
                {"titles": ["Explorer"], "pick_key": "a"},
                {"titles": ["Outline", "Tags"], "pick_key": "b"},
            ]
        }
    )
