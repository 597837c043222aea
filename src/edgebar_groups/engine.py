"""Reconciliation engine: turns the open panel set at a position into a group.

Data flow: key dispatch -> registry lookup -> reconciliation -> view filter,
open probe, panel activator. Window state is read live from the host on
every call and never cached here.

Each position is reconciled independently. Reconciliations triggered by one
key are deferred onto the host's event loop, one task per matched group, so
each one observes the host state left by the tasks that ran before it.

// [LAW:single-enforcer] open_group_index is the sole diff-and-apply step.
// [LAW:dataflow-not-control-flow] Toggle is decided by the dispatch task
// when it runs, not inside the reconciliation.
"""

from __future__ import annotations

import functools
import logging
from collections import deque
from collections.abc import Callable, Iterable

from edgebar_groups.activation import activate, protected_call
from edgebar_groups.groups import Group, GroupRegistry, IndexedGroup
from edgebar_groups.positions import Position
from edgebar_groups.protocols import Editor, Layout
from edgebar_groups.views import View, Window, filter_by_titles, is_view_open

logger = logging.getLogger(__name__)

Scheduler = Callable[[Callable[[], object]], object]
Reveal = Callable[[Position, Iterable[str]], object]


class DeferredQueue:
    """Single-threaded task queue standing in for a host event loop.

    submit() enqueues; run_pending() runs the tasks queued before the call.
    Tasks submitted while running wait for the next run_pending() turn.
    """

    def __init__(self) -> None:
        self._tasks: deque[Callable[[], object]] = deque()

    def __call__(self, callback: Callable[[], object]) -> None:
        self.submit(callback)

    def submit(self, callback: Callable[[], object]) -> None:
        self._tasks.append(callback)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def run_pending(self) -> int:
        """Run one turn of queued tasks. Returns how many ran."""
        count = len(self._tasks)
        for _ in range(count):
            task = self._tasks.popleft()
            # A failing task is dropped; the rest of the turn still runs.
            protected_call(task, context="deferred task")
        return count


class EdgebarGroups:
    """Group selection and reconciliation over a host's edgebars.

    Hosts that collapse hidden pinned windows can pass ``is_shown`` (a
    hidden window then does not count when toggling) and ``reveal`` (called
    with a group's titles after it is reconciled, to expand them again).
    """

    def __init__(
        self,
        registry: GroupRegistry,
        editor: Editor,
        layout: Layout,
        *,
        toggle: bool = True,
        schedule: Scheduler | None = None,
        pick_function: Callable[[str], object] | None = None,
        is_shown: Callable[[Window], bool] | None = None,
        reveal: Reveal | None = None,
    ) -> None:
        self.registry = registry
        self.editor = editor
        self.layout = layout
        self.toggle = toggle
        self.pick_function = pick_function
        self.is_shown = is_shown
        self.reveal = reveal
        self.deferred: DeferredQueue | None = None
        if schedule is None:
            self.deferred = DeferredQueue()
            schedule = self.deferred.submit
        self._schedule = schedule

    # -- Probes --------------------------------------------------------------

    def _views_at(self, position: Position) -> list[View]:
        edgebar = self.layout.edgebar(position)
        return list(edgebar.views) if edgebar is not None else []

    def is_one_window_open(self, position: Position, titles: Iterable[str]) -> bool:
        """True iff any view with a requested title has a valid window."""
        return any(is_view_open(view) for view in filter_by_titles(self._views_at(position), titles))

    def current_titles(self, position: Position, *, shown_only: bool = False) -> list[str]:
        """Distinct titles of views with a live window at ``position``.

        Order follows the host's window enumeration. With ``shown_only``,
        windows the host reports as hidden are left out.
        """
        titles: dict[str, None] = {}
        for win, view in self.editor.list_edgebar_windows():
            # Windows that lost their view or died since enumeration are skipped.
            if view is None or view.position != position or not win.is_valid():
                continue
            if shown_only and self.is_shown is not None and not self.is_shown(win):
                continue
            titles.setdefault(view.title, None)
        return list(titles)

    def is_group_shown(self, position: Position, group: Group) -> bool:
        """True when part of ``group`` is shown and nothing outside it is."""
        wanted = set(group.titles)
        current = set(self.current_titles(position, shown_only=True))
        return bool(current & wanted) and current <= wanted

    # -- Close / open by titles ----------------------------------------------

    def close_views_by_titles(self, position: Position, titles: Iterable[str]) -> None:
        """Close every valid window of the requested views; pinned ones are hidden."""
        edgebar = self.layout.edgebar(position)
        if edgebar is None:
            return
        for view in filter_by_titles(edgebar.views, titles):
            for win in list(view.windows):
                # Re-checked right before acting; the window may be gone already.
                if not win.is_valid():
                    continue
                if win.is_pinned():
                    logger.debug("hide pinned %r at %s", view.title, position.value)
                    win.hide()
                else:
                    logger.debug("close %r at %s", view.title, position.value)
                    win.close()

    def open_views_by_titles(self, position: Position, titles: Iterable[str]) -> None:
        """Open the requested views that are not open yet. Never closes anything."""
        edgebar = self.layout.edgebar(position)
        if edgebar is None:
            return
        for view in filter_by_titles(edgebar.views, titles):
            if is_view_open(view):
                continue
            logger.debug("open %r at %s", view.title, position.value)
            activate(view, self.editor)

    # -- Reconciliation ------------------------------------------------------

    def open_group_index(self, position: Position, index: int, toggle: bool | None = None) -> bool:
        """Make the group at ``index`` the open panel set at ``position``.

        Closes every view open at the position whose title is outside the
        group, then opens the group's views that are not open yet. Views
        already open and in the group are left untouched.

        ``toggle`` is accepted for call-site symmetry and does not change
        what this method does; open_groups_by_key applies it before calling.

        Returns False (and does nothing) when the position or index has no
        group.
        """
        indexed = self.registry.at(position)
        group = indexed.get(index) if indexed is not None else None
        if group is None:
            logger.debug("no group %d at %s", index, position.value)
            return False

        wanted = set(group.titles)
        close_titles = [title for title in self.current_titles(position) if title not in wanted]
        logger.debug(
            "reconcile %s -> group %d: close=%s open=%s",
            position.value,
            index,
            close_titles,
            list(group.titles),
        )
        self.close_views_by_titles(position, close_titles)
        self.open_views_by_titles(position, group.titles)
        if self.reveal is not None:
            self.reveal(position, group.titles)
        indexed.select(index)
        return True

    def open_group_offset(self, position: Position, offset: int) -> bool:
        """Open the group ``offset`` steps from the selection (wrapping)."""
        indexed = self.registry.at(position)
        if indexed is None:
            return False
        return self.open_group_index(position, indexed.offset_index(offset))

    # -- Key dispatch --------------------------------------------------------

    def get_groups_by_key(self, key: str, position: Position | None = None) -> list[IndexedGroup]:
        return self.registry.get_groups_by_key(key, position)

    def open_groups_by_key(
        self,
        key: str,
        position: Position | None = None,
        toggle: bool | None = None,
    ) -> list[IndexedGroup]:
        """Schedule reconciliation for every group picked by ``key``.

        Returns the matched groups immediately; the reconciliations run on
        later turns of the host loop.
        """
        effective_toggle = self.toggle if toggle is None else toggle
        matches = self.get_groups_by_key(key, position)
        for match in matches:
            self._schedule(functools.partial(self._open_or_toggle, match, effective_toggle))
        if not matches:
            logger.debug("no group for pick key %r", key)
        return matches

    def _open_or_toggle(self, match: IndexedGroup, toggle: bool) -> None:
        if toggle and self.is_group_shown(match.position, match.group):
            logger.debug("toggle off group %d at %s", match.index, match.position.value)
            self.close_views_by_titles(match.position, match.group.titles)
            self.registry.at(match.position).select(match.index)
            return
        self.open_group_index(match.position, match.index, toggle)

    def pick(self, key: str) -> None:
        """Handle a picked key: the configured pick function, else key dispatch."""
        if self.pick_function is not None:
            protected_call(self.pick_function, key, context=f"pick {key!r}")
            return
        self.open_groups_by_key(key)

    def selected(self, position: Position) -> Group | None:
        return self.registry.selected(position)
