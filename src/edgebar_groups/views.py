"""Panel views as the reconciliation engine sees them.

The host owns views and windows; this module only describes the shape the
engine reads and provides the two pure helpers built on that shape: the
title filter and the "already open" probe.

// [LAW:one-type-per-behavior] An open action is a tagged variant
// (OpenCallable | OpenCommand), never a runtime type sniff at call sites.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol, Union

from edgebar_groups.positions import Position


@dataclass(frozen=True)
class OpenCallable:
    """Open a panel by calling a function that materializes it."""

    fn: Callable[[], object]


@dataclass(frozen=True)
class OpenCommand:
    """Open a panel by dispatching a named editor command."""

    name: str


OpenAction = Union[OpenCallable, OpenCommand]


def as_open_action(raw) -> OpenAction | None:
    """Convert a raw callable or command name into an OpenAction.

    Already-tagged actions pass through. Anything else (including None and
    blank strings) means the view has no way to open itself.
    """
    if isinstance(raw, (OpenCallable, OpenCommand)):
        return raw
    if callable(raw):
        return OpenCallable(raw)
    if isinstance(raw, str) and raw.strip():
        return OpenCommand(raw.strip())
    return None


class Window(Protocol):
    """A live on-screen instance of a view."""

    def is_valid(self) -> bool: ...

    def is_pinned(self) -> bool: ...

    def hide(self) -> None: ...

    def close(self) -> None: ...


class View(Protocol):
    """A named panel descriptor at one edgebar."""

    title: str
    position: Position

    @property
    def windows(self) -> Sequence[Window]: ...

    @property
    def open_action(self) -> OpenAction | None: ...


class Edgebar(Protocol):
    """The views currently configured at one position."""

    position: Position

    @property
    def views(self) -> Sequence[View]: ...


def filter_by_titles(views: Iterable[View], titles: Iterable[str]) -> list[View]:
    """Select views whose title is requested, ordered by the requested titles.

    For each title, every matching view is appended in the views' native
    order. The result order follows ``titles``, not ``views``.
    """
    views = list(views)
    return [view for title in titles for view in views if view.title == title]


def is_view_open(view: View) -> bool:
    """True iff at least one of the view's windows is still valid."""
    return any(win.is_valid() for win in view.windows)
