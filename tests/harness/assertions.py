"""State queries for Textual in-process tests."""

from edgebar_groups.positions import Position
from edgebar_groups.tui.host import EdgebarDock, dock_id


def open_titles(app, position: Position) -> set[str]:
    """Titles with a valid window at ``position``."""
    return {view.title for _, view in app.edgebar_host.list_edgebar_windows() if view.position == position}


def window_for(app, title: str, position: Position):
    view = app.edgebar_host.find_view(title, position)
    return view.windows[0] if view is not None and view.windows else None


def dock_visible(app, position: Position) -> bool:
    return bool(app.query_one(f"#{dock_id(position)}", EdgebarDock).display)
