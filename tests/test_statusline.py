"""Tests for statusline label rendering."""

from rich.console import Console
from rich.style import Style

from edgebar_groups.positions import Position
from edgebar_groups.statusline import (
    StatuslineOptions,
    click_action,
    render_statusline,
    statusline_items,
)

LEFT = Position.LEFT
CONSOLE = Console()


def _plain(texts):
    return [t.plain for t in texts]


def test_one_item_per_group(left_engine):
    assert _plain(statusline_items(left_engine, LEFT)) == [" Explorer ", " Outline, Tags "]


def test_no_groups_no_items(left_engine):
    assert statusline_items(left_engine, Position.RIGHT) == []
    assert render_statusline(left_engine, Position.RIGHT).plain == ""


def test_pick_key_pose(left_engine):
    left = StatuslineOptions(separators=("[", "]"))
    right = StatuslineOptions(separators=("[", "]"), pick_key_pose="right")

    assert _plain(statusline_items(left_engine, LEFT, left, picking=True)) == ["[a Explorer]", "[b Outline, Tags]"]
    assert _plain(statusline_items(left_engine, LEFT, right, picking=True)) == ["[Explorer a]", "[Outline, Tags b]"]


def test_render_joins_items(left_engine):
    assert render_statusline(left_engine, LEFT, StatuslineOptions(separators=("", "|"))).plain == "Explorer|Outline, Tags|"


def test_colored_marks_selected_group(left_engine):
    options = StatuslineOptions(colored=True, colors={"active": "bold", "inactive": "dim"})
    left_engine.open_group_index(LEFT, 1)

    first, second = statusline_items(left_engine, LEFT, options)

    assert first.get_style_at_offset(CONSOLE, 1) == Style.parse("dim")
    assert second.get_style_at_offset(CONSOLE, 1) == Style.parse("bold")


def test_uncolored_has_no_styles(left_engine):
    (first, _) = statusline_items(left_engine, LEFT)
    assert not first.get_style_at_offset(CONSOLE, 1)


def test_clickable_labels_carry_click_action(left_engine):
    options = StatuslineOptions(clickable=True)
    _, second = statusline_items(left_engine, LEFT, options)
    style = second.get_style_at_offset(CONSOLE, 1)
    assert style.meta["@click"] == click_action(LEFT, 1) == "app.open_group('left', 1)"
