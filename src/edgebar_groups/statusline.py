"""Statusline labels for edgebar groups.

Renders one rich Text label per group at a position. In pick mode each
label also shows the group's pick key so the user knows what to press.

This module is pure rendering: it reads the engine's registry and never
mutates it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

from rich.style import Style
from rich.text import Text

from edgebar_groups.positions import Position

if TYPE_CHECKING:
    from edgebar_groups.engine import EdgebarGroups


# [LAW:one-source-of-truth] Style slots for every label part.
DEFAULT_COLORS: dict[str, str] = {
    "active": "bold",
    "inactive": "dim",
    "pick_active": "bold reverse",
    "pick_inactive": "reverse",
    "separator_active": "",
    "separator_inactive": "dim",
}


@dataclass(frozen=True)
class StatuslineOptions:
    """Statusline rendering options."""

    separators: tuple[str, str] = (" ", " ")
    clickable: bool = False
    colored: bool = False
    colors: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_COLORS))
    pick_key_pose: Literal["left", "right"] = "left"
    pick_function: Callable[[str], object] | None = None

    def style(self, slot: str) -> str:
        """Style for a slot; empty when coloring is off."""
        if not self.colored:
            return ""
        return self.colors.get(slot, DEFAULT_COLORS.get(slot, ""))


def click_action(position: Position, index: int) -> str:
    """Textual action string run when a clickable label is clicked."""
    return f"app.open_group('{position.value}', {index})"


def statusline_items(
    engine: EdgebarGroups,
    position: Position,
    options: StatuslineOptions | None = None,
    *,
    picking: bool = False,
) -> list[Text]:
    """One label per group at ``position``, selected group styled active."""
    options = options or StatuslineOptions()
    indexed = engine.registry.at(position)
    if indexed is None:
        return []

    sep_left, sep_right = options.separators
    items: list[Text] = []
    for i, group in enumerate(indexed.groups):
        state = "active" if i == indexed.selected_index else "inactive"
        text = Text()
        text.append(sep_left, style=options.style(f"separator_{state}"))
        pick = picking and bool(group.pick_key)
        if pick and options.pick_key_pose == "left":
            text.append(group.pick_key, style=options.style(f"pick_{state}"))
            text.append(" ")
        label_style = Style.parse(options.style(state))
        if options.clickable:
            label_style += Style.from_meta({"@click": click_action(position, i)})
        text.append(group.label, style=label_style)
        if pick and options.pick_key_pose == "right":
            text.append(" ")
            text.append(group.pick_key, style=options.style(f"pick_{state}"))
        text.append(sep_right, style=options.style(f"separator_{state}"))
        items.append(text)
    return items


def render_statusline(
    engine: EdgebarGroups,
    position: Position,
    options: StatuslineOptions | None = None,
    *,
    picking: bool = False,
) -> Text:
    """All of a position's group labels joined into one line."""
    return Text("").join(statusline_items(engine, position, options, picking=picking))
