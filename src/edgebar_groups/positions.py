"""Edge positions where edgebars dock.

This module is pure data with no dependencies on other project modules.
"""

from enum import Enum


class Position(Enum):
    """One edge of the screen hosting an edgebar."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, raw) -> "Position":
        """Resolve a position from its case-insensitive name.

        Raises ValueError for anything that does not name an edge.
        """
        if isinstance(raw, cls):
            return raw
        normalized = str(raw or "").strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            names = ", ".join(p.value for p in cls)
            raise ValueError(f"unknown position {raw!r} (expected one of: {names})") from None


# [LAW:one-source-of-truth] Stable iteration order for key lookup and rendering.
POSITIONS: tuple[Position, ...] = (
    Position.LEFT,
    Position.RIGHT,
    Position.TOP,
    Position.BOTTOM,
)
