"""Group registry: per-position ordered groups and the selection pointer.

Groups are configuration-time data: created once at setup, immutable after.
The only mutable state is each position's selected index, and it is owned
by an explicit GroupRegistry instance rather than module globals.

// [LAW:one-source-of-truth] IndexedGroups.selected_index is the canonical
// selection for a position; the selected group is derived from it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from edgebar_groups.positions import POSITIONS, Position


@dataclass(frozen=True)
class Group:
    """A set of panel titles opened and closed together."""

    titles: tuple[str, ...]
    pick_key: str | None = None
    icon: str = ""

    def __post_init__(self) -> None:
        # Accept any sequence at construction; store an immutable tuple.
        object.__setattr__(self, "titles", tuple(self.titles))

    @property
    def label(self) -> str:
        """Display label: the icon when set, otherwise the joined titles."""
        return self.icon or ", ".join(self.titles)


@dataclass
class IndexedGroups:
    """Ordered groups at one position plus the selected index (0-based)."""

    groups: list[Group] = field(default_factory=list)
    selected_index: int = 0

    def __len__(self) -> int:
        return len(self.groups)

    def get(self, index: int) -> Group | None:
        """Group at ``index``, or None when out of range (negatives included)."""
        if 0 <= index < len(self.groups):
            return self.groups[index]
        return None

    def offset_index(self, offset: int) -> int:
        """Index ``offset`` steps from the selection, wrapping modulo the count."""
        if not self.groups:
            return 0
        return (self.selected_index + offset) % len(self.groups)

    def selected_group(self) -> Group | None:
        return self.get(self.selected_index)

    def select(self, index: int) -> bool:
        """Move the selection to ``index``. Out-of-range indices are ignored."""
        if self.get(index) is None:
            return False
        self.selected_index = index
        return True


@dataclass(frozen=True)
class IndexedGroup:
    """A group together with where it lives in the registry."""

    position: Position
    index: int
    group: Group


class GroupRegistry:
    """Groups for every position that has any configured."""

    def __init__(self, groups_by_pos: Mapping[Position, Iterable[Group]] | None = None):
        self._by_pos: dict[Position, IndexedGroups] = {}
        for pos, groups in (groups_by_pos or {}).items():
            groups = list(groups)
            # A position with no groups stays absent.
            if groups:
                self._by_pos[Position.parse(pos)] = IndexedGroups(groups)

    def __contains__(self, position: Position) -> bool:
        return position in self._by_pos

    def __iter__(self) -> Iterator[tuple[Position, IndexedGroups]]:
        """Iterate (position, groups) pairs in the stable POSITIONS order."""
        for pos in POSITIONS:
            indexed = self._by_pos.get(pos)
            if indexed is not None:
                yield pos, indexed

    @property
    def positions(self) -> list[Position]:
        return [pos for pos, _ in self]

    def at(self, position: Position) -> IndexedGroups | None:
        return self._by_pos.get(position)

    def group(self, position: Position, index: int) -> Group | None:
        indexed = self._by_pos.get(position)
        return indexed.get(index) if indexed is not None else None

    def selected(self, position: Position) -> Group | None:
        """Currently selected group at ``position``, or None without groups."""
        indexed = self._by_pos.get(position)
        return indexed.selected_group() if indexed is not None else None

    def get_groups_by_key(self, key: str, position: Position | None = None) -> list[IndexedGroup]:
        """Every group whose pick key is ``key``, optionally at one position.

        Pure lookup; results follow POSITIONS order, then group order.
        """
        return [
            IndexedGroup(position=pos, index=i, group=group)
            for pos, indexed in self
            if position is None or pos == position
            for i, group in enumerate(indexed.groups)
            if group.pick_key is not None and group.pick_key == key
        ]
