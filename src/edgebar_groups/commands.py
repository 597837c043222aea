"""User commands: a small command line over the engine's entry points.

    next <position>          open the next group at position
    prev <position>          open the previous group at position
    open <key> [position]    open every group picked by key
    pick <key>               route key through the pick function

// [LAW:dataflow-not-control-flow] COMMANDS is the dispatch table; run_command
// only parses and looks up.
"""

from __future__ import annotations

import shlex
from collections.abc import Callable
from typing import NamedTuple

from edgebar_groups.engine import EdgebarGroups
from edgebar_groups.positions import Position


class CommandError(ValueError):
    """A command line could not be parsed or does not name a command."""


class CommandSpec(NamedTuple):
    usage: str
    min_args: int
    max_args: int
    handler: Callable[[EdgebarGroups, list[str]], object]


def _position(raw: str) -> Position:
    try:
        return Position.parse(raw)
    except ValueError as exc:
        raise CommandError(str(exc)) from None


def _key(raw: str) -> str:
    if len(raw) != 1:
        raise CommandError(f"pick key must be a single character, got {raw!r}")
    return raw


def _next(engine: EdgebarGroups, args: list[str]):
    return engine.open_group_offset(_position(args[0]), 1)


def _prev(engine: EdgebarGroups, args: list[str]):
    return engine.open_group_offset(_position(args[0]), -1)


def _open(engine: EdgebarGroups, args: list[str]):
    position = _position(args[1]) if len(args) > 1 else None
    return engine.open_groups_by_key(_key(args[0]), position=position)


def _pick(engine: EdgebarGroups, args: list[str]):
    return engine.pick(_key(args[0]))


COMMANDS: dict[str, CommandSpec] = {
    "next": CommandSpec("next <position>", 1, 1, _next),
    "prev": CommandSpec("prev <position>", 1, 1, _prev),
    "open": CommandSpec("open <key> [position]", 1, 2, _open),
    "pick": CommandSpec("pick <key>", 1, 1, _pick),
}


def usage() -> str:
    return "\n".join(spec.usage for spec in COMMANDS.values())


def run_command(engine: EdgebarGroups, line: str):
    """Parse ``line`` and run it against ``engine``. Returns the handler's result."""
    try:
        parts = shlex.split(line)
    except ValueError as exc:
        raise CommandError(f"cannot parse {line!r}: {exc}") from None
    if not parts:
        raise CommandError("empty command")
    name, args = parts[0].lower(), parts[1:]
    spec = COMMANDS.get(name)
    if spec is None:
        raise CommandError(f"unknown command {name!r}\n{usage()}")
    if not spec.min_args <= len(args) <= spec.max_args:
        raise CommandError(f"usage: {spec.usage}")
    return spec.handler(engine, args)
