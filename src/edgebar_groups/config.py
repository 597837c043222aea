"""Group configuration: defaults, merging and validation.

Options come either from a Python mapping or from the JSON settings file.
Shape:

    {
      "groups": {"left": [{"icon": "E", "titles": ["Explorer"], "pick_key": "e"}]},
      "toggle": true,
      "statusline": {"separators": [" ", " "], "colored": false, ...},
      "panels": {"Terminal": {"pinned": true}, "Quickfix": {"command": "copen"}}
    }

// [LAW:single-enforcer] parse_config is the only place options are validated.
// Everything downstream trusts GroupsConfig.
"""

from __future__ import annotations

import copy
import importlib
import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

import edgebar_groups.settings
from edgebar_groups.groups import Group, GroupRegistry
from edgebar_groups.positions import Position
from edgebar_groups.statusline import DEFAULT_COLORS, StatuslineOptions

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Configuration is malformed. Raised at setup only."""


DEFAULTS: dict = {
    "groups": {},
    "toggle": True,
    "statusline": {
        "separators": [" ", " "],
        "clickable": False,
        "colored": False,
        "colors": dict(DEFAULT_COLORS),
        "pick_key_pose": "left",
        "pick_function": None,
    },
    "panels": {},
}

EXAMPLE_SETTINGS: dict = {
    "groups": {
        "left": [
            {"icon": "Files", "titles": ["Explorer", "Buffers"], "pick_key": "f"},
            {"icon": "Symbols", "titles": ["Outline", "Tags"], "pick_key": "o"},
        ],
        "bottom": [
            {"icon": "Term", "titles": ["Terminal"], "pick_key": "t"},
            {"icon": "Diag", "titles": ["Problems", "Quickfix"], "pick_key": "d"},
        ],
    },
    "toggle": True,
    "statusline": {"colored": True, "pick_key_pose": "left"},
    "panels": {
        "Terminal": {"pinned": True},
        "Quickfix": {"command": "copen"},
    },
}


@dataclass(frozen=True)
class PanelOptions:
    """How the Textual host treats one panel title."""

    pinned: bool = False
    command: str | None = None


@dataclass(frozen=True)
class GroupsConfig:
    """Parsed, validated configuration."""

    registry: GroupRegistry
    toggle: bool
    statusline: StatuslineOptions
    panels: Mapping[str, PanelOptions] = field(default_factory=dict)


def merge_defaults(defaults: Mapping, overrides: Mapping) -> dict:
    """Deep-merge ``overrides`` over ``defaults``. Neither input is mutated.

    Nested mappings merge key by key; every other value (lists included) is
    replaced wholesale.
    """
    merged = copy.deepcopy(dict(defaults))
    for key, value in overrides.items():
        base = merged.get(key)
        if isinstance(base, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_defaults(base, value)
        else:
            merged[key] = copy.deepcopy(value) if not callable(value) else value
    return merged


def resolve_callable(dotted_path: str) -> Callable:
    """Resolve a dotted path like 'package.module.function'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise ConfigError(f"pick_function {dotted_path!r} is not a dotted path")
    try:
        fn = getattr(importlib.import_module(module_path), attr)
    except (ImportError, AttributeError) as exc:
        raise ConfigError(f"pick_function {dotted_path!r} cannot be resolved: {exc}") from exc
    if not callable(fn):
        raise ConfigError(f"pick_function {dotted_path!r} is not callable")
    return fn


def _parse_group(raw, where: str) -> Group:
    if not isinstance(raw, Mapping):
        raise ConfigError(f"{where}: group must be a mapping")
    titles = raw.get("titles")
    if not isinstance(titles, (list, tuple)) or not titles:
        raise ConfigError(f"{where}.titles: expected a non-empty list of titles")
    if not all(isinstance(t, str) and t for t in titles):
        raise ConfigError(f"{where}.titles: every title must be a non-empty string")
    pick_key = raw.get("pick_key")
    if pick_key is not None and (not isinstance(pick_key, str) or len(pick_key) != 1):
        raise ConfigError(f"{where}.pick_key: expected a single character")
    icon = raw.get("icon", "")
    if not isinstance(icon, str):
        raise ConfigError(f"{where}.icon: expected a string")
    return Group(titles=tuple(titles), pick_key=pick_key, icon=icon)


def _parse_groups(raw) -> GroupRegistry:
    if not isinstance(raw, Mapping):
        raise ConfigError("groups: expected a mapping of position -> list of groups")
    groups_by_pos: dict[Position, list[Group]] = {}
    for pos_name, groups in raw.items():
        try:
            position = Position.parse(pos_name)
        except ValueError as exc:
            raise ConfigError(f"groups: {exc}") from None
        if not isinstance(groups, (list, tuple)):
            raise ConfigError(f"groups.{position.value}: expected a list of groups")
        groups_by_pos[position] = [
            _parse_group(g, f"groups.{position.value}[{i}]") for i, g in enumerate(groups)
        ]
    return GroupRegistry(groups_by_pos)


def _parse_statusline(raw) -> StatuslineOptions:
    if not isinstance(raw, Mapping):
        raise ConfigError("statusline: expected a mapping")
    separators = raw.get("separators")
    if (
        not isinstance(separators, (list, tuple))
        or len(separators) != 2
        or not all(isinstance(s, str) for s in separators)
    ):
        raise ConfigError("statusline.separators: expected two strings")
    pose = raw.get("pick_key_pose")
    if pose not in ("left", "right"):
        raise ConfigError("statusline.pick_key_pose: expected 'left' or 'right'")
    colors = raw.get("colors")
    if not isinstance(colors, Mapping) or not all(isinstance(v, str) for v in colors.values()):
        raise ConfigError("statusline.colors: expected a mapping of slot -> style")
    pick_function = raw.get("pick_function")
    if isinstance(pick_function, str):
        pick_function = resolve_callable(pick_function)
    elif pick_function is not None and not callable(pick_function):
        raise ConfigError("statusline.pick_function: expected a callable or dotted path")
    return StatuslineOptions(
        separators=(separators[0], separators[1]),
        clickable=bool(raw.get("clickable")),
        colored=bool(raw.get("colored")),
        colors=dict(colors),
        pick_key_pose=pose,
        pick_function=pick_function,
    )


def _parse_panels(raw) -> dict[str, PanelOptions]:
    if not isinstance(raw, Mapping):
        raise ConfigError("panels: expected a mapping of title -> panel options")
    panels: dict[str, PanelOptions] = {}
    for title, opts in raw.items():
        if not isinstance(title, str) or not title:
            raise ConfigError("panels: every title must be a non-empty string")
        if not isinstance(opts, Mapping):
            raise ConfigError(f"panels.{title}: expected a mapping")
        pinned = opts.get("pinned", False)
        if not isinstance(pinned, bool):
            raise ConfigError(f"panels.{title}.pinned: expected a boolean")
        command = opts.get("command")
        if command is not None and (not isinstance(command, str) or not command.strip()):
            raise ConfigError(f"panels.{title}.command: expected a non-empty string")
        panels[title] = PanelOptions(pinned=pinned, command=command.strip() if command else None)
    return panels


def parse_config(opts: Mapping | None = None) -> GroupsConfig:
    """Merge defaults under ``opts`` and validate the result."""
    if opts is not None and not isinstance(opts, Mapping):
        raise ConfigError("options must be a mapping")
    merged = merge_defaults(DEFAULTS, opts or {})
    toggle = merged.get("toggle")
    if not isinstance(toggle, bool):
        raise ConfigError("toggle: expected a boolean")
    config = GroupsConfig(
        registry=_parse_groups(merged["groups"]),
        toggle=toggle,
        statusline=_parse_statusline(merged["statusline"]),
        panels=_parse_panels(merged["panels"]),
    )
    logger.debug(
        "parsed config: %s",
        {pos.value: len(indexed) for pos, indexed in config.registry},
    )
    return config


def load_config(path: Path | None = None) -> GroupsConfig:
    """Load and parse the JSON settings file. A missing file yields defaults."""
    path = path or edgebar_groups.settings.get_config_path()
    try:
        data = edgebar_groups.settings.read_settings_file(path)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: invalid JSON: {exc}") from exc
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc
    if data is None:
        logger.info("no settings at %s; using defaults", path)
    return parse_config(data or {})
