"""CLI entry point for edgebar-groups."""

import argparse
import logging
import sys
from pathlib import Path

import edgebar_groups.config
import edgebar_groups.io.logging_setup
import edgebar_groups.settings
from edgebar_groups.config import ConfigError
from edgebar_groups.tui.app import EdgebarGroupsApp

logger = logging.getLogger(__name__)


def _describe(config: edgebar_groups.config.GroupsConfig) -> list[str]:
    lines = [f"toggle: {config.toggle}"]
    for pos, indexed in config.registry:
        lines.append(f"{pos.value}:")
        for i, group in enumerate(indexed.groups):
            key = group.pick_key or "-"
            lines.append(f"  [{i}] {key} {group.label}: {', '.join(group.titles)}")
    return lines


def main(argv=None):
    parser = argparse.ArgumentParser(description="Switch groups of edgebar panels")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings JSON path (default: $XDG_CONFIG_HOME/edgebar-groups/settings.json)",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        default=False,
        help="Print the parsed groups and exit.",
    )
    parser.add_argument(
        "--write-example",
        action="store_true",
        default=False,
        help="Write an example settings file to the config path and exit.",
    )
    parser.add_argument(
        "--exec",
        dest="commands",
        action="append",
        default=[],
        metavar="COMMAND",
        help="Command to run at startup, e.g. 'next left' (repeatable).",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: $EDGEBAR_GROUPS_LOG_LEVEL or INFO)",
    )
    args = parser.parse_args(argv)

    # [LAW:single-enforcer] Runtime logger configuration is centralized in io.logging_setup.
    log_runtime = edgebar_groups.io.logging_setup.configure(level=args.log_level)
    logger.debug("logging to %s", log_runtime.file_path)

    config_path = args.config or edgebar_groups.settings.get_config_path()

    if args.write_example:
        path = edgebar_groups.settings.save_settings(edgebar_groups.config.EXAMPLE_SETTINGS, config_path)
        print(f"wrote {path}")
        return 0

    try:
        config = edgebar_groups.config.load_config(config_path)
    except ConfigError as exc:
        print(f"edgebar-groups: {exc}", file=sys.stderr)
        return 2

    if args.print_config:
        print("\n".join(_describe(config)))
        return 0

    app = EdgebarGroupsApp(config, startup_commands=args.commands)
    # Textual owns the terminal while running; errors surface as notifications.
    edgebar_groups.io.logging_setup.route_to_app(app.notify_log_record)
    try:
        app.run()
    finally:
        edgebar_groups.io.logging_setup.restore_stderr()
    return 0


if __name__ == "__main__":
    sys.exit(main())
