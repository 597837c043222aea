"""Tests for the user command table."""

import pytest

from edgebar_groups.commands import COMMANDS, CommandError, run_command, usage
from edgebar_groups.positions import Position

LEFT = Position.LEFT


def test_next_and_prev(host, left_engine):
    assert run_command(left_engine, "next left") is True
    assert host.open_titles() == {"Outline", "Tags"}

    assert run_command(left_engine, "PREV Left") is True
    assert host.open_titles() == {"Explorer"}


def test_open_schedules_by_key(host, left_engine):
    matches = run_command(left_engine, "open b")
    assert [(m.position, m.index) for m in matches] == [(LEFT, 1)]
    left_engine.deferred.run_pending()
    assert host.open_titles() == {"Outline", "Tags"}


def test_open_with_position_filter(left_engine):
    assert run_command(left_engine, "open b right") == []


def test_pick(host, left_engine):
    run_command(left_engine, "pick b")
    left_engine.deferred.run_pending()
    assert host.open_titles() == {"Outline", "Tags"}


@pytest.mark.parametrize(
    "line,fragment",
    [
        ("", "empty command"),
        ("launch left", "unknown command"),
        ("next", "usage: next <position>"),
        ("next left right", "usage: next <position>"),
        ("next middle", "unknown position"),
        ("open ab", "single character"),
        ("open 'b", "cannot parse"),
    ],
)
def test_bad_commands(left_engine, line, fragment):
    with pytest.raises(CommandError, match=fragment):
        run_command(left_engine, line)


def test_usage_lists_every_command():
    text = usage()
    for spec in COMMANDS.values():
        assert spec.usage in text
