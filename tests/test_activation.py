"""Tests for protected_call and panel activation."""

import logging

import pytest

from edgebar_groups.activation import activate, protected_call
from edgebar_groups.views import OpenCallable, OpenCommand


class _View:
    def __init__(self, action):
        self.title = "Panel"
        self.open_action = action


class _Editor:
    def __init__(self, fail=False):
        self.fail = fail
        self.commands = []

    def dispatch_command(self, name):
        self.commands.append(name)
        if self.fail:
            raise RuntimeError(f"E492: Not an editor command: {name}")


def test_protected_call_returns_true_on_success():
    calls = []
    assert protected_call(calls.append, 1) is True
    assert calls == [1]


def test_protected_call_logs_and_swallows(caplog):
    def boom():
        raise ValueError("nope")

    with caplog.at_level(logging.ERROR, logger="edgebar_groups.activation"):
        assert protected_call(boom, context="open 'X'") is False

    assert "protected call failed (open 'X')" in caplog.text
    assert "ValueError: nope" in caplog.text


def test_protected_call_lets_keyboard_interrupt_through():
    def interrupt():
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        protected_call(interrupt)


def test_activate_callable():
    calls = []
    assert activate(_View(OpenCallable(lambda: calls.append("opened"))), _Editor()) is True
    assert calls == ["opened"]


def test_activate_command():
    editor = _Editor()
    assert activate(_View(OpenCommand("Neotree")), editor) is True
    assert editor.commands == ["Neotree"]


def test_activate_command_failure_is_contained():
    editor = _Editor(fail=True)
    assert activate(_View(OpenCommand("Nope")), editor) is False
    assert editor.commands == ["Nope"]


def test_activate_without_action():
    assert activate(_View(None), _Editor()) is False
