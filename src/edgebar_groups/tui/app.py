"""Main TUI application using Textual.

// [LAW:locality-or-seam] Thin coordinator: edgebar widgets live in
//   tui.host, group logic in engine, key modes in tui.input_modes.
// [LAW:single-enforcer] on_key is the sole key dispatcher.

Reconciliations are deferred with call_later, so a key press returns
immediately and every scheduled reconciliation sees the panels as the
previous one left them.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterable, Mapping

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Static

import edgebar_groups.statusline
from edgebar_groups.activation import protected_call
from edgebar_groups.commands import CommandError, run_command
from edgebar_groups.config import GroupsConfig
from edgebar_groups.engine import EdgebarGroups
from edgebar_groups.positions import POSITIONS, Position
from edgebar_groups.tui.host import EdgebarDock, TextualHost, specs_for_registry
from edgebar_groups.tui.input_modes import MODE_KEYMAP, InputMode, footer_text

logger = logging.getLogger(__name__)


class EdgebarGroupsApp(App):
    """Edgebar panels around a body, switched by group."""

    CSS = """
    #main {
        height: 1fr;
    }
    #body {
        height: 1fr;
        content-align: center middle;
        color: $text-muted;
    }
    #statusline {
        height: 1;
        background: $panel;
    }
    #keys {
        height: 1;
        color: $text-muted;
    }
    """

    def __init__(
        self,
        config: GroupsConfig,
        *,
        commands: Mapping[str, Callable[[], object]] | None = None,
        startup_commands: Iterable[str] = (),
        open_initial: bool = True,
    ) -> None:
        super().__init__()
        self._config = config
        self._commands = dict(commands or {})
        self._startup_commands = list(startup_commands)
        self._open_initial = open_initial
        self._input_mode = InputMode.NORMAL
        specs = specs_for_registry(config.registry, config.panels)
        self.edgebar_host = TextualHost(self, specs)
        # Command-opened panels mount themselves unless a command is supplied.
        for spec in specs:
            if spec.command and spec.command not in self._commands:
                self._commands[spec.command] = functools.partial(
                    self.edgebar_host.open_panel, spec.title, spec.position
                )
        for name, fn in self._commands.items():
            self.edgebar_host.register_command(name, fn)
        self.group_engine = EdgebarGroups(
            config.registry,
            self.edgebar_host,
            self.edgebar_host,
            toggle=config.toggle,
            schedule=self._schedule,
            pick_function=config.statusline.pick_function,
            is_shown=self.edgebar_host.is_window_shown,
            reveal=self.edgebar_host.reveal,
        )

    @property
    def input_mode(self) -> InputMode:
        return self._input_mode

    def compose(self) -> ComposeResult:
        for pos in POSITIONS:
            yield EdgebarDock(pos)
        with Vertical(id="main"):
            yield Static("edgebar-groups", id="body")
            yield Static("", id="statusline")
            yield Static(footer_text(InputMode.NORMAL), id="keys")

    def on_mount(self) -> None:
        if self._open_initial:
            for pos in self._config.registry.positions:
                self._schedule(lambda pos=pos: self.group_engine.open_group_index(pos, 0))
        # Queued behind the initial opens so they act on the opened groups.
        for line in self._startup_commands:
            self._schedule(functools.partial(self.run_command_line, line))
        self.edgebar_host.sync_docks()
        self.refresh_statusline()

    # -- Scheduling ----------------------------------------------------------

    def _schedule(self, callback: Callable[[], object]) -> None:
        self.call_later(self._run_scheduled, callback)

    def _run_scheduled(self, callback: Callable[[], object]) -> None:
        protected_call(callback, context="scheduled reconciliation")
        self.edgebar_host.sync_docks()
        self.refresh_statusline()

    # -- Statusline ----------------------------------------------------------

    def statusline_text(self) -> Text:
        picking = self._input_mode == InputMode.PICK
        parts = []
        for pos, _ in self._config.registry:
            line = Text(f"{pos.value}:", style="bold")
            line.append_text(
                edgebar_groups.statusline.render_statusline(
                    self.group_engine, pos, self._config.statusline, picking=picking
                )
            )
            parts.append(line)
        return Text("  ").join(parts)

    def refresh_statusline(self) -> None:
        self.query_one("#statusline", Static).update(self.statusline_text())
        self.query_one("#keys", Static).update(footer_text(self._input_mode))

    def _set_mode(self, mode: InputMode) -> None:
        self._input_mode = mode
        self.refresh_statusline()

    def notify_log_record(self, record: logging.LogRecord) -> None:
        self.notify(record.getMessage(), severity="error")

    # -- Commands ------------------------------------------------------------

    def run_command_line(self, line: str) -> None:
        try:
            run_command(self.group_engine, line)
        except CommandError as exc:
            logger.warning("command %r failed: %s", line, exc)
            self.notify(str(exc), severity="error")

    # -- Actions -------------------------------------------------------------

    def action_start_pick(self) -> None:
        self._set_mode(InputMode.PICK)

    def action_next_group(self, position: str) -> None:
        pos = Position.parse(position)
        self._schedule(lambda: self.group_engine.open_group_offset(pos, 1))

    def action_prev_group(self, position: str) -> None:
        pos = Position.parse(position)
        self._schedule(lambda: self.group_engine.open_group_offset(pos, -1))

    def action_open_group(self, position: str, index: int) -> None:
        pos = Position.parse(position)
        self._schedule(lambda: self.group_engine.open_group_index(pos, int(index)))

    # -- Key dispatch --------------------------------------------------------

    async def on_key(self, event) -> None:
        if self._input_mode == InputMode.PICK:
            event.prevent_default()
            event.stop()
            self._set_mode(InputMode.NORMAL)
            if event.key != "escape":
                self.group_engine.pick(event.character or event.key)
            return

        action_name = MODE_KEYMAP[self._input_mode].get(event.key)
        if action_name:
            event.prevent_default()
            await self.run_action(action_name)
