"""Pilot wrappers with settling for Textual in-process tests.

Reconciliations run through call_later, and panels mount asynchronously,
so settling takes two idle waits: one for the deferred callbacks and one
for the mounts they trigger.
"""

from textual.pilot import Pilot


async def settle(pilot: Pilot) -> None:
    await pilot.pause()
    await pilot.pause()


async def press_and_settle(pilot: Pilot, *keys: str) -> None:
    """Press keys and wait for app to settle."""
    await pilot.press(*keys)
    await settle(pilot)


async def press_sequence(pilot: Pilot, keys: list[str]) -> None:
    """Press keys one at a time, settling after each."""
    for key in keys:
        await pilot.press(key)
        await settle(pilot)
