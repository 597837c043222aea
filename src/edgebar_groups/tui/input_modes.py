"""Pure mode system for key dispatch.

All keyboard input routes through the app's on_key based on current mode.
"""

from enum import Enum, auto


class InputMode(Enum):
    NORMAL = auto()
    PICK = auto()  # next key press is a pick key


# [LAW:one-source-of-truth] Key→action mapping per mode.
# PICK is empty: every key is consumed as a pick key (escape cancels).
MODE_KEYMAP: dict[InputMode, dict[str, str]] = {
    InputMode.NORMAL: {
        "g": "start_pick",
        "]": "next_group('left')",
        "right_square_bracket": "next_group('left')",
        "[": "prev_group('left')",
        "left_square_bracket": "prev_group('left')",
        "}": "next_group('bottom')",
        "right_curly_bracket": "next_group('bottom')",
        "{": "prev_group('bottom')",
        "left_curly_bracket": "prev_group('bottom')",
        ">": "next_group('right')",
        "greater_than_sign": "next_group('right')",
        "<": "prev_group('right')",
        "less_than_sign": "prev_group('right')",
        "q": "quit",
    },
    InputMode.PICK: {},
}


# [LAW:one-source-of-truth] Help line per mode.
FOOTER_KEYS: dict[InputMode, list[tuple[str, str]]] = {
    InputMode.NORMAL: [
        ("g", "pick"),
        ("[]", "left"),
        ("{}", "bottom"),
        ("<>", "right"),
        ("q", "quit"),
    ],
    InputMode.PICK: [
        ("key", "open group"),
        ("esc", "cancel"),
    ],
}


def footer_text(mode: InputMode) -> str:
    return "  ".join(f"{key} {desc}" for key, desc in FOOTER_KEYS[mode])
