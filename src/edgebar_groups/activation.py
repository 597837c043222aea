"""Panel activation: opening a single view through its open action.

// [LAW:single-enforcer] protected_call is the sole place activation
// failures are caught. A failed open is logged and dropped, never retried.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from edgebar_groups.protocols import Editor
from edgebar_groups.views import OpenCallable, OpenCommand, View

logger = logging.getLogger(__name__)


def protected_call(fn: Callable[..., object], *args, context: str = "") -> bool:
    """Run ``fn(*args)``; log and swallow any Exception it raises.

    Returns True when the call completed, False when it raised.
    """
    try:
        fn(*args)
    except Exception:
        logger.exception("protected call failed%s", f" ({context})" if context else "")
        return False
    return True


def activate(view: View, editor: Editor) -> bool:
    """Open ``view`` via its open action.

    Returns True when an action ran without raising. A view without an open
    action is left alone and reported as not activated.
    """
    action = view.open_action
    context = f"open {view.title!r}"
    if isinstance(action, OpenCallable):
        return protected_call(action.fn, context=context)
    if isinstance(action, OpenCommand):
        return protected_call(editor.dispatch_command, action.name, context=context)
    logger.debug("view %r has no open action", view.title)
    return False
