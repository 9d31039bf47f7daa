"""Terminal helpers: interactivity detection, interrupt deferral, and the
non-interactive fallback used in CI and pipes."""

from __future__ import annotations

import contextlib
import os
import signal
import sys
import threading
from typing import Callable, Iterator

from rich.console import Console
from rich.markup import escape

from .types import SelectionConfig, SelectionResult

NON_INTERACTIVE_PREVIEW = 5


def is_interactive_terminal() -> bool:
    """True when stdin is a TTY and we are not in CI or a dumb terminal."""
    try:
        is_tty = sys.stdin.isatty()
    except (AttributeError, ValueError):
        return False
    return (
        is_tty
        and not os.environ.get("CI")
        and not os.environ.get("GITHUB_ACTIONS")
        and os.environ.get("TERM") != "dumb"
    )


@contextlib.contextmanager
def defer_interrupts(on_interrupt: Callable[[], None]) -> Iterator[None]:
    """Record Ctrl+C instead of raising while the block runs.

    SIGINT received inside the block calls `on_interrupt` rather than
    raising KeyboardInterrupt; the previous handler is restored on exit.
    Outside the main thread signals cannot be re-routed and the block runs
    unchanged.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _record(signum, frame):
        on_interrupt()

    previous = signal.signal(signal.SIGINT, _record)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def render_non_interactive(
    config: SelectionConfig, console: Console | None = None
) -> SelectionResult:
    """Print a short preview and pick the first item without reading keys."""
    console = console or Console(highlight=False)
    console.print("Search: (non-interactive mode)")
    console.print(
        "Use arrow keys to navigate, Enter to select, Escape to clear search, Ctrl+C to cancel"
    )
    if config.header:
        console.print()
        console.print(escape(config.header))
        console.print()

    items = list(config.items)
    for i, item in enumerate(items[:NON_INTERACTIVE_PREVIEW]):
        marker = ">" if i == 0 else " "
        console.print(f"{marker} {escape(config.render_text(item))}")
    if len(items) > NON_INTERACTIVE_PREVIEW:
        console.print("  ... and more")

    if not items:
        return SelectionResult.cancelled_result("No items to select")
    return SelectionResult(success=True, item=items[0])
