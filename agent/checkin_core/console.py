"""
Console — rich-based EventSink: status lines, dividers, live countdown.
"""

import threading

from rich.console import Console as RichConsole
from rich.live import Live
from rich.text import Text
from rich.theme import Theme

from .constants import THEME, SPINNER_FRAMES
from .events import EventSink
from .scheduler import WaitResult

checkin_theme = Theme({
    "info": THEME["info"],
    "success": THEME["success"],
    "warning": THEME["warning"],
    "error": THEME["error"],
    "action": THEME["purple"],
    "primary": THEME["primary"],
    "secondary": THEME["secondary"],
    "divider": THEME["cyan"],
    "text": THEME["text"],
})


def format_remaining(remaining_sec):
    """HH:MM:SS, hours not wrapped at 24."""
    total = max(0, int(remaining_sec))
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


class Console(EventSink):
    """Renders core events. Safe to call from the loop worker and the menu thread."""

    def __init__(self, console=None):
        self.rich = console or RichConsole(theme=checkin_theme, highlight=False)
        self._lock = threading.RLock()
        self._live = None
        self._frame = 0
        self._prompting = False
        self._announced = False

    def _print(self, *renderables, **kwargs):
        with self._lock:
            self.rich.print(*renderables, **kwargs)

    def info(self, message):
        self._print(Text.assemble(("ℹ", "info"), " ", message))

    def success(self, message):
        self._print(Text.assemble(("✔", "success"), " ", message))

    def warn(self, message):
        self._print(Text.assemble(("⚠", "warning"), " ", message))

    def error(self, message):
        self._print(Text.assemble(("✖", "error"), " ", message))

    def action(self, message):
        self._print(Text.assemble(("➤", "action"), " ", message))

    def section(self, label=""):
        line = "─" * 20
        title = f" {label} " if label else ""
        self._print(Text(f"{line}{title}{line}", style="divider"))

    def menu(self, entries):
        """``entries``: (key, label, style) tuples."""
        self.section("MENU")
        for key, label, style in entries:
            self._print(Text.assemble(f"{key}) ", (label, style)))

    # ─── Countdown ───────────────────────────────────────────
    # Live redraws move the cursor, so no Live runs while a prompt is open.
    # During a prompt the countdown is printed once as a plain line instead.

    def countdown(self, remaining_sec, should_stop):
        self._frame = (self._frame + 1) % len(SPINNER_FRAMES)
        line = Text.assemble(
            (SPINNER_FRAMES[self._frame], "divider"), " ",
            ("Waiting for next daily check-in: ", "text"),
            (format_remaining(remaining_sec), "primary"), " ",
            ("(Stop via menu)", "secondary"),
        )
        with self._lock:
            if self._prompting:
                if not self._announced:
                    self.rich.print(line)
                    self._announced = True
                return
            if self._live is None:
                self._live = Live(line, console=self.rich, auto_refresh=False, transient=True,
                                  redirect_stdout=False, redirect_stderr=False)
                self._live.start()
            self._live.update(line, refresh=True)

    def countdown_finished(self, result):
        with self._lock:
            self._stop_live()
            self._announced = False
        if result is WaitResult.STOPPED:
            self.warn("Auto loop stopped.")
        else:
            self.success("Starting next cycle...")

    def _stop_live(self):
        if self._live is not None:
            self._live.stop()
            self._live = None

    # ─── Input ───────────────────────────────────────────────

    def prompt(self, markup):
        """Read one line from the user with the live countdown paused."""
        with self._lock:
            self._prompting = True
            self._stop_live()
        try:
            return self.rich.input(markup)
        finally:
            with self._lock:
                self._prompting = False

    def restore_terminal(self):
        with self._lock:
            self._stop_live()
            self.rich.show_cursor(True)
