"""
Interactive menu: reads commands until exit, never blocks on the loop.
"""

from enum import Enum

from .config import log
from .exceptions import ScheduleStateError


class Command(Enum):
    RUN_ONCE = "run-once"
    START_LOOP = "start-loop"
    STOP_LOOP = "stop-loop"
    REFRESH_POINTS = "refresh-points"
    EXIT = "exit"


MENU_CHOICES = {
    "1": Command.RUN_ONCE,
    "2": Command.START_LOOP,
    "3": Command.STOP_LOOP,
    "4": Command.REFRESH_POINTS,
    "5": Command.EXIT,
}

MENU_ENTRIES = (
    ("1", "Daily Check-in", "primary"),
    ("2", "Auto Loop Daily Check-in", "primary"),
    ("3", "Stop Auto Loop Daily Check-in", "primary"),
    ("4", "Refresh Point", "primary"),
    ("5", "Exit", "error"),
)

PROMPT = "Select (1-5): "


def parse_choice(raw):
    return MENU_CHOICES.get((raw or "").strip())


class CommandLoop:
    """Menu on the main thread. ``app`` is a CheckinApp, ``console`` a Console."""

    def __init__(self, app, console, input_fn=None):
        self._app = app
        self._console = console
        self._input = input_fn or self._default_input

    def _default_input(self, prompt):
        return self._console.prompt(f"[divider]{prompt}[/divider]")

    def run(self):
        while True:
            self._console.menu(MENU_ENTRIES)
            try:
                raw = self._input(PROMPT)
            except EOFError:
                raw = "5"
            if not self.handle(raw):
                return

    def handle(self, raw):
        """Execute one menu choice. Returns False when the menu should exit."""
        command = parse_choice(raw)
        if command is None:
            self._console.error("Invalid choice. Pick 1-5.")
            return True
        log.info("Menu command: %s", command.value)
        return self.dispatch(command)

    def dispatch(self, command):
        app, console = self._app, self._console

        if command is Command.RUN_ONCE:
            if app.scheduler.running:
                console.warn("Auto loop is running. Stop it first if you want a single run.")
            else:
                app.run_checkin()

        elif command is Command.START_LOOP:
            try:
                app.start_loop()
                console.success("Auto Loop Daily Check-in started.")
            except ScheduleStateError as e:
                log.warning("%s", e)
                console.warn(str(e))

        elif command is Command.STOP_LOOP:
            try:
                app.stop_loop()
                console.warn("Stopping auto loop…")
            except ScheduleStateError as e:
                log.warning("%s", e)
                console.warn(str(e))

        elif command is Command.REFRESH_POINTS:
            if app.scheduler.running:
                console.warn("Auto loop is running. Stop it first if you want to refresh manually.")
            else:
                app.refresh_points()

        elif command is Command.EXIT:
            if app.scheduler.running:
                try:
                    app.stop_loop()
                except ScheduleStateError:
                    pass
            console.warn("Exiting…")
            return False

        return True
