"""
EventSink — what the core reports to whatever presents it.

The core only calls these methods; console.Console renders them, tests
record them. The base class drops everything.
"""


class EventSink:
    def info(self, message):
        pass

    def success(self, message):
        pass

    def warn(self, message):
        pass

    def error(self, message):
        pass

    def action(self, message):
        pass

    def section(self, label=""):
        pass

    def countdown(self, remaining_sec, should_stop):
        """One tick of the wait between passes."""

    def countdown_finished(self, result):
        """The wait ended; ``result`` is a scheduler.WaitResult."""
