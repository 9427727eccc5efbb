"""
LoopState — the only state shared between the menu thread and the loop worker.

A lock guards the state value; the stop signal is a threading.Event so the
worker can block on it with a timeout instead of sleeping blind.
"""

import threading
from enum import Enum


class ScheduleState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOP_REQUESTED = "stop_requested"


class LoopState:
    def __init__(self):
        self._lock = threading.Lock()
        self._state = ScheduleState.IDLE
        self._stop = threading.Event()

    @property
    def value(self) -> ScheduleState:
        with self._lock:
            return self._state

    @property
    def stop_event(self) -> threading.Event:
        return self._stop

    def stop_requested(self) -> bool:
        return self._stop.is_set()

    def try_start(self) -> bool:
        """IDLE → RUNNING. False if a loop already owns the state."""
        with self._lock:
            if self._state is not ScheduleState.IDLE:
                return False
            self._stop.clear()
            self._state = ScheduleState.RUNNING
            return True

    def try_request_stop(self) -> bool:
        """RUNNING → STOP_REQUESTED and raise the stop signal."""
        with self._lock:
            if self._state is not ScheduleState.RUNNING:
                return False
            self._state = ScheduleState.STOP_REQUESTED
            self._stop.set()
            return True

    def finish(self):
        """Called by the worker on exit, whatever the reason."""
        with self._lock:
            self._state = ScheduleState.IDLE
            self._stop.clear()
