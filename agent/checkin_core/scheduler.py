"""
Repeating check-in loop: pass, wait 24h (interruptible), repeat.

The loop runs in one daemon worker thread and reports back through a
concurrent.futures.Future. The menu thread talks to it only through
LoopState (lock + stop Event).
"""

import threading
import time
from concurrent.futures import Future
from enum import Enum

from .config import log
from .constants import CHECKIN_INTERVAL_SEC, WAIT_POLL_SEC
from .events import EventSink
from .exceptions import ScheduleStateError
from .state import LoopState, ScheduleState


class WaitResult(Enum):
    DONE = "done"
    STOPPED = "stopped"


def wait_interruptible(total_sec, should_stop, on_tick=None, poll_interval=WAIT_POLL_SEC,
                       clock=time.monotonic, sleep=time.sleep):
    """Wait ``total_sec`` unless ``should_stop()`` turns true first.

    Remaining time is recomputed from the start timestamp on every tick, so
    slow ticks never stretch the total. ``on_tick(remaining, should_stop)``
    is called once per poll.
    """
    start = clock()
    while True:
        if should_stop():
            return WaitResult.STOPPED
        remaining = max(0.0, total_sec - (clock() - start))
        if on_tick is not None:
            on_tick(remaining, should_stop)
        if remaining <= 0:
            return WaitResult.DONE
        sleep(min(poll_interval, remaining))


class Scheduler:
    """start / stop / status for the repeating pass.

    ``pass_fn(credentials)`` runs one full pass; it is expected to isolate
    per-account failures itself.
    """

    def __init__(self, pass_fn, period_sec=CHECKIN_INTERVAL_SEC, sink=None,
                 poll_interval=WAIT_POLL_SEC, clock=time.monotonic):
        self._pass_fn = pass_fn
        self._period_sec = period_sec
        self._sink = sink or EventSink()
        self._poll_interval = poll_interval
        self._clock = clock
        self._state = LoopState()
        self._future = None
        self._thread = None

    def status(self) -> ScheduleState:
        return self._state.value

    @property
    def running(self) -> bool:
        return self.status() is not ScheduleState.IDLE

    def start(self, credentials) -> Future:
        """Spawn the loop worker. Raises ScheduleStateError if one is active."""
        if not self._state.try_start():
            raise ScheduleStateError("Auto loop already running.")

        credentials = list(credentials)
        future = Future()
        future.set_running_or_notify_cancel()
        self._future = future
        self._thread = threading.Thread(
            target=self._run, args=(credentials, future),
            name="checkin-loop", daemon=True,
        )
        self._thread.start()
        log.info("Auto loop started (accounts=%d, period=%.0fs)",
                 len(credentials), self._period_sec)
        return future

    def stop(self):
        """Ask the worker to finish. Never interrupts a pass in flight."""
        if not self._state.try_request_stop():
            raise ScheduleStateError("Auto loop is not running.")
        log.info("Auto loop stop requested")

    def wait(self, timeout=None):
        """Block until the worker exits. Returns the number of passes run."""
        if self._future is None:
            return 0
        return self._future.result(timeout=timeout)

    # ─── Worker ──────────────────────────────────────────────

    def _run(self, credentials, future):
        passes = 0
        try:
            while not self._state.stop_requested():
                passes += 1
                self._pass_fn(credentials)
                if self._state.stop_requested():
                    break
                result = wait_interruptible(
                    self._period_sec,
                    self._state.stop_requested,
                    on_tick=self._sink.countdown,
                    poll_interval=self._poll_interval,
                    clock=self._clock,
                    sleep=self._state.stop_event.wait,
                )
                self._sink.countdown_finished(result)
                if result is WaitResult.STOPPED:
                    break
        except Exception as e:
            log.error("Auto loop crashed after %d pass(es): %s", passes, e, exc_info=True)
            self._sink.error(f"Auto loop stopped on error: {e}")
            self._state.finish()
            future.set_exception(e)
        else:
            log.info("Auto loop finished after %d pass(es)", passes)
            self._state.finish()
            future.set_result(passes)
