"""
CheckinApp — wires settings, HTTP client, API, scheduler and console.
"""

from . import accounts
from .api import RewardsApi
from .events import EventSink
from .exceptions import ScheduleStateError
from .http_client import HttpClient
from .scheduler import Scheduler


class CheckinApp:
    def __init__(self, settings, private_keys, sink=None, api=None):
        self.settings = settings
        self.private_keys = list(private_keys)
        self.sink = sink or EventSink()
        self.api = api or RewardsApi(
            HttpClient(
                retries=settings.retries,
                retry_delay=settings.retry_delay_sec,
                timeout=settings.timeout_sec,
            ),
            base_url=settings.base_url,
        )
        self.scheduler = Scheduler(
            self._checkin_pass,
            period_sec=settings.interval_sec,
            sink=self.sink,
            poll_interval=settings.poll_interval_sec,
        )

    def _checkin_pass(self, credentials):
        return accounts.run_checkin_pass(credentials, self.api, self.sink)

    def run_checkin(self):
        return self._checkin_pass(self.private_keys)

    def refresh_points(self):
        return accounts.run_points_pass(self.private_keys, self.api, self.sink)

    def start_loop(self):
        return self.scheduler.start(self.private_keys)

    def stop_loop(self):
        self.scheduler.stop()

    def close(self):
        if self.scheduler.running:
            try:
                self.scheduler.stop()
            except ScheduleStateError:
                pass
        client = getattr(self.api, "client", None)
        if client is not None and hasattr(client, "close"):
            client.close()
