"""
idOS API calls — auth challenge/verify, points, daily check-in.

All functions are blocking and go through HttpClient, which retries each
call (3 attempts, fixed 1.2s delay) before raising.
"""

from .config import log
from .constants import BASE_API, WALLET_TYPE, DAILY_QUEST_NAME, ALREADY_CLAIMED_STATUS
from .exceptions import HttpStatusError
from .http_client import HttpClient, base_headers
from .models import CheckinResult, PointsSnapshot


def _as_dict(data):
    return data if isinstance(data, dict) else {}


class RewardsApi:
    def __init__(self, client=None, base_url=BASE_API):
        self.client = client or HttpClient()
        self.base_url = base_url.rstrip("/")

    def _url(self, path):
        return f"{self.base_url}{path}"

    # ─── Auth ────────────────────────────────────────────────

    def get_auth_message(self, address):
        """Challenge for ``address``. Returns the raw response dict."""
        body = {"publicAddress": address, "publicKey": address}
        data = self.client.request(self._url("/auth/message"), "POST", base_headers(), body)
        return _as_dict(data)

    def verify(self, address, signature, message, nonce):
        body = {
            "publicAddress": address,
            "publicKey": address,
            "signature": signature,
            "message": message,
            "nonce": nonce,
            "walletType": WALLET_TYPE,
        }
        data = self.client.request(self._url("/auth/verify"), "POST", base_headers(), body)
        return _as_dict(data)

    # ─── Points ──────────────────────────────────────────────

    def get_points(self, session):
        """Current balance. A missing or malformed totalPoints reads as 0."""
        url = self._url(f"/user/{session.user_id}/points")
        data = _as_dict(self.client.request(url, "GET", base_headers(session.access_token)))
        raw = data.get("totalPoints")
        try:
            total = int(raw) if raw is not None else 0
        except (TypeError, ValueError):
            log.warning("Unexpected totalPoints value %r — treating as 0", raw)
            total = 0
        return PointsSnapshot(total_points=max(0, total))

    # ─── Daily check-in ──────────────────────────────────────

    def daily_check(self, session):
        """Claim today's check-in quest.

        The endpoint answers 502 once the quest has already been completed
        today, instead of a 4xx. That status is mapped to ALREADY_CLAIMED;
        every other failure propagates. Revisit if the service starts
        returning a proper status.
        """
        url = self._url("/user-quests/complete")
        body = {"questName": DAILY_QUEST_NAME, "userId": session.user_id}
        try:
            self.client.request(url, "POST", base_headers(session.access_token), body)
        except HttpStatusError as e:
            if e.status == ALREADY_CLAIMED_STATUS:
                return CheckinResult.ALREADY_CLAIMED
            raise
        return CheckinResult.CLAIMED
