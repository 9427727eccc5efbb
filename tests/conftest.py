import base64
import json
import time

import pytest

from checkin_core.events import EventSink
from checkin_core.exceptions import InvalidCredentialError
from checkin_core.models import CheckinResult, PointsSnapshot

# Well-known test key from the eth-account docs; never funded.
KEY_A = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
KEY_B = "0x" + "11" * 32
KEY_C = "0x" + "22" * 32


def b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def make_jwt(claims) -> str:
    header = b64url(json.dumps({"alg": "HS256", "typ": "JWT"}).encode())
    payload = b64url(json.dumps(claims).encode())
    return f"{header}.{payload}.signature"


def wait_until(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            return False
        time.sleep(0.005)
    return True


class FakeResponse:
    def __init__(self, status_code=200, text="", reason="OK"):
        self.status_code = status_code
        self.text = text
        self.reason = reason


class FakeSession:
    """requests.Session stand-in; plays back responses or raises exceptions in order."""

    def __init__(self, outcomes):
        self._outcomes = list(outcomes)
        self.calls = []
        self.closed = False

    def request(self, method, url, headers=None, data=None, timeout=None):
        self.calls.append({"method": method, "url": url, "headers": headers,
                           "data": data, "timeout": timeout})
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def close(self):
        self.closed = True


class RecordingSink(EventSink):
    def __init__(self):
        self.events = []
        self.ticks = []
        self.finished = []

    def info(self, message):
        self.events.append(("info", message))

    def success(self, message):
        self.events.append(("success", message))

    def warn(self, message):
        self.events.append(("warn", message))

    def error(self, message):
        self.events.append(("error", message))

    def action(self, message):
        self.events.append(("action", message))

    def section(self, label=""):
        self.events.append(("section", label))

    def countdown(self, remaining_sec, should_stop):
        self.ticks.append(remaining_sec)

    def countdown_finished(self, result):
        self.finished.append(result)

    def restore_terminal(self):
        self.events.append(("restore", ""))

    def of(self, kind):
        return [m for k, m in self.events if k == kind]


class FakeWallet:
    """Signer stand-in: address is derived from the key text, 'bad' keys are rejected."""

    def __init__(self, private_key):
        if not private_key or private_key.startswith("bad"):
            raise InvalidCredentialError("Invalid private key (ValueError)")
        self.address = "0x" + private_key[-40:].rjust(40, "0")

    def sign_message(self, message):
        return "0xsig:" + message


class FakeApi:
    """RewardsApi stand-in with per-address canned answers."""

    def __init__(self, user_id="user-1", points=10, checkin=CheckinResult.CLAIMED):
        self.user_id = user_id
        self.points = points
        self.checkin = checkin
        self.challenge = {"message": "Sign in to idOS", "nonce": "n-1"}
        self.tokens = None
        self.calls = []

    def get_auth_message(self, address):
        self.calls.append(("message", address))
        return dict(self.challenge)

    def verify(self, address, signature, message, nonce):
        self.calls.append(("verify", address, signature, message, nonce))
        if self.tokens is not None:
            return dict(self.tokens)
        return {"accessToken": make_jwt({"userId": self.user_id}), "refreshToken": "refresh"}

    def get_points(self, session):
        self.calls.append(("points", session.user_id))
        return PointsSnapshot(total_points=self.points)

    def daily_check(self, session):
        self.calls.append(("checkin", session.user_id))
        if isinstance(self.checkin, BaseException):
            raise self.checkin
        return self.checkin


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def fake_api():
    return FakeApi()
