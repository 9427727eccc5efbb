"""
HTTP session with connection pooling and a bounded, fixed-delay retry loop.

Retries are done here rather than by urllib3's Retry: every failure kind
(transport, non-2xx status, non-JSON body) is retried the same way, and the
final failure must keep its status so callers can classify it.
"""

import json
import random
import time

import certifi
import requests
from requests.adapters import HTTPAdapter

from .config import log
from .constants import (
    API_RETRIES, API_RETRY_DELAY_SEC, API_TIMEOUT_SEC, ERROR_BODY_LIMIT,
    SITE_ORIGIN, USER_AGENTS,
)
from .exceptions import HttpError, TransportError, HttpStatusError, ResponseFormatError


class _NoContent:
    """Result of a successful response with an empty body."""

    def __bool__(self):
        return False

    def __repr__(self):
        return "NO_CONTENT"


NO_CONTENT = _NoContent()


def pick_user_agent(rng=random):
    return rng.choice(USER_AGENTS)


def base_headers(access_token=None, rng=random):
    """Standard headers for every call, one random User-Agent per call."""
    headers = {
        "Accept": "application/json, text/plain, */*",
        "Content-Type": "application/json",
        "Origin": SITE_ORIGIN,
        "Referer": SITE_ORIGIN + "/",
        "User-Agent": pick_user_agent(rng),
    }
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    return headers


def create_session():
    """Create a new requests.Session with connection pooling and certifi CAs."""
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=1, pool_maxsize=3)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = certifi.where()
    return session


class HttpClient:
    """JSON request/response with ``retries`` attempts and a fixed delay."""

    def __init__(self, session=None, retries=API_RETRIES, retry_delay=API_RETRY_DELAY_SEC,
                 timeout=API_TIMEOUT_SEC, sleep=time.sleep):
        self.session = session or create_session()
        self.retries = max(1, int(retries))
        self.retry_delay = retry_delay
        self.timeout = timeout
        self._sleep = sleep

    def close(self):
        self.session.close()

    def request(self, url, method="GET", headers=None, body=None):
        """Returns parsed JSON, ``NO_CONTENT`` for an empty body, or raises HttpError."""
        last_error = None
        for attempt in range(1, self.retries + 1):
            try:
                return self._attempt(url, method, headers, body)
            except HttpError as e:
                last_error = e
                if attempt < self.retries:
                    log.debug("%s %s failed (attempt %d/%d): %s",
                              method, _path(url), attempt, self.retries, e)
                    self._sleep(self.retry_delay)
        log.warning("%s %s failed after %d attempts: %s",
                    method, _path(url), self.retries, last_error)
        raise last_error

    def _attempt(self, url, method, headers, body):
        data = json.dumps(body) if body is not None else None
        try:
            resp = self.session.request(method, url, headers=headers, data=data,
                                        timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"{method} {_path(url)}: {type(e).__name__}: {e}") from e

        text = resp.text or ""
        if not 200 <= resp.status_code < 300:
            fragment = text[:ERROR_BODY_LIMIT]
            status_line = f"HTTP {resp.status_code} {resp.reason or ''}".rstrip()
            raise HttpStatusError(
                f"{status_line} — {fragment}",
                status=resp.status_code,
                body=fragment,
            )
        if not text.strip():
            return NO_CONTENT
        try:
            return json.loads(text)
        except ValueError as e:
            raise ResponseFormatError(
                f"Invalid JSON from {_path(url)}: {e}",
                status=resp.status_code,
                body=text[:ERROR_BODY_LIMIT],
            ) from e


def _path(url):
    """URL without scheme and host, for log lines."""
    rest = url.split("://", 1)[-1]
    return "/" + rest.split("/", 1)[1] if "/" in rest else url
