"""
Paths, logging setup, settings load, private key loading.
"""

import os
import re
import sys
import json
import logging
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .constants import (
    BASE_API, CHECKIN_INTERVAL_SEC, API_RETRIES, API_RETRY_DELAY_SEC,
    API_TIMEOUT_SEC, WAIT_POLL_SEC,
)
from .exceptions import NoCredentialsError


# ─── Paths ───────────────────────────────────────────────────────
# CHECKIN_HOME moves the config/log folder; default is the agent/ directory.

BASE_DIR = Path(os.environ.get("CHECKIN_HOME") or Path(__file__).parent.parent)

CONFIG_FILE = BASE_DIR / "config.json"
LOG_FILE = BASE_DIR / "checkin.log"
ENV_FILE = BASE_DIR / ".env"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_MAX_BYTES = 1_000_000

log = logging.getLogger("checkin")


# ─── Logging ─────────────────────────────────────────────────────

def setup_logging(verbose=False, log_file=None):
    """File log always; stdout only when verbose (the console shows the rest)."""
    log_file = Path(log_file or LOG_FILE)
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        if log_file.exists() and log_file.stat().st_size > LOG_MAX_BYTES:
            log_file.write_text("")
    except OSError:
        pass

    log.setLevel(logging.DEBUG if verbose else logging.INFO)
    log.propagate = False
    for handler in list(log.handlers):
        log.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)
    try:
        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setFormatter(formatter)
        log.addHandler(file_handler)
    except OSError as e:
        sys.stderr.write(f"Cannot open log file {log_file}: {e}\n")

    if verbose:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        log.addHandler(console_handler)
    return log


# ─── Settings ────────────────────────────────────────────────────

@dataclass
class Settings:
    base_url: str = BASE_API
    interval_sec: float = CHECKIN_INTERVAL_SEC
    retries: int = API_RETRIES
    retry_delay_sec: float = API_RETRY_DELAY_SEC
    timeout_sec: float = API_TIMEOUT_SEC
    poll_interval_sec: float = WAIT_POLL_SEC


# (config.json key, env var, Settings field, type, scale to Settings unit)
_OVERRIDES = (
    ("baseUrl", "CHECKIN_BASE_URL", "base_url", str, None),
    ("intervalHours", "CHECKIN_INTERVAL_HOURS", "interval_sec", float, 3600),
    ("retries", "CHECKIN_RETRIES", "retries", int, None),
    ("retryDelaySec", "CHECKIN_RETRY_DELAY_SEC", "retry_delay_sec", float, None),
    ("timeoutSec", "CHECKIN_TIMEOUT_SEC", "timeout_sec", float, None),
    ("pollIntervalSec", "CHECKIN_POLL_INTERVAL_SEC", "poll_interval_sec", float, None),
)


def load_config(path=None):
    """Load config.json. Returns dict or None."""
    path = Path(path or CONFIG_FILE)
    if path.exists():
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return data if isinstance(data, dict) else None
        except (json.JSONDecodeError, IOError):
            log.warning("Ignoring unreadable config file %s", path)
            return None
    return None


def load_settings(config=None, environ=None):
    """Defaults, then config.json values, then environment variables."""
    config = config or {}
    environ = os.environ if environ is None else environ
    settings = Settings()

    for key, env_name, field_name, cast, scale in _OVERRIDES:
        for source, raw in (("config", config.get(key)), ("env", environ.get(env_name))):
            if raw is None or raw == "":
                continue
            try:
                value = cast(raw)
            except (TypeError, ValueError):
                log.warning("Invalid %s value for %s: %r, keeping %r",
                            source, key, raw, getattr(settings, field_name))
                continue
            if cast is not str and value <= 0:
                log.warning("Non-positive %s value for %s: %r, keeping %r",
                            source, key, raw, getattr(settings, field_name))
                continue
            if scale:
                value = value * scale
            if cast is str:
                value = value.rstrip("/")
            setattr(settings, field_name, value)
    return settings


# ─── Private keys ────────────────────────────────────────────────

def load_env(env_file=None):
    """Load .env from the working directory, then from the agent home."""
    cwd_env = find_dotenv(usecwd=True)
    if cwd_env:
        load_dotenv(cwd_env, override=False)
    path = Path(env_file or ENV_FILE)
    if path.exists():
        load_dotenv(path, override=False)


def read_private_keys(environ=None):
    """PRIVATE_KEYS (comma/newline separated) wins over PRIVATE_KEY.

    Returns keys in input order with blanks dropped.
    """
    environ = os.environ if environ is None else environ
    multi = environ.get("PRIVATE_KEYS") or ""
    single = (environ.get("PRIVATE_KEY") or "").strip()

    if multi.strip():
        return [k.strip() for k in re.split(r",|\r?\n", multi) if k.strip()]
    if single:
        return [single]
    return []


def require_private_keys(environ=None):
    keys = read_private_keys(environ)
    if not keys:
        raise NoCredentialsError("No private keys found. Set PRIVATE_KEY or PRIVATE_KEYS in .env")
    return keys
