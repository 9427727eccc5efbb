"""
Account runner: one sequential pass over all private keys.

Every key gets its own login and operation inside a try/except, so a key
that fails at any stage never affects the keys after it.
"""

from .auth import login
from .config import log
from .events import EventSink
from .exceptions import CheckinError
from .models import AccountOutcome, CheckinResult
from .wallet import Wallet, mask_address


def account_label(index, private_key, wallet_factory=Wallet):
    """Masked address, or a positional label when the key is unusable."""
    try:
        return mask_address(wallet_factory(private_key).address)
    except CheckinError:
        return f"account #{index}"


# ─── Operations (session → result) ───────────────────────────────

def points_operation(session, api, sink):
    snapshot = api.get_points(session)
    sink.info(f"idOS Points: {snapshot.total_points} PTS")
    log.info("Points | %s | %d", mask_address(session.identity), snapshot.total_points)
    return snapshot


def checkin_operation(session, api, sink):
    """Report points, then claim the daily check-in."""
    points_operation(session, api, sink)
    result = api.daily_check(session)
    if result is CheckinResult.ALREADY_CLAIMED:
        sink.warn("Daily check-in: already claimed.")
    else:
        sink.success("Daily check-in: claimed.")
    log.info("Check-in | %s | %s", mask_address(session.identity), result.value)
    return result


# ─── Pass ────────────────────────────────────────────────────────

def run_once(credentials, operation, api, sink=None, login_fn=login, wallet_factory=Wallet):
    """Apply ``operation`` to each credential in order. Returns one outcome per key."""
    sink = sink or EventSink()
    outcomes = []

    for index, private_key in enumerate(credentials, start=1):
        label = account_label(index, private_key, wallet_factory)
        sink.section(label)
        try:
            session = login_fn(private_key, api, wallet_factory=wallet_factory)
            sink.success("Login success.")
            result = operation(session, api, sink)
            outcomes.append(AccountOutcome(index=index, label=label, result=result))
        except Exception as e:
            log.error("Account %s failed: %s", label, e,
                      exc_info=not isinstance(e, CheckinError))
            sink.error(str(e) or type(e).__name__)
            outcomes.append(AccountOutcome(index=index, label=label, error=e))

    return outcomes


def run_checkin_pass(credentials, api, sink=None, **kwargs):
    sink = sink or EventSink()
    sink.action(f"Loaded {len(credentials)} account(s)")
    outcomes = run_once(credentials, checkin_operation, api, sink, **kwargs)
    sink.section()
    sink.success("Run completed for all accounts.")
    _log_summary("Check-in", outcomes)
    return outcomes


def run_points_pass(credentials, api, sink=None, **kwargs):
    sink = sink or EventSink()
    sink.action(f"Loaded {len(credentials)} account(s)")
    outcomes = run_once(credentials, points_operation, api, sink, **kwargs)
    sink.section("POINTS")
    sink.success("Refresh points completed.")
    _log_summary("Points", outcomes)
    return outcomes


def _log_summary(kind, outcomes):
    failed = sum(1 for o in outcomes if not o.ok)
    log.info("%s pass done | accounts=%d | failed=%d", kind, len(outcomes), failed)
