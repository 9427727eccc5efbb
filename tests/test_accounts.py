import pytest

from checkin_core.accounts import (
    account_label, run_once, run_checkin_pass, run_points_pass,
    checkin_operation, points_operation,
)
from checkin_core.exceptions import AuthVerifyError, HttpStatusError
from checkin_core.models import CheckinResult, Session

from conftest import FakeApi, FakeWallet


def fake_login(fail_keys):
    calls = []

    def login_fn(private_key, api, wallet_factory=None):
        calls.append(private_key)
        if private_key in fail_keys:
            raise AuthVerifyError("Login failed: missing tokens.")
        wallet = wallet_factory(private_key)
        return Session(identity=wallet.address, access_token="a",
                       refresh_token="r", user_id=f"user-{private_key}")

    login_fn.calls = calls
    return login_fn


@pytest.mark.parametrize("failing", [set(), {"k1"}, {"k3"}, {"k2", "k4"}, {"k1", "k2", "k3", "k4"}])
def test_every_account_gets_an_outcome_regardless_of_failures(failing, sink):
    keys = ["k1", "k2", "k3", "k4"]
    api = FakeApi()
    login_fn = fake_login(failing)

    outcomes = run_once(keys, checkin_operation, api, sink,
                        login_fn=login_fn, wallet_factory=FakeWallet)

    assert login_fn.calls == keys
    assert [o.index for o in outcomes] == [1, 2, 3, 4]
    for key, outcome in zip(keys, outcomes):
        if key in failing:
            assert isinstance(outcome.error, AuthVerifyError)
            assert outcome.result is None
        else:
            assert outcome.ok
            assert outcome.result is CheckinResult.CLAIMED
    checked_in = [c[1] for c in api.calls if c[0] == "checkin"]
    assert checked_in == [f"user-{k}" for k in keys if k not in failing]
    assert len(sink.of("error")) == len(failing)


def test_invalid_key_is_reported_by_position(sink):
    outcomes = run_once(["k1", "bad-key", "k3"], points_operation, FakeApi(), sink,
                        login_fn=fake_login(set()), wallet_factory=FakeWallet)

    assert [o.ok for o in outcomes] == [True, False, True]
    assert outcomes[1].label == "account #2"
    assert "bad-key" not in " ".join(m for _, m in sink.events)


def test_operation_error_after_login_is_isolated(sink):
    api = FakeApi(checkin=HttpStatusError("HTTP 500 — oops", status=500))

    outcomes = run_once(["k1", "k2"], checkin_operation, api, sink,
                        login_fn=fake_login(set()), wallet_factory=FakeWallet)

    assert all(isinstance(o.error, HttpStatusError) for o in outcomes)
    assert sink.of("error") == ["HTTP 500 — oops", "HTTP 500 — oops"]


def test_unexpected_exception_is_isolated_too(sink):
    def exploding(session, api, sink):
        raise RuntimeError("boom")

    outcomes = run_once(["k1", "k2"], exploding, FakeApi(), sink,
                        login_fn=fake_login(set()), wallet_factory=FakeWallet)

    assert [type(o.error) for o in outcomes] == [RuntimeError, RuntimeError]


def test_account_label_masks_address():
    label = account_label(1, "0x" + "ab" * 32, wallet_factory=FakeWallet)
    assert label.startswith("0xabab") and "…" in label


def test_checkin_operation_reports_points_then_claim(sink):
    api = FakeApi(points=99, checkin=CheckinResult.ALREADY_CLAIMED)
    session = Session(identity="0x" + "1" * 40, access_token="a", refresh_token="r", user_id="u")

    result = checkin_operation(session, api, sink)

    assert result is CheckinResult.ALREADY_CLAIMED
    assert [c[0] for c in api.calls] == ["points", "checkin"]
    assert sink.of("info") == ["idOS Points: 99 PTS"]
    assert sink.of("warn") == ["Daily check-in: already claimed."]


def test_checkin_pass_emits_markers(sink):
    outcomes = run_checkin_pass(["k1"], FakeApi(), sink,
                                login_fn=fake_login(set()), wallet_factory=FakeWallet)

    assert len(outcomes) == 1
    assert sink.events[0] == ("action", "Loaded 1 account(s)")
    assert sink.events[-2] == ("section", "")
    assert sink.events[-1] == ("success", "Run completed for all accounts.")
    assert ("success", "Daily check-in: claimed.") in sink.events


def test_points_pass_does_not_check_in(sink):
    api = FakeApi()
    run_points_pass(["k1", "k2"], api, sink, login_fn=fake_login(set()), wallet_factory=FakeWallet)

    assert all(c[0] == "points" for c in api.calls)
    assert sink.events[-1] == ("success", "Refresh points completed.")
    assert ("section", "POINTS") in sink.events
