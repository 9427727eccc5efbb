"""
checkin_core — idOS daily check-in agent
========================================
Architecture: menu on the main thread, repeating pass on one worker thread.

  constants.py    → Version, endpoints, timing, user agents, theme
  config.py       → Paths, logging, settings, private key loading
  exceptions.py   → Error taxonomy (HTTP, auth, schedule)
  wallet.py       → eth_account signer adapter + address masking
  http_client.py  → HTTP session + fixed-delay retry loop
  api.py          → idOS endpoints (auth, points, daily check-in)
  auth.py         → Login handshake → Session
  models.py       → Session, PointsSnapshot, CheckinResult, AccountOutcome
  accounts.py     → Sequential per-account pass with failure isolation
  state.py        → LoopState (lock + stop Event)
  scheduler.py    → Interruptible wait + repeating loop worker
  events.py       → EventSink interface
  console.py      → rich rendering of events and countdown
  menu.py         → CommandLoop (interactive menu)
  app.py          → CheckinApp wiring
  runner.py       → main() + exit codes
"""
