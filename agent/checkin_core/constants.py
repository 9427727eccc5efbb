"""
Constants: version, service endpoints, timing, identity pool, theme colors.
"""

AGENT_VERSION = "1.0.0"

# ─── Service ─────────────────────────────────────────────────────
BASE_API = "https://app.idos.network/api"
SITE_ORIGIN = "https://app.idos.network"
WALLET_TYPE = "evm"
DAILY_QUEST_NAME = "daily_check"

# ─── Timing ──────────────────────────────────────────────────────
CHECKIN_INTERVAL_SEC = 24 * 60 * 60   # One pass per day
WAIT_POLL_SEC = 0.1                    # Stop-signal poll during the wait
API_TIMEOUT_SEC = 60                   # Hard per-attempt timeout
API_RETRIES = 3                        # Attempts per request (not re-tries after the first)
API_RETRY_DELAY_SEC = 1.2              # Fixed delay between attempts
ERROR_BODY_LIMIT = 200                 # Chars of response body kept for diagnostics

# Gateway status the check-in endpoint returns when today's quest is
# already completed. Not documented by the service; observed behaviour.
ALREADY_CLAIMED_STATUS = 502

# ─── Request identity pool ───────────────────────────────────────
USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/122 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_5) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/16 Safari/605.1.15",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:120.0) Gecko/20100101 Firefox/120.0",
)

# ─── Console theme ───────────────────────────────────────────────
THEME = {
    "primary":   "#00ff00",   # points, menu entries
    "secondary": "#ffff00",   # hints
    "info":      "#3498db",
    "warning":   "#f39c12",
    "error":     "#e74c3c",
    "success":   "#2ecc71",
    "text":      "#ffffff",
    "purple":    "#9b59b6",   # actions
    "cyan":      "#00ffff",   # dividers, spinner
}

SPINNER_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")
