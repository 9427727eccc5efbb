"""
idOS Daily Check-in — console agent
===================================
Signs in to app.idos.network with each configured EVM wallet, claims the
daily check-in quest and shows the points balance. Keys are read from
PRIVATE_KEY / PRIVATE_KEYS in .env and never leave this process except as
signatures.

Usage:
    python checkin.py            # interactive menu
    python checkin.py run        # one check-in pass
    python checkin.py loop       # check in every 24h until Ctrl+C
"""

import sys

from checkin_core.runner import main

if __name__ == "__main__":
    sys.exit(main())
