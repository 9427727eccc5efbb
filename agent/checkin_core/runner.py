"""
Entry point: argument parsing, process wiring, exit codes.
"""

import argparse
import os
import signal
from concurrent.futures import TimeoutError as FuturesTimeout

from .constants import AGENT_VERSION
from .config import (
    log, setup_logging, load_env, load_config, load_settings, require_private_keys,
)
from .console import Console
from .app import CheckinApp
from .exceptions import NoCredentialsError
from .menu import CommandLoop


def build_parser():
    parser = argparse.ArgumentParser(
        prog="idos-checkin",
        description="idOS daily check-in and points for one or more EVM wallets.",
    )
    parser.add_argument(
        "command", nargs="?", default="menu",
        choices=("menu", "run", "points", "loop"),
        help="menu (default): interactive; run: check in once; "
             "points: show points once; loop: check in every interval until Ctrl+C",
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="also write log lines to stdout")
    parser.add_argument("--version", action="version", version=f"%(prog)s {AGENT_VERSION}")
    return parser


def _raise_keyboard_interrupt(signum, frame):
    raise KeyboardInterrupt


def run_loop_headless(app):
    """Start the scheduler and block until it ends or Ctrl+C."""
    app.start_loop()
    app.sink.success("Auto Loop Daily Check-in started. Press Ctrl+C to stop.")
    while True:
        try:
            return app.scheduler.wait(timeout=1.0)
        except FuturesTimeout:
            continue


def main(argv=None, console=None, environ=None):
    """Primary entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)
    env = os.environ if environ is None else environ
    verbose = args.verbose or (env.get("CHECKIN_VERBOSE") or "") not in ("", "0")
    setup_logging(verbose=verbose)
    console = console or Console()
    signal.signal(signal.SIGTERM, _raise_keyboard_interrupt)

    app = None
    try:
        load_env()
        keys = require_private_keys(environ)
        settings = load_settings(load_config(), environ)
        log.info("v%s starting | command=%s | accounts=%d | api=%s",
                 AGENT_VERSION, args.command, len(keys), settings.base_url)

        app = CheckinApp(settings, keys, sink=console)
        if args.command == "run":
            app.run_checkin()
        elif args.command == "points":
            app.refresh_points()
        elif args.command == "loop":
            run_loop_headless(app)
        else:
            CommandLoop(app, console).run()
        return 0

    except NoCredentialsError as e:
        log.error("%s", e)
        console.error(str(e))
        return 1
    except KeyboardInterrupt:
        log.info("Stopped by user.")
        return 0
    except Exception as e:
        log.error("Fatal error: %s", e, exc_info=True)
        console.error(str(e) or type(e).__name__)
        return 1
    finally:
        if app is not None:
            app.close()
        console.restore_terminal()
