"""Debug script to poll an Alfen Eve charger outside Home Assistant.

Usage:
    py scripts/poll_charger.py                                  # reads .env file
    py scripts/poll_charger.py <address> <username> <password>  # explicit settings
    py scripts/poll_charger.py <address> <username> <password> --once
    py scripts/poll_charger.py <address> <username> <password> --interval 10

Logs in, reads the properties, logs out and prints every capability that
changed. Repeats every --interval seconds (or ALFEN_INTERVAL, default 30)
until Ctrl+C.
No Home Assistant needed.
"""

import asyncio
import logging
import os
import sys

# ---------------------------------------------------------------------------
# Reuse the alfen package directly
# ---------------------------------------------------------------------------
sys.path.insert(
    0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "custom_components", "alfen_eve")
)

from alfen.const import DEFAULT_REFRESH_RATE, DEFAULT_USERNAME
from alfen.models import DeviceSettings
from alfen.poller import AlfenPoller, PollScheduler
from alfen.sync import MemoryCapabilityStore


def print_result(result):
    if result is None:
        print("    no data")
        return
    print(f"    poll took {result.duration:.2f}s, {len(result.applied)} changed")
    for update in result.applied:
        print(f"      {update.capability_id:24s} {update.value}")


async def main(settings, interval, once):
    store = MemoryCapabilityStore()
    store.add_capability_listener(lambda cap: print(f"    + capability {cap}"))
    scheduler = PollScheduler(
        AlfenPoller(settings, store), interval=interval, on_result=print_result
    )

    print(f"Polling {settings.address} as {settings.username}")
    if once:
        await scheduler.async_poll_once()
        return

    try:
        await scheduler.start()
    finally:
        await scheduler.stop()
        print(f"\nFinal state: {store.snapshot()}")


def parse_args(argv):
    """Split argv into (positionals, interval, once).

    interval is None unless --interval N is given. Raises ValueError for a
    missing, non-numeric or non-positive interval.
    """
    positionals = []
    interval = None
    once = False
    args = iter(argv)
    for arg in args:
        if arg == "--once":
            once = True
        elif arg == "--interval" or arg.startswith("--interval="):
            value = arg.split("=", 1)[1] if "=" in arg else next(args, None)
            if value is None:
                raise ValueError("--interval needs a number of seconds")
            interval = float(value)
            if not interval > 0:
                raise ValueError("--interval must be positive")
        else:
            positionals.append(arg)
    return positionals, interval, once


def load_env(path=".env"):
    """Load key=value pairs from a .env file into os.environ."""
    if not os.path.exists(path):
        return
    with open(path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                k, v = line.split("=", 1)
                os.environ.setdefault(k.strip(), v.strip())


if __name__ == "__main__":
    load_env()
    logging.basicConfig(
        level=logging.DEBUG if os.environ.get("ALFEN_DEBUG") else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        args, interval, once = parse_args(sys.argv[1:])
    except ValueError as err:
        print(f"Invalid arguments: {err}")
        sys.exit(1)

    if len(args) == 3:
        address, user, pw = args
    else:
        address = os.environ.get("ALFEN_ADDRESS", "")
        user = os.environ.get("ALFEN_USERNAME", DEFAULT_USERNAME)
        pw = os.environ.get("ALFEN_PASSWORD", "")

    if not address or not pw:
        print(f"Usage: py {sys.argv[0]} <address> <username> <password> [--interval N] [--once]")
        print("  or set ALFEN_ADDRESS / ALFEN_USERNAME / ALFEN_PASSWORD in .env")
        sys.exit(1)

    if interval is None:
        interval = float(os.environ.get("ALFEN_INTERVAL", DEFAULT_REFRESH_RATE))
    try:
        asyncio.run(main(DeviceSettings(address=address, username=user, password=pw), interval, once))
    except KeyboardInterrupt:
        pass
