#!/usr/bin/env python3
"""Publish events read from stdin and print what subscribers receive.

Each input line is ``<key> [payload]``; the payload is parsed as JSON when
possible, otherwise passed through as a string. Useful for poking at
subscription behaviour by hand::

    printf 'foo 1\nbar "x"\nfoo 2\n' | python scripts/run_events.py --watch foo --once
"""

import argparse
import json
import logging
import sys
import time

from emitron.base import WILDCARD
from emitron.bus import create
from emitron.cancel import CancelSource


def parse_line(line: str) -> tuple[str, object]:
    key, _, raw = line.strip().partition(" ")
    if not raw:
        return key, None
    try:
        return key, json.loads(raw)
    except json.JSONDecodeError:
        return key, raw


def main():
    ap = argparse.ArgumentParser(description="Publish stdin lines as events")
    ap.add_argument("--watch", action="append", default=[],
                    help="Key to subscribe to (repeatable, default: all keys)")
    ap.add_argument("--once", action="store_true",
                    help="Deliver only the first matching event")
    ap.add_argument("--stop-on", metavar="KEY",
                    help="Cancel the subscription when KEY is published")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    bus = create()
    source = CancelSource()

    def print_event(payload, key) -> None:
        print(f"  [{time.strftime('%H:%M:%S')}] {key}: {payload!r}")

    keys = args.watch or [WILDCARD]
    bus.subscribe_many(keys, print_event, signal=source.token, once=args.once)
    if args.stop_on:
        bus.subscribe(args.stop_on, lambda payload, key: source.cancel(), once=True)

    published = 0
    for line in sys.stdin:
        if not line.strip():
            continue
        key, payload = parse_line(line)
        bus.publish(key, payload)
        published += 1

    print(f"Published {published} event(s).")


if __name__ == "__main__":
    main()
