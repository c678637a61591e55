#!/usr/bin/env python3
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''

import sys
import pathlib
import argparse

# Put this folder on sys.path so `import app`, `import core` work when run from a checkout.
sys.path.insert(0, str(pathlib.Path(__file__).resolve().parent))

from core.browser import DEFAULT_START_URL

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="BasketPad shopping list application")
    parser.add_argument(
        "--verbosity",
        type=int, default=0,
        help="Set verbosity level (0=quiet, 1=normal, 2=verbose, 3+=debug)"
    )
    parser.add_argument(
        "--stdexp",
        action="store_true",
        help="Use standard exception handling to stdout / stderr."
    )
    parser.add_argument(
        "--data-file",
        default=None,
        help="List file to use instead of tasks.json in the per-user data folder."
    )
    parser.add_argument(
        "--start-url",
        default=DEFAULT_START_URL,
        help=f"Page the browser opens on launch (default: {DEFAULT_START_URL})."
    )
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Do not launch the shopping browser at startup."
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write the in-memory log to this file on exit."
    )
    return parser

def run(argv=None) -> int:
    args = build_parser().parse_args(argv)

    from app import main
    return main(
        verbosity=args.verbosity,
        stdexp=args.stdexp,
        data_file=args.data_file,
        start_url=args.start_url,
        use_browser=not args.no_browser,
        log_file=args.log_file,
    )

if __name__ == "__main__":
    sys.exit(run())
