#!/usr/bin/env python3
"""
Entry point for running the Page Flattener web UI.

Usage:
    python -m page_flattener.web.run --host 0.0.0.0 --port 4000
"""

import argparse
import os

from page_flattener.utils.constants import DEFAULT_HOST, DEFAULT_PORT
from page_flattener.utils.log import print_info
from page_flattener.web.app import run_app


def main(argv=None):
    """Parse arguments and run the web application."""
    parser = argparse.ArgumentParser(
        description='Run the Page Flattener web UI'
    )
    parser.add_argument(
        '--host',
        default=DEFAULT_HOST,
        help=f'Host to bind to (default: {DEFAULT_HOST})'
    )
    parser.add_argument(
        '--port', '-p',
        type=int,
        default=int(os.environ.get('PORT') or DEFAULT_PORT),
        help=f'Port to listen on (default: $PORT or {DEFAULT_PORT})'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug mode'
    )

    args = parser.parse_args(argv)

    print_info(f"Listening at http://{args.host}:{args.port}")
    run_app(host=args.host, port=args.port, debug=args.debug)


if __name__ == '__main__':
    main()
