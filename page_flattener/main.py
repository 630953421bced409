#!/usr/bin/env python3
"""
Page Flattener - turn a web page into one self-contained HTML document.

Fetches the page, downloads every external script and stylesheet it
references, and inlines them so the result makes no outbound resource
requests.

Usage:
    python -m page_flattener.main --url https://example.com --output page.html
"""

import argparse
import asyncio
import logging
import os
import sys

from page_flattener.config import FlattenConfig
from page_flattener.flatten import FlattenError, PageRenderer
from page_flattener.utils.log import (
    set_level,
    setup_logger,
    print_status,
    print_success,
    print_error,
    print_info,
    print_warning,
)
from page_flattener.utils.paths import ensure_parent_dir, resolve_output_path


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        Parsed arguments namespace
    """
    defaults = FlattenConfig()

    parser = argparse.ArgumentParser(
        prog='page-flattener',
        description='Inline the scripts and stylesheets of a web page',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s --url https://example.com > example.html
    %(prog)s --url https://example.com --output ./pages/
    %(prog)s --url example.com -o page.html --concurrency 4 --timeout 10
        """
    )

    parser.add_argument(
        '--url', '-u',
        type=str,
        required=True,
        help='URL of the page to flatten (e.g., https://example.com)'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        default=None,
        help='Output file or directory (default: write to stdout)'
    )

    parser.add_argument(
        '--concurrency', '-c',
        type=int,
        default=defaults.max_concurrency,
        help=f'Maximum concurrent resource downloads (default: {defaults.max_concurrency})'
    )

    parser.add_argument(
        '--timeout',
        type=float,
        default=defaults.timeout,
        help=f'Per-request timeout in seconds (default: {defaults.timeout})'
    )

    parser.add_argument(
        '--no-annotate',
        action='store_true',
        help='Do not prefix inlined content with a comment naming its source'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    parser.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress output except errors'
    )

    return parser.parse_args(argv)


def print_summary(result) -> None:
    """
    Print the flatten summary.

    Args:
        result: FlattenResult object
    """
    summary = result.summary()
    print_status("=" * 60, "dim")
    print_success("FLATTEN SUMMARY")
    print_status(f"  Page:        {result.base_url}", "white")
    print_status(f"  References:  {summary['discovered']}", "white")
    print_status(f"  Inlined:     {summary['inlined']}", "white")
    print_status(f"  Failed:      {summary['failed']}", "white")

    for reference in result.failed:
        print_warning(f"{reference.raw}: {reference.error}")

    print_status("=" * 60, "dim")


async def main(argv=None) -> int:
    """
    Main entry point for the page flattener.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_arguments(argv)

    # Set up logging
    log_level = logging.DEBUG if args.verbose else (logging.WARNING if args.quiet else logging.INFO)
    setup_logger(level=log_level)
    set_level(log_level)

    try:
        config = FlattenConfig.from_env().with_overrides(
            max_concurrency=args.concurrency,
            timeout=args.timeout,
            annotate_source=not args.no_annotate
        )

        if not args.quiet:
            print_info(f"Target URL: {args.url}")

        result = await PageRenderer(config).render(args.url)
        html = result.html

        if args.output:
            path = resolve_output_path(args.output, args.url)
            ensure_parent_dir(path)
            with open(path, 'w', encoding='utf-8') as f:
                f.write(html)
        else:
            sys.stdout.write(html)
            sys.stdout.flush()

        if not args.quiet:
            print_summary(result)
            if args.output:
                print_success(f"Page written to: {os.path.abspath(path)}")

        return 0

    except KeyboardInterrupt:
        print_error("Interrupted by user")
        return 1
    except ValueError as e:
        print_error(f"Invalid input: {e}")
        return 1
    except FlattenError as e:
        print_error(str(e))
        return 1
    except OSError as e:
        print_error(f"Cannot write output: {e}")
        return 1


def run() -> None:
    """Entry point wrapper for running as module."""
    sys.exit(asyncio.run(main()))


if __name__ == '__main__':
    run()
