"""CLI entry point for MailGrabber.

Usage:
    python -m mailgrabber URL [--maximum-url-count N] [options]
"""

import argparse
import json
import sys
from urllib.parse import urlsplit

from .config import CrawlConfig
from .crawler import Crawler
from .errors import MailGrabberError


def parse_args(argv: list[str] | None = None) -> CrawlConfig:
    """Parse command-line arguments into a CrawlConfig.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Populated CrawlConfig instance.
    """
    parser = argparse.ArgumentParser(
        prog="mailgrabber",
        description="MailGrabber - Collect email addresses from the pages of a single website.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Crawl up to 10 pages (default) and print the addresses as JSON
  python -m mailgrabber "https://example.com"

  # Visit at most 50 pages, with progress details on stderr
  python -m mailgrabber "https://example.com/contact" --maximum-url-count 50 --verbose
        """,
    )

    parser.add_argument(
        "url",
        help="URL to start crawling from. Only links on the same host are followed.",
    )

    parser.add_argument(
        "--maximum-url-count",
        "--max-pages",
        dest="max_pages",
        type=int,
        default=10,
        help="Maximum number of URLs to crawl (default: 10)",
    )

    parser.add_argument(
        "--timeout",
        type=int,
        default=30,
        help="Request timeout in seconds (default: 30)",
    )

    parser.add_argument(
        "--retries",
        type=int,
        default=0,
        help="Retry a page this many times on connection errors or timeouts "
             "before giving up (default: 0)",
    )

    parser.add_argument(
        "--user-agent",
        default=None,
        help="User-Agent header to send (default: a desktop Firefox string)",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Enable verbose logging (shows skipped content types, out-of-scope URLs, a summary)",
    )

    args = parser.parse_args(argv)

    parts = urlsplit(args.url)
    if parts.scheme not in ("http", "https") or not parts.hostname:
        parser.error(f"not an absolute http(s) URL: {args.url!r}")

    config = CrawlConfig(
        initial_url=args.url,
        max_pages=args.max_pages,
        timeout=args.timeout,
        retries=args.retries,
        verbose=args.verbose,
    )
    if args.user_agent:
        config.user_agent = args.user_agent
    return config


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    config = parse_args(argv)
    crawler = Crawler(config)

    try:
        emails = crawler.run()
    except MailGrabberError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\n\n[INTERRUPTED] Crawl stopped by user.", file=sys.stderr)
        sys.exit(1)

    json.dump(sorted(emails), sys.stdout, indent=2)
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
