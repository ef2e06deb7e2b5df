"""Core crawl engine - FIFO frontier, same-host scoping, email accumulation."""

import sys
from typing import Callable, Optional

from bs4 import BeautifulSoup

from .config import CrawlConfig
from .document import parse_document
from .extractors import extract_emails, extract_links
from .frontier import CrawlState
from .transport import HttpTransport
from .url_resolver import is_same_host, resolve

Parser = Callable[[bytes, str], BeautifulSoup]


def _log(message: str) -> None:
    """Write a progress line to stderr and flush it immediately."""
    print(message, file=sys.stderr)
    sys.stderr.flush()


class Crawler:
    """Breadth-first, single-host crawler that collects email addresses.

    Starting from config.initial_url, pages are fetched one at a time in
    discovery order until config.max_pages pages have been visited or no
    unvisited same-host links remain.

    Fetch and parse failures are not recovered: TransportError and
    ParseError propagate out of run() and nothing collected so far is
    returned. Responses that are not text/html are skipped.

    The transport and parser can be swapped, which is how the tests drive
    the crawler without a network.
    """

    def __init__(
        self,
        config: CrawlConfig,
        transport=None,
        parse: Optional[Parser] = None,
    ):
        self.config = config
        self.transport = transport
        self.parse = parse or parse_document
        self.state: Optional[CrawlState] = None

    def run(self) -> set[str]:
        """Run the crawl and return the lower-cased email addresses found.

        Raises:
            TransportError: If any page cannot be fetched.
            ParseError: If any HTML page cannot be decoded or parsed.
        """
        self.state = CrawlState(self.config.initial_url, self.config.max_pages)

        if self.transport is not None:
            self._crawl(self.transport)
        else:
            with HttpTransport(self.config) as transport:
                self._crawl(transport)

        if self.config.verbose:
            self._print_summary()

        return set(self.state.emails)

    def _crawl(self, transport) -> None:
        state = self.state
        while state.has_next():
            url = state.next_url()
            self._process_url(transport, url)

    def _process_url(self, transport, url: str) -> None:
        """Fetch one page, collect its emails and queue its in-scope links.

        Args:
            transport: Object with a fetch(url) method.
            url: URL popped from the frontier, already marked visited.
        """
        state = self.state
        _log(f"Processing {url}...")

        result = transport.fetch(url)

        if not result.is_html:
            if self.config.verbose:
                _log(f"  [SKIP] Non-HTML content: {result.content_type or '(none)'}")
            return

        soup = self.parse(result.body, url)

        emails = extract_emails(soup)
        if emails:
            _log(f"Found {len(emails)} emails: {', '.join(sorted(emails))}...")
        state.merge_emails(emails)

        hrefs = extract_links(soup)
        if hrefs:
            _log(f"Found {len(hrefs)} anchor hrefs...")

        candidates = []
        for href in hrefs:
            resolved = resolve(href, url, state.initial_url)
            if resolved is not None:
                candidates.append(resolved)

        added = state.merge_urls(candidates)

        if self.config.verbose:
            for candidate in candidates:
                if not is_same_host(candidate, state.initial_url):
                    _log(f"  [OUT-OF-SCOPE] {candidate}")
            if added:
                _log(f"  [LINKS] Queued {len(added)} new URLs (from {len(hrefs)} hrefs)")

    def _print_summary(self) -> None:
        """Print a crawl summary after completion."""
        state = self.state
        _log("")
        _log("=" * 70)
        _log("  Crawl Complete")
        _log(f"  Pages visited: {len(state.visited)} (limit {state.max_pages})")
        _log(f"  URLs left:     {len(state.frontier)}")
        _log(f"  Emails found:  {len(state.emails)}")
        _log("=" * 70)
