"""Crawl state - FIFO frontier, visited set and email accumulator."""

from collections import deque
from typing import Iterable

from .url_resolver import is_same_host, normalize_url


class Frontier:
    """URLs waiting to be fetched, popped in insertion order.

    A deque keeps breadth-first order; a parallel set gives O(1)
    membership checks so each URL is queued at most once.
    """

    def __init__(self) -> None:
        self._queue: deque[str] = deque()
        self._members: set[str] = set()

    def push(self, url: str) -> bool:
        """Queue a URL. Returns False if it is already queued."""
        if url in self._members:
            return False
        self._queue.append(url)
        self._members.add(url)
        return True

    def pop(self) -> str:
        """Remove and return the oldest URL. Raises IndexError when empty."""
        url = self._queue.popleft()
        self._members.discard(url)
        return url

    def __contains__(self, url: object) -> bool:
        return url in self._members

    def __len__(self) -> int:
        return len(self._queue)

    def __iter__(self):
        return iter(self._queue)


class CrawlState:
    """Everything one crawl owns: frontier, visited URLs and found emails.

    Invariants:
        - frontier and visited never share a URL
        - len(visited) never exceeds max_pages
        - every queued URL has the initial URL's host
        - a visited URL is never queued again
    """

    def __init__(self, initial_url: str, max_pages: int):
        self.initial_url = normalize_url(initial_url)
        self.max_pages = max_pages
        self.frontier = Frontier()
        self.visited: set[str] = set()
        self.emails: set[str] = set()

        self.frontier.push(self.initial_url)

    def has_next(self) -> bool:
        """True while the page ceiling is not reached and URLs remain."""
        return len(self.visited) < self.max_pages and len(self.frontier) > 0

    def next_url(self) -> str:
        """Pop the next URL and mark it visited."""
        url = self.frontier.pop()
        self.visited.add(url)
        return url

    def merge_urls(self, urls: Iterable[str]) -> list[str]:
        """Queue same-host URLs that are neither visited nor already queued.

        Args:
            urls: Candidate URLs in normal form.

        Returns:
            The URLs actually added, in the order they were queued.
        """
        added = []
        for url in urls:
            if not is_same_host(url, self.initial_url):
                continue
            if url in self.visited:
                continue
            if self.frontier.push(url):
                added.append(url)
        return added

    def merge_emails(self, emails: Iterable[str]) -> None:
        self.emails.update(emails)
