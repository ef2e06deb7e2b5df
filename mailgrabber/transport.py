"""HTTP transport - GET requests through a shared session, retry logic."""

import sys
import time
from dataclasses import dataclass
from typing import Optional

import requests

from .config import CrawlConfig
from .errors import TransportError


@dataclass(frozen=True)
class FetchResult:
    """Body and declared content type of a fetched URL."""

    body: bytes
    content_type: Optional[str]
    status_code: int

    @property
    def is_html(self) -> bool:
        return (self.content_type or "").lower().startswith("text/html")


class HttpTransport:
    """Fetches pages with requests.

    Only the User-Agent header is customised. Redirects and status codes
    are left to requests: a 404 page that declares text/html is returned
    like any other page.
    """

    def __init__(self, config: CrawlConfig):
        self.config = config
        self.session = requests.Session()
        self.session.headers["User-Agent"] = config.user_agent

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def fetch(self, url: str) -> FetchResult:
        """GET a URL, retrying connection errors and timeouts.

        With config.retries == 0 (the default) the first failure raises.

        Args:
            url: Absolute URL to fetch.

        Returns:
            FetchResult with the raw body and Content-Type header.

        Raises:
            TransportError: If the request fails after all attempts.
        """
        attempts = max(0, self.config.retries) + 1
        backoff = 1.0

        for attempt in range(1, attempts + 1):
            try:
                response = self.session.get(url, timeout=self.config.timeout)
                return FetchResult(
                    body=response.content,
                    content_type=response.headers.get("Content-Type"),
                    status_code=response.status_code,
                )

            except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
                if attempt < attempts:
                    print(f"  [RETRY] {type(e).__name__}. Attempt {attempt}/{attempts} in {backoff:.0f}s...",
                          file=sys.stderr, flush=True)
                    time.sleep(backoff)
                    backoff *= 2
                    continue
                raise TransportError(url, str(e)) from e

            except requests.exceptions.RequestException as e:
                raise TransportError(url, str(e)) from e

        raise TransportError(url, "no attempts made")
