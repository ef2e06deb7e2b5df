"""Configuration dataclass for MailGrabber."""

from dataclasses import dataclass


@dataclass
class CrawlConfig:
    """Configuration for a crawl session."""

    initial_url: str
    max_pages: int = 10  # page-count ceiling; 0 visits nothing
    timeout: int = 30
    retries: int = 0  # extra attempts on connection errors/timeouts
    verbose: bool = False
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:122.0) "
        "Gecko/20100101 Firefox/122.0"
    )
