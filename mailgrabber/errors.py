"""Exceptions raised while crawling."""


class MailGrabberError(Exception):
    """Base class for all MailGrabber errors."""


class TransportError(MailGrabberError):
    """A page could not be fetched. Aborts the crawl."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class ParseError(MailGrabberError):
    """A fetched body is not UTF-8 or the HTML parser rejected it. Aborts the crawl."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to parse {url}: {reason}")
        self.url = url
        self.reason = reason


class HrefParseError(MailGrabberError):
    """A single href could not be split into URL parts.

    Only raised inside the URL resolver, which drops the href.
    """

    def __init__(self, href: str, reason: str):
        super().__init__(f"Unparseable href {href!r}: {reason}")
        self.href = href
        self.reason = reason
