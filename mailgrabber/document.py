"""Decoding and HTML parsing of fetched page bodies."""

from bs4 import BeautifulSoup

from .errors import ParseError


def parse_document(body: bytes, url: str = "") -> BeautifulSoup:
    """Decode a page body as UTF-8 and parse it with lxml.

    Args:
        body: Raw response bytes.
        url: Page URL, used in error messages only.

    Returns:
        Parsed document.

    Raises:
        ParseError: If the body is not valid UTF-8 or cannot be parsed.
    """
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ParseError(url, f"body is not valid UTF-8 ({e.reason} at byte {e.start})") from e

    try:
        return BeautifulSoup(text, "lxml")
    except Exception as e:
        raise ParseError(url, str(e)) from e
