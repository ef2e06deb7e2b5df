"""Email address and anchor href extraction from parsed documents."""

import re

from bs4 import BeautifulSoup

from .url_resolver import Href

# local-part starts with a letter; domain needs at least one dot
EMAIL_PATTERN = re.compile(r"[a-zA-Z][a-zA-Z0-9._-]*@[a-zA-Z0-9._-]+\.[a-zA-Z]+")


def extract_emails(soup: BeautifulSoup) -> set[str]:
    """Find email addresses in the rendered text of the document body.

    Text from sibling elements is joined with a space so that
    ``<td>info</td><td>@x.com</td>`` does not read as an address.

    Args:
        soup: Parsed document.

    Returns:
        Lower-cased addresses, or an empty set if there is no <body>.
    """
    body = soup.body
    if body is None:
        return set()

    text = body.get_text(" ")
    return {match.strip().lower() for match in EMAIL_PATTERN.findall(text)}


def extract_links(soup: BeautifulSoup) -> list[Href]:
    """Collect href values from all anchor tags in the document.

    Fragment-only hrefs (``#section``) are dropped here; everything else is
    returned as found, relative or absolute. Duplicates collapse, and the
    first occurrence keeps its document position so the crawl order is
    reproducible.

    Args:
        soup: Parsed document.

    Returns:
        Unique trimmed hrefs in document order.
    """
    hrefs = []
    seen = set()

    for anchor in soup.find_all("a", href=True):
        value = anchor.get("href")
        if not isinstance(value, str):
            continue

        href = Href(value)
        if href.is_fragment_only or href in seen:
            continue

        seen.add(href)
        hrefs.append(href)

    return hrefs
