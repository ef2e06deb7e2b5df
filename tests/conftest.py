import pytest

from mailgrabber.transport import FetchResult


class FakeTransport:
    """In-memory stand-in for HttpTransport.

    pages maps URL -> HTML string, FetchResult, or an exception to raise.
    Unknown URLs answer with an empty 404 HTML page.
    """

    def __init__(self, pages):
        self.pages = pages
        self.calls = []

    def fetch(self, url):
        self.calls.append(url)
        page = self.pages.get(url)
        if page is None:
            return FetchResult(b"<html><body></body></html>", "text/html", 404)
        if isinstance(page, Exception):
            raise page
        if isinstance(page, FetchResult):
            return page
        return FetchResult(page.encode("utf-8"), "text/html; charset=utf-8", 200)


@pytest.fixture
def fake_transport():
    return FakeTransport
