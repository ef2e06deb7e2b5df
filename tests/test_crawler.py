import pytest

from mailgrabber.config import CrawlConfig
from mailgrabber.crawler import Crawler
from mailgrabber.errors import ParseError, TransportError
from mailgrabber.transport import FetchResult

ROOT = "http://x.com/"


def html_page(body: str) -> str:
    return f"<html><head><title>page</title></head><body>{body}</body></html>"


def run_crawl(transport, max_pages=10, **kwargs):
    crawler = Crawler(CrawlConfig(initial_url=ROOT, max_pages=max_pages, **kwargs), transport=transport)
    return crawler, crawler.run()


def test_crawl_collects_emails_breadth_first(fake_transport) -> None:
    transport = fake_transport({
        ROOT: html_page('<a href="/a">A</a><a href="/b">B</a> sales@x.com'),
        "http://x.com/a": html_page('<a href="/">home</a><a href="/c">C</a> Support@X.com'),
        "http://x.com/b": html_page("no addresses"),
        "http://x.com/c": html_page("jobs@x.com"),
    })

    crawler, emails = run_crawl(transport)

    assert emails == {"sales@x.com", "support@x.com", "jobs@x.com"}
    assert transport.calls == [ROOT, "http://x.com/a", "http://x.com/b", "http://x.com/c"]
    assert crawler.state.visited == set(transport.calls)
    assert len(crawler.state.frontier) == 0


def test_emails_accumulate_across_pages(fake_transport) -> None:
    # Earlier pages' addresses survive later pages that find different ones.
    transport = fake_transport({
        ROOT: html_page('<a href="/a">A</a> first@x.com'),
        "http://x.com/a": html_page("second@x.com"),
    })

    _, emails = run_crawl(transport)

    assert emails == {"first@x.com", "second@x.com"}


def test_ceiling_of_one_visits_only_seed(fake_transport) -> None:
    links = "".join(f'<a href="/p{i}">p{i}</a>' for i in range(50))
    transport = fake_transport({ROOT: html_page(links + " owner@x.com")})

    crawler, emails = run_crawl(transport, max_pages=1)

    assert transport.calls == [ROOT]
    assert emails == {"owner@x.com"}
    assert len(crawler.state.frontier) == 50


def test_zero_ceiling_fetches_nothing(fake_transport) -> None:
    transport = fake_transport({ROOT: html_page("owner@x.com")})

    _, emails = run_crawl(transport, max_pages=0)

    assert transport.calls == []
    assert emails == set()


def test_other_hosts_and_fragments_are_not_crawled(fake_transport) -> None:
    transport = fake_transport({
        ROOT: html_page(
            '<a href="http://other.com/page">out</a>'
            '<a href="#section">anchor</a>'
            '<a href="mailto:boss@x.com">mail</a>'
            '<a href="http://x.com/in">in</a>'
        ),
    })

    crawler, _ = run_crawl(transport)

    assert transport.calls == [ROOT, "http://x.com/in"]
    assert all(url.startswith("http://x.com/") for url in crawler.state.visited)


def test_same_target_from_two_anchors_is_fetched_once(fake_transport) -> None:
    transport = fake_transport({
        ROOT: html_page('<a href="/a">one</a><a href=" /a ">two</a><a href="http://x.com/a">three</a>'),
    })

    run_crawl(transport)

    assert transport.calls == [ROOT, "http://x.com/a"]


def test_relative_links_resolve_against_seed_authority(fake_transport) -> None:
    transport = fake_transport({
        ROOT: html_page('<a href="/docs/page">docs</a>'),
        "http://x.com/docs/page": html_page('<a href="other">other</a>'),
    })

    run_crawl(transport)

    assert transport.calls == [ROOT, "http://x.com/docs/page", "http://x.com/other"]


def test_non_html_response_is_skipped(fake_transport) -> None:
    transport = fake_transport({
        ROOT: html_page('<a href="/file.pdf">pdf</a><a href="/next">next</a>'),
        "http://x.com/file.pdf": FetchResult(
            b'<body><a href="/hidden">h</a> hidden@x.com</body>', "application/pdf", 200
        ),
        "http://x.com/next": FetchResult(b"<body>nobody@x.com</body>", None, 200),
    })

    crawler, emails = run_crawl(transport)

    assert emails == set()
    assert "http://x.com/hidden" not in transport.calls
    assert crawler.state.visited == {ROOT, "http://x.com/file.pdf", "http://x.com/next"}


def test_content_type_prefix_is_case_insensitive(fake_transport) -> None:
    transport = fake_transport({
        ROOT: FetchResult(b"<body>upper@x.com</body>", "TEXT/HTML; charset=UTF-8", 200),
    })

    _, emails = run_crawl(transport)

    assert emails == {"upper@x.com"}


def test_transport_error_aborts_whole_crawl(fake_transport) -> None:
    # Page 1 yields an address, page 2 fails: nothing is returned.
    transport = fake_transport({
        ROOT: html_page('<a href="/a">A</a><a href="/b">B</a> first@x.com'),
        "http://x.com/a": TransportError("http://x.com/a", "connection refused"),
        "http://x.com/b": html_page("third@x.com"),
    })
    crawler = Crawler(CrawlConfig(initial_url=ROOT), transport=transport)

    with pytest.raises(TransportError) as excinfo:
        crawler.run()

    assert excinfo.value.url == "http://x.com/a"
    assert transport.calls == [ROOT, "http://x.com/a"]


def test_invalid_utf8_body_raises_parse_error(fake_transport) -> None:
    transport = fake_transport({
        ROOT: FetchResult(b"<html><body>\xff\xfe caf\xe9</body></html>", "text/html", 200),
    })

    with pytest.raises(ParseError):
        run_crawl(transport)


def test_custom_parser_is_used(fake_transport) -> None:
    transport = fake_transport({ROOT: html_page("a@x.com")})
    seen = []

    def parse(body, url):
        seen.append(url)
        raise ParseError(url, "rejected")

    crawler = Crawler(CrawlConfig(initial_url=ROOT), transport=transport, parse=parse)

    with pytest.raises(ParseError):
        crawler.run()
    assert seen == [ROOT]


def test_progress_goes_to_stderr(fake_transport, capsys) -> None:
    transport = fake_transport({
        ROOT: html_page('<a href="http://other.com/">o</a> a@x.com'),
    })

    run_crawl(transport, verbose=True)

    captured = capsys.readouterr()
    assert captured.out == ""
    assert f"Processing {ROOT}..." in captured.err
    assert "Found 1 emails: a@x.com..." in captured.err
    assert "[OUT-OF-SCOPE] http://other.com/" in captured.err
    assert "Crawl Complete" in captured.err


def test_query_only_links_are_crawled(fake_transport) -> None:
    transport = fake_transport({
        ROOT: html_page('<a href="?page=2">next</a>'),
        "http://x.com/?page=2": html_page("page2@x.com"),
    })

    _, emails = run_crawl(transport)

    assert transport.calls == [ROOT, "http://x.com/?page=2"]
    assert emails == {"page2@x.com"}


def test_seed_without_path_matches_root_link(fake_transport) -> None:
    transport = fake_transport({
        ROOT: html_page('<a href="/">home</a><a href="HTTP://X.COM">again</a><a href="/a">A</a>'),
    })
    crawler = Crawler(CrawlConfig(initial_url="http://x.com"), transport=transport)

    crawler.run()

    assert transport.calls == [ROOT, "http://x.com/a"]
    assert crawler.state.initial_url == ROOT
