"""Href classification, URL resolution and same-host scope checking."""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import SplitResult, urlsplit, urlunsplit

from .errors import HrefParseError


@dataclass(frozen=True)
class Href:
    """An anchor href value, whitespace-trimmed.

    Examples:
        Href("  #top ").is_fragment_only      -> True
        Href("about/team?x=1").is_path_only   -> True
        Href("https://x.com/a").is_path_only  -> False
        Href("mailto:a@x.com").is_path_only   -> False
    """

    string: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "string", self.string.strip())

    @property
    def is_fragment_only(self) -> bool:
        return self.string.startswith("#")

    @property
    def is_path_only(self) -> bool:
        """True if the href has no scheme, no host and a non-empty path.

        Raises:
            HrefParseError: If the href cannot be split into URL parts.
        """
        parts = _split(self.string)
        return not parts.scheme and not parts.netloc and bool(parts.path)

    def url(self, initial_url: str) -> Optional[str]:
        """Turn the href into a crawlable URL.

        Path-only and query-only hrefs are rebuilt on the initial URL's
        scheme and authority, never on the page they were found on. A
        query-only href (``?page=2``) gets the root path.

        Args:
            initial_url: The seed URL of the crawl.

        Returns:
            URL in normal form, or None for fragment-only hrefs.

        Raises:
            HrefParseError: If the href cannot be split into URL parts.
        """
        if self.is_fragment_only:
            return None

        parts = _split(self.string)

        if not parts.scheme and not parts.netloc and (parts.path or parts.query):
            path = parts.path if parts.path.startswith("/") else "/" + parts.path
            initial = urlsplit(initial_url)
            return _normal_form(SplitResult(
                initial.scheme,
                initial.netloc,
                path,
                parts.query,
                parts.fragment,
            ))

        # Protocol-relative: //host/path
        if parts.netloc and not parts.scheme:
            parts = parts._replace(scheme=urlsplit(initial_url).scheme)

        return _normal_form(parts)


def _split(value: str) -> SplitResult:
    try:
        parts = urlsplit(value)
        # Port is validated lazily by urllib; force it here.
        parts.port
    except ValueError as e:
        raise HrefParseError(value, str(e)) from e
    return parts


def resolve(href: Href, base_url: str, initial_url: str) -> Optional[str]:
    """Resolve an href found on base_url into a URL.

    Hrefs that already carry a host are returned as-is; scoping is left
    to the caller. base_url is accepted for symmetry with the page the
    href came from, but path-only hrefs resolve against initial_url.

    Examples:
        resolve(Href("/foo?q=1#frag"), "http://x.com/bar", "http://x.com")
        -> "http://x.com/foo?q=1#frag"

        resolve(Href("#section"), "http://x.com/bar", "http://x.com")
        -> None

    Args:
        href: The href value from an anchor tag.
        base_url: URL of the page where the href was found.
        initial_url: The seed URL of the crawl.

    Returns:
        URL in normal form, or None if the href is fragment-only or
        cannot be parsed.
    """
    try:
        return href.url(initial_url)
    except HrefParseError:
        return None


def _normal_form(parts: SplitResult) -> str:
    """Lower-case scheme and host, and give an empty path under a host "/".

    Userinfo keeps its case.
    """
    netloc = parts.netloc
    userinfo, at, hostport = netloc.rpartition("@")
    netloc = userinfo + at + hostport.lower()

    path = parts.path
    if netloc and not path:
        path = "/"

    return urlunsplit((parts.scheme.lower(), netloc, path, parts.query, parts.fragment))


def normalize_url(url: str) -> str:
    """Return the string normal form used for URL equality.

    Examples:
        normalize_url("HTTP://X.com")      -> "http://x.com/"
        normalize_url("http://x.com/a?")   -> "http://x.com/a"
    """
    return _normal_form(urlsplit(url.strip()))


def host_of(url: str) -> Optional[str]:
    """Lower-cased hostname of a URL, or None if it has none."""
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def is_same_host(url: str, initial_url: str) -> bool:
    """Check whether url shares the initial URL's host.

    URLs without a host (mailto:, javascript:, bare queries) are never
    in scope.
    """
    host = host_of(url)
    return host is not None and host == host_of(initial_url)
