"""Request context consumed by navigation items.

The hosting environment supplies the current request path and URI, and
decides whether a URL points at the page being served.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol
from urllib.parse import urlsplit

if TYPE_CHECKING:
    from aiohttp import web


class RequestContext(Protocol):
    """What navigation items need to know about the current request."""

    @property
    def request_path(self) -> str:
        """Path of the current request without query string."""
        ...

    @property
    def request_uri(self) -> str:
        """Path of the current request including query string."""
        ...

    def is_current_page(self, url: str | None) -> bool:
        """Return True if ``url`` points at the current page."""
        ...


class PathRequestContext:
    """RequestContext backed by a plain path, query string and host.

    A URL is the current page when its path equals the request path,
    ignoring a trailing slash. URLs carrying a query string are compared
    against the full request URI instead. Absolute URLs must also match
    the host when one is known.
    """

    __slots__ = ("_host", "_path", "_query_string")

    def __init__(self, path: str = "/", query_string: str = "", host: str | None = None) -> None:
        self._path = path or "/"
        self._query_string = query_string
        self._host = host

    @classmethod
    def from_uri(cls, uri: str, host: str | None = None) -> PathRequestContext:
        """Create context from a request URI such as ``/docs?page=2``.

        Absolute URLs also provide the host. Anything else is taken as a
        path, so ``//about`` stays a path rather than naming a host.
        """
        if "://" in uri:
            parts = urlsplit(uri)
            return cls(parts.path or "/", parts.query, host or parts.netloc or None)

        path, _, query = uri.partition("#")[0].partition("?")
        return cls(path or "/", query, host)

    @classmethod
    def from_aiohttp(cls, request: web.Request) -> PathRequestContext:
        """Create context from an aiohttp request."""
        return cls(request.path, request.query_string, request.host)

    @property
    def request_path(self) -> str:
        return self._path

    @property
    def request_uri(self) -> str:
        if self._query_string:
            return f"{self._path}?{self._query_string}"
        return self._path

    @property
    def host(self) -> str | None:
        return self._host

    def is_current_page(self, url: str | None) -> bool:
        if not url:
            return False

        parts = urlsplit(url)
        if parts.netloc and self._host is not None and parts.netloc != self._host:
            return False

        path = parts.path or "/"
        if parts.query:
            return f"{path}?{parts.query}" == self.request_uri

        return _strip_trailing_slash(path) == _strip_trailing_slash(self._path)

    def __repr__(self) -> str:
        return f"PathRequestContext({self.request_uri!r}, host={self._host!r})"


def _strip_trailing_slash(path: str) -> str:
    """Remove trailing slash except for the root path."""
    return path.rstrip("/") or "/"
