#!/usr/bin/env python
import sys
from typing import Any
from typing import Optional
from typing import Union
from urllib.parse import ParseResult
from urllib.parse import quote
from urllib.parse import SplitResult
from urllib.parse import unquote
from urllib.parse import urlparse

from filedav.lib.python_utilities import to_normal_str

if sys.version_info < (3, 11):
    from typing_extensions import Self
else:
    from typing import Self

## Characters allowed unencoded in a path segment (RFC 3986 pchar),
## except ":" which would make a relative path look like a scheme.
PATH_SAFE_CHARS = "/!$&'()*+,;=@~"


def quote_path(path: str) -> str:
    """
    Percent-encodes a path.  The path is unquoted first, so a path
    that is already encoded will not be encoded twice.
    """
    return quote(unquote(path), safe=PATH_SAFE_CHARS)


class URL:
    """
    Wraps a URL string or a parsed URL.  Used internally; methods of
    the client accept a URL object or a plain string alike.

    The attributes of urllib's ParseResult (scheme, netloc, hostname,
    port, path, query, username, password ...) are available directly
    on the object.  The string is parsed the first time one of them
    is needed.

    A path given to a client method is one of:

    * relative to the DAV root of the client, "docs/report.pdf"
    * absolute on the server, "/remote.php/dav/files/alice/docs/"
    * a full URL on the same server as the DAV root.  Scheme, host
      and port can't differ from what the client was created with.
    """

    def __init__(self, url: Union[str, ParseResult, SplitResult]) -> None:
        if isinstance(url, (ParseResult, SplitResult)):
            self._text: Optional[str] = None
            self._parsed: Optional[Union[ParseResult, SplitResult]] = url
        else:
            self._text = to_normal_str(url)
            self._parsed = None

    @classmethod
    def objectify(cls, url: Union[Self, str, ParseResult, SplitResult]) -> "URL":
        """None and URL objects are passed through, anything else is wrapped"""
        if url is None or isinstance(url, URL):
            return url
        return cls(url)

    def __bool__(self) -> bool:
        return bool(self._text or self._parsed)

    def __getattr__(self, attr: str):
        if "_parsed" not in vars(self):
            raise AttributeError(attr)
        if self._parsed is None:
            self._parsed = urlparse(self._text)
        if hasattr(self._parsed, attr):
            return getattr(self._parsed, attr)
        return getattr(str(self), attr)

    def __str__(self) -> str:
        if self._text is None:
            self._text = self._parsed.geturl()
        return self._text

    def __repr__(self) -> str:
        return "URL(%s)" % str(self)

    def _rebuild(self, **parts: str) -> "URL":
        return URL(urlparse(str(self))._replace(**parts))

    def with_path(self, path: str) -> "URL":
        """Same server and query, another path"""
        return self._rebuild(path=path)

    def is_auth(self) -> bool:
        return self.username is not None

    def unauth(self) -> "URL":
        """
        The URL without user name and password in the netloc.  Double
        slashes in the path are collapsed.
        """
        if not self.is_auth():
            return self
        host = self.hostname
        if ":" in host:
            ## IPv6 literal
            host = "[%s]" % host
        if self.port:
            host = "%s:%s" % (host, self.port)
        return self._rebuild(netloc=host, path=self.path.replace("//", "/"))

    def join(self, path: Any) -> "URL":
        """
        Resolves `path` against this URL, which is taken as the base.

        A relative path is appended to the base path, an absolute path
        replaces it.  A full URL is only accepted if scheme, host and
        port match the base, otherwise ValueError is raised.  The query
        of the base is kept unless `path` brings its own.
        """
        if not path or not str(path):
            return self
        other = URL.objectify(path)
        if (
            (other.scheme and self.scheme and other.scheme != self.scheme)
            or (other.hostname and self.hostname and other.hostname != self.hostname)
            or (other.port and self.port and other.port != self.port)
        ):
            raise ValueError("%s can't be joined with %s" % (self, other))

        if other.path.startswith("/"):
            new_path = other.path
        elif not other.path:
            new_path = self.path
        elif self.path.endswith("/"):
            new_path = self.path + other.path
        else:
            new_path = "%s/%s" % (self.path, other.path)
        return URL(
            ParseResult(
                self.scheme or other.scheme,
                self.netloc or other.netloc,
                new_path,
                other.params,
                other.query or self.query,
                other.fragment,
            )
        )
