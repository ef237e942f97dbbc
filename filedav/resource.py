"""
The DavResource class is the read model for one remote entry, as
found in a PROPFIND multistatus response.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from urllib.parse import unquote


def normalize_path(path: str) -> str:
    """
    URL-decodes a path, collapses double slashes and strips the
    trailing slash (except for the root).
    """
    path = unquote(path or "")
    while "//" in path:
        path = path.replace("//", "/")
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1 and path.endswith("/"):
        path = path[:-1]
    return path


@dataclass
class DavResource:
    """
    One file or directory on the WebDAV server.

    Only properties delivered with status 200 are set.  Properties the
    server reported with another status (typically 404 for a property
    the resource does not have) are found in ``propstat_failures``.

    Attributes:
        href: the URL-decoded path as given by the server
        is_directory: True for collections
        content_length: size in bytes, never set for directories
        content_type: MIME type
        content_language: value of DAV:getcontentlanguage
        display_name: value of DAV:displayname
        etag: the entity tag, including quotes as given by the server
        modified: DAV:getlastmodified
        created: DAV:creationdate
        quota_available_bytes: RFC 4331 quota, when asked for
        quota_used_bytes: RFC 4331 quota, when asked for
        custom_properties: (namespace, name) -> value for all other properties
        propstat_failures: (namespace, name) -> status code
        status: status for the response element itself
    """

    href: str
    is_directory: bool = False
    content_length: int | None = None
    content_type: str | None = None
    content_language: str | None = None
    display_name: str | None = None
    etag: str | None = None
    modified: datetime | None = None
    created: datetime | None = None
    quota_available_bytes: int | None = None
    quota_used_bytes: int | None = None
    custom_properties: dict[tuple[str, str], str] = field(default_factory=dict)
    propstat_failures: dict[tuple[str, str], int] = field(default_factory=dict)
    status: int = 200

    def __post_init__(self) -> None:
        if not self.href:
            raise ValueError("a DavResource needs a non-empty href")
        if self.is_directory is None:
            self.is_directory = False

    @property
    def path(self) -> str:
        """Server-relative, decoded path without trailing slash"""
        return normalize_path(self.href)

    @property
    def name(self) -> str:
        """The last path segment, "" for the server root"""
        return self.path.rsplit("/", 1)[-1]

    def is_self(self, requested_path: str) -> bool:
        """
        True if this resource is the one that was asked for in the
        PROPFIND, as opposed to one of its children.
        """
        return self.path == normalize_path(requested_path)

    def __repr__(self) -> str:
        return "DavResource(%s%s)" % (self.href, " [dir]" if self.is_directory else "")
