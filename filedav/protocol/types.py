"""
Core protocol types for the Sans-I/O WebDAV implementation.

These dataclasses represent HTTP requests and parsed multistatus
responses at the protocol level, independent of any I/O implementation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DAVMethod(Enum):
    """WebDAV HTTP methods."""

    GET = "GET"
    PUT = "PUT"
    DELETE = "DELETE"
    PROPFIND = "PROPFIND"
    PROPPATCH = "PROPPATCH"
    MKCOL = "MKCOL"
    OPTIONS = "OPTIONS"
    MOVE = "MOVE"
    COPY = "COPY"


@dataclass(frozen=True)
class DAVRequest:
    """
    Represents an HTTP request to be made.

    This is a pure data structure with no I/O. It describes what request
    should be made, but does not make it.

    Attributes:
        method: HTTP method (GET, PUT, PROPFIND, etc.)
        url: Full URL for the request
        headers: HTTP headers as dict
        body: Request body.  Bytes for XML bodies, but for PUT it may
            also be a file-like object or an iterator of bytes, to be
            streamed by the transport.
        stream: True if the response body should not be read up front
    """

    method: DAVMethod
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    stream: bool = False


@dataclass
class PropStatGroup:
    """
    One DAV:propstat element: a set of properties sharing one status.

    Attributes:
        status: HTTP status code for the properties (200, 404, ...)
        properties: Dict of property tag in Clark notation -> lxml element
    """

    status: int
    properties: dict[str, Any] = field(default_factory=dict)


@dataclass
class MultistatusEntry:
    """
    One DAV:response element from a multistatus body.

    Attributes:
        href: URL-decoded path of the resource
        propstats: The propstat groups, in document order
        status: Response-level status, if the server gave one
    """

    href: str
    propstats: list[PropStatGroup] = field(default_factory=list)
    status: int | None = None


@dataclass
class MultistatusResponse:
    """
    Parsed 207 Multi-Status response.

    Attributes:
        responses: List of individual response entries, in document order
        description: DAV:responsedescription, if given
    """

    responses: list[MultistatusEntry] = field(default_factory=list)
    description: str | None = None
