"""
Sans-I/O WebDAV protocol implementation.

Requests are built and responses are parsed as pure data
transformations, the DAVClient does the actual I/O.

- types: DAVRequest and the parsed multistatus structures
- xml_builders: PROPFIND and PROPPATCH bodies
- xml_parsers: multistatus bodies to DavResource objects
- operations: WebDAVProtocol, combining builders and parsers

Example usage:

    from filedav.protocol import WebDAVProtocol

    protocol = WebDAVProtocol(base_url="https://cloud.example.com/dav/")
    request = protocol.propfind_request("documents/", depth=1)
    response = your_http_client.execute(request)
    resources = protocol.parse_propfind(response.content, request.url)
"""

from .types import (
    DAVMethod,
    DAVRequest,
    MultistatusEntry,
    MultistatusResponse,
    PropStatGroup,
)
from .xml_builders import (
    build_propfind_body,
    build_proppatch_body,
    prop_key,
)
from .xml_parsers import (
    parse_multistatus,
    parse_propfind_response,
    parse_proppatch_failures,
)
from .operations import WebDAVProtocol

__all__ = [
    "DAVMethod",
    "DAVRequest",
    "MultistatusEntry",
    "MultistatusResponse",
    "PropStatGroup",
    "build_propfind_body",
    "build_proppatch_body",
    "prop_key",
    "parse_multistatus",
    "parse_propfind_response",
    "parse_proppatch_failures",
    "WebDAVProtocol",
]
